"""Managed database + auth access, scoped to the authenticated caller."""

from __future__ import annotations

import copy
import uuid
from datetime import datetime, timezone
from functools import lru_cache
from threading import Lock
from typing import Any, Dict, List, Mapping, Optional

import httpx
from postgrest.exceptions import APIError
from supabase import create_client

from ..domain.errors import AuthenticationError, ConfigurationError, PersistenceError
from ..observability.logging_utils import log_warning
from .config import get_config


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class UserSession:
    """Table access bound to one authenticated user.

    Filters are equality matches on column values. Callers add the
    ``user_id`` filter themselves so ownership stays explicit at each query.
    """

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id

    def select(
        self,
        table: str,
        filters: Mapping[str, Any],
        *,
        columns: str = "*",
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def select_one(
        self, table: str, filters: Mapping[str, Any], *, columns: str = "*"
    ) -> Optional[Dict[str, Any]]:
        rows = self.select(table, filters, columns=columns, limit=1)
        return rows[0] if rows else None

    def insert(self, table: str, row: Mapping[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError

    def update(
        self, table: str, values: Mapping[str, Any], filters: Mapping[str, Any]
    ) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def delete(self, table: str, filters: Mapping[str, Any]) -> int:
        raise NotImplementedError

    def rpc(self, name: str, params: Mapping[str, Any]) -> Any:
        raise NotImplementedError


class PersistenceGateway:
    name = "base"

    def authenticate(self, token: str) -> UserSession:
        raise NotImplementedError


class SupabaseSession(UserSession):
    def __init__(self, user_id: str, client: Any) -> None:
        super().__init__(user_id)
        self._client = client

    def _execute(self, operation: str, table: str, query: Any) -> Any:
        try:
            return query.execute()
        except (APIError, httpx.HTTPError) as exc:
            log_warning(
                "gateway.error", operation=operation, table=table, error=str(exc)
            )
            raise PersistenceError(
                f"Failed to {operation} {table}", detail=str(exc)
            ) from exc

    @staticmethod
    def _apply_filters(query: Any, filters: Mapping[str, Any]) -> Any:
        for column, value in filters.items():
            query = query.eq(column, value)
        return query

    def select(
        self,
        table: str,
        filters: Mapping[str, Any],
        *,
        columns: str = "*",
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        query = self._apply_filters(self._client.table(table).select(columns), filters)
        if order_by:
            query = query.order(order_by, desc=descending)
        if limit is not None:
            query = query.limit(limit)
        response = self._execute("fetch", table, query)
        return list(response.data or [])

    def insert(self, table: str, row: Mapping[str, Any]) -> Dict[str, Any]:
        response = self._execute("save", table, self._client.table(table).insert(dict(row)))
        data = response.data or []
        if not data:
            raise PersistenceError(f"Failed to save {table}", detail="insert returned no row")
        return data[0]

    def update(
        self, table: str, values: Mapping[str, Any], filters: Mapping[str, Any]
    ) -> List[Dict[str, Any]]:
        query = self._apply_filters(self._client.table(table).update(dict(values)), filters)
        response = self._execute("update", table, query)
        return list(response.data or [])

    def delete(self, table: str, filters: Mapping[str, Any]) -> int:
        query = self._apply_filters(self._client.table(table).delete(), filters)
        response = self._execute("delete", table, query)
        return len(response.data or [])

    def rpc(self, name: str, params: Mapping[str, Any]) -> Any:
        response = self._execute("call", name, self._client.rpc(name, dict(params)))
        return response.data


class SupabaseGateway(PersistenceGateway):
    name = "supabase"

    def __init__(self, url: str, anon_key: str) -> None:
        self._url = url
        self._anon_key = anon_key

    def _create_client(self) -> Any:
        return create_client(self._url, self._anon_key)

    def authenticate(self, token: str) -> UserSession:
        client = self._create_client()
        try:
            response = client.auth.get_user(token)
        except Exception as exc:
            log_warning("gateway.auth_failed", error=str(exc))
            raise AuthenticationError("Unauthorized") from exc
        user = getattr(response, "user", None)
        if user is None or not getattr(user, "id", None):
            raise AuthenticationError("Unauthorized")
        # row-level security evaluates the caller's JWT
        client.postgrest.auth(token)
        return SupabaseSession(str(user.id), client)


class _Tables:
    def __init__(self) -> None:
        self.rows: Dict[str, List[Dict[str, Any]]] = {}
        self.lock = Lock()


def _matches(row: Mapping[str, Any], filters: Mapping[str, Any]) -> bool:
    return all(row.get(column) == value for column, value in filters.items())


def _project(row: Mapping[str, Any], columns: str) -> Dict[str, Any]:
    if columns.strip() == "*":
        return copy.deepcopy(dict(row))
    names = [name.strip() for name in columns.split(",") if name.strip()]
    return {name: copy.deepcopy(row.get(name)) for name in names}


class InMemorySession(UserSession):
    def __init__(self, user_id: str, tables: _Tables) -> None:
        super().__init__(user_id)
        self._tables = tables

    def select(
        self,
        table: str,
        filters: Mapping[str, Any],
        *,
        columns: str = "*",
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        with self._tables.lock:
            indexed = [
                (index, row)
                for index, row in enumerate(self._tables.rows.get(table, []))
                if _matches(row, filters)
            ]
            if order_by:
                indexed.sort(
                    key=lambda item: (
                        item[1].get(order_by) is not None,
                        item[1].get(order_by),
                        item[0],
                    ),
                    reverse=descending,
                )
            rows = [_project(row, columns) for _, row in indexed]
        return rows[:limit] if limit is not None else rows

    def insert(self, table: str, row: Mapping[str, Any]) -> Dict[str, Any]:
        stored = {"id": uuid.uuid4().hex, "created_at": utc_now_iso(), **dict(row)}
        with self._tables.lock:
            self._tables.rows.setdefault(table, []).append(stored)
            return copy.deepcopy(stored)

    def update(
        self, table: str, values: Mapping[str, Any], filters: Mapping[str, Any]
    ) -> List[Dict[str, Any]]:
        updated = []
        with self._tables.lock:
            for row in self._tables.rows.get(table, []):
                if _matches(row, filters):
                    row.update(copy.deepcopy(dict(values)))
                    updated.append(copy.deepcopy(row))
        return updated

    def delete(self, table: str, filters: Mapping[str, Any]) -> int:
        with self._tables.lock:
            rows = self._tables.rows.get(table, [])
            kept = [row for row in rows if not _matches(row, filters)]
            self._tables.rows[table] = kept
            return len(rows) - len(kept)

    def rpc(self, name: str, params: Mapping[str, Any]) -> Any:
        if name == "upsert_chat_topic":
            return self._upsert_chat_topic(params)
        raise PersistenceError(f"Failed to call {name}", detail="unknown rpc")

    def _upsert_chat_topic(self, params: Mapping[str, Any]) -> None:
        filters = {"user_id": params.get("user_uuid"), "topic": params.get("topic_name")}
        now = utc_now_iso()
        with self._tables.lock:
            topics = self._tables.rows.setdefault("chat_topics", [])
            for row in topics:
                if _matches(row, filters):
                    row["mentioned_count"] = int(row.get("mentioned_count") or 0) + 1
                    row["last_mentioned"] = now
                    return None
            topics.append(
                {
                    "id": uuid.uuid4().hex,
                    "created_at": now,
                    **filters,
                    "mentioned_count": 1,
                    "last_mentioned": now,
                }
            )
        return None


class InMemoryGateway(PersistenceGateway):
    """Process-local tables for development and tests."""

    name = "memory"

    def __init__(self, users: Optional[Mapping[str, str]] = None) -> None:
        self._users: Dict[str, str] = dict(users or {})
        self._tables = _Tables()

    def register_token(self, token: str, user_id: str) -> None:
        self._users[token] = user_id

    def seed(self, table: str, rows: List[Mapping[str, Any]]) -> None:
        with self._tables.lock:
            self._tables.rows.setdefault(table, []).extend(
                copy.deepcopy(dict(row)) for row in rows
            )

    def authenticate(self, token: str) -> UserSession:
        user_id = self._users.get(token)
        if not user_id:
            raise AuthenticationError("Unauthorized")
        return InMemorySession(user_id, self._tables)


def build_gateway() -> PersistenceGateway:
    cfg = get_config()
    backend = cfg.persistence_backend or "supabase"
    if backend == "memory":
        return InMemoryGateway(cfg.memory_token_map())
    if backend != "supabase":
        raise ConfigurationError(f"Unsupported persistence backend: {backend}")
    if not cfg.supabase_url or not cfg.supabase_anon_key:
        raise ConfigurationError("Supabase credentials are not configured")
    return SupabaseGateway(cfg.supabase_url, cfg.supabase_anon_key)


@lru_cache(maxsize=1)
def get_gateway() -> PersistenceGateway:
    return build_gateway()
