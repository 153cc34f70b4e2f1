"""Structured JSON-line events correlated by a per-request trace id."""

from __future__ import annotations

import json
import logging
import traceback
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Iterator, Optional


_TRACE_ID_CTX: ContextVar[str] = ContextVar("trace_id", default="unknown")
_LOGGER = logging.getLogger("climate_assist.events")
_ERROR_LOG_LOCK = Lock()
_INITIALIZED = False


def init_logging(*, log_path: Optional[str] = None, level: int = logging.INFO) -> None:
    global _INITIALIZED
    if _INITIALIZED:
        return
    if log_path:
        path = Path(log_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = RotatingFileHandler(
            path, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
        )
    else:
        handler = logging.StreamHandler()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        handlers=[handler],
    )
    _LOGGER.setLevel(level)
    _INITIALIZED = True


def new_trace_id() -> str:
    return uuid.uuid4().hex


def get_trace_id() -> str:
    return _TRACE_ID_CTX.get() or "unknown"


@contextmanager
def trace_scope(trace_id: Optional[str] = None) -> Iterator[str]:
    """Bind a trace id to every event emitted inside the block."""
    value = (trace_id or "").strip() or new_trace_id()
    token = _TRACE_ID_CTX.set(value)
    try:
        yield value
    finally:
        _TRACE_ID_CTX.reset(token)


def summarize_text(text: Any, limit: int = 400) -> str:
    if not text:
        return ""
    text = str(text)
    return text if len(text) <= limit else f"{text[:limit]}..."


def _encode(event: str, fields: Dict[str, Any]) -> str:
    return json.dumps(
        {"event": event, "trace_id": get_trace_id(), **fields},
        ensure_ascii=True,
        default=str,
    )


def log_event(event: str, **fields: Any) -> None:
    _LOGGER.info(_encode(event, fields))


def log_warning(event: str, **fields: Any) -> None:
    _LOGGER.warning(_encode(event, fields))


def record_exception(
    exc: BaseException, *, error_log_path: Optional[str] = None, **fields: Any
) -> None:
    """Log an unexpected exception; optionally append it to a JSON-lines error log."""
    _LOGGER.error(
        _encode("server.error", {"error": repr(exc), **fields}),
        exc_info=(type(exc), exc, exc.__traceback__),
    )
    if not error_log_path:
        return
    entry = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "trace_id": get_trace_id(),
        "error": repr(exc),
        "traceback": "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        ),
        **fields,
    }
    path = Path(error_log_path)
    with _ERROR_LOG_LOCK:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(entry, ensure_ascii=True, default=str) + "\n")
