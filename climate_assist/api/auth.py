from __future__ import annotations

from typing import Optional

from fastapi import Header

from ..domain.errors import AuthenticationError
from ..infra.gateway import UserSession, get_gateway


def _bearer_token(authorization: Optional[str]) -> str:
    if not authorization or not authorization.strip():
        raise AuthenticationError("No authorization header")
    value = authorization.strip()
    if value.lower().startswith("bearer "):
        value = value[len("bearer ") :].strip()
    if not value:
        raise AuthenticationError("Invalid token")
    return value


def require_bearer_header(
    authorization: Optional[str] = Header(default=None),
) -> str:
    """Presence check only; the token is not resolved against the auth backend."""
    return _bearer_token(authorization)


def require_session(
    authorization: Optional[str] = Header(default=None),
) -> UserSession:
    token = _bearer_token(authorization)
    return get_gateway().authenticate(token)
