from __future__ import annotations

import json
from typing import Any

from fastapi import Depends, Request

from ..domain.errors import InputValidationError
from ..infra.gateway import UserSession
from .auth import require_session


async def read_json_body(request: Request) -> Any:
    """Decode the body as JSON; shape checks are left to ``parse_payload``."""
    raw = await request.body()
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise InputValidationError("Invalid request body") from exc


async def authenticated_body(
    _session: UserSession = Depends(require_session),
    payload: Any = Depends(read_json_body),
) -> Any:
    return payload

