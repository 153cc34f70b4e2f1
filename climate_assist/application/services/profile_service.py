from __future__ import annotations

from typing import Any, Dict

from ...domain.errors import ResourceNotFoundError
from ...infra.gateway import UserSession


USER_PROFILES_TABLE = "user_profiles"


def get_profile(session: UserSession) -> Dict[str, Any]:
    profile = session.select_one(USER_PROFILES_TABLE, {"id": session.user_id})
    if profile is None:
        raise ResourceNotFoundError("Profile not found")
    return {"profile": profile}
