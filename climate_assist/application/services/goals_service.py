"""Environmental goals (day-based challenges) and numeric user goals."""

from __future__ import annotations

from typing import Any, Dict

from ...domain.coefficients import DEFAULT_GOAL_DAYS
from ...domain.errors import InputValidationError, ResourceNotFoundError
from ...infra.gateway import UserSession, utc_now_iso
from ...observability.logging_utils import log_event
from ...schemas import GoalAction, GoalCreate, UserGoalCreate, UserGoalUpdate
from ..validation import parse_payload


ENVIRONMENTAL_GOALS_TABLE = "environmental_goals"
USER_GOALS_TABLE = "user_goals"
GOAL_ACTIONS = ("progress", "complete")


def list_goals(session: UserSession) -> Dict[str, Any]:
    goals = session.select(
        ENVIRONMENTAL_GOALS_TABLE,
        {"user_id": session.user_id},
        order_by="created_at",
        descending=True,
    )
    return {"goals": goals}


def create_goal(session: UserSession, payload: Any) -> Dict[str, Any]:
    request = parse_payload(
        GoalCreate,
        payload,
        required=("title",),
        missing_message="Goal title is required",
    )
    goal = session.insert(
        ENVIRONMENTAL_GOALS_TABLE,
        {
            "user_id": session.user_id,
            "title": request.title,
            "description": request.description or "",
            "days": request.days or DEFAULT_GOAL_DAYS,
            "current_day": 0,
            "status": "active",
            "environmental_impact": request.environmental_impact,
        },
    )
    log_event("goals.created", goal_id=goal.get("id"), days=goal.get("days"))
    return {"goal": goal}


def update_goal(session: UserSession, payload: Any) -> Dict[str, Any]:
    request = parse_payload(GoalAction, payload)
    if request.action not in GOAL_ACTIONS:
        raise InputValidationError("Invalid action", ["action"])
    if not request.goal_id:
        raise InputValidationError("Goal ID required", ["goal_id"])
    owned = {"id": request.goal_id, "user_id": session.user_id}

    if request.action == "progress":
        goal = session.select_one(
            ENVIRONMENTAL_GOALS_TABLE, owned, columns="current_day, days"
        )
        if goal is None:
            raise ResourceNotFoundError("Goal not found")
        current_day = int(goal.get("current_day") or 0)
        days = int(goal.get("days") or 0)
        values = {"current_day": min(current_day + 1, days)}
    else:
        values = {"status": "completed", "completed_at": utc_now_iso()}

    if not session.update(ENVIRONMENTAL_GOALS_TABLE, values, owned):
        raise ResourceNotFoundError("Goal not found")
    log_event("goals.updated", goal_id=request.goal_id, action=request.action)
    return {"success": True}


def delete_goals(session: UserSession) -> Dict[str, Any]:
    removed = session.delete(ENVIRONMENTAL_GOALS_TABLE, {"user_id": session.user_id})
    log_event("goals.cleared", removed=removed)
    return {"success": True}


def create_user_goal(session: UserSession, payload: Any) -> Dict[str, Any]:
    request = parse_payload(
        UserGoalCreate, payload, required=("title", "category", "target_value")
    )
    goal = session.insert(
        USER_GOALS_TABLE,
        {
            "user_id": session.user_id,
            "title": request.title,
            "category": request.category,
            "target_value": request.target_value,
            "current_value": 0,
            "status": "active",
        },
    )
    return {"success": True, "data": goal}


def list_user_goals(session: UserSession) -> Dict[str, Any]:
    goals = session.select(
        USER_GOALS_TABLE,
        {"user_id": session.user_id},
        order_by="created_at",
        descending=True,
    )
    return {"goals": goals}


def update_user_goal(session: UserSession, payload: Any) -> Dict[str, Any]:
    request = parse_payload(
        UserGoalUpdate,
        payload,
        required=("goal_id",),
        missing_message="Goal ID required",
    )
    owned = {"id": request.goal_id, "user_id": session.user_id}
    # only fields present in the body are written
    values = {
        field: getattr(request, field)
        for field in ("current_value", "status")
        if field in request.model_fields_set
    }
    if values:
        rows = session.update(USER_GOALS_TABLE, values, owned)
    else:
        rows = session.select(USER_GOALS_TABLE, owned, limit=1)
    if not rows:
        raise ResourceNotFoundError("Goal not found")
    return {"success": True, "data": rows[0]}
