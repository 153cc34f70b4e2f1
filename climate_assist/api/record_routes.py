from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Depends, Query

from ..application.services import (
    conversations_service,
    goals_service,
    profile_service,
    scans_service,
)
from ..application.validation import parse_payload
from ..infra import weather_service
from ..infra.gateway import UserSession
from ..schemas import WeatherRequest
from .auth import require_session
from .request_body import authenticated_body, read_json_body


router = APIRouter(prefix="/api", tags=["records"])


@router.get("/goals")
def list_goals(session: UserSession = Depends(require_session)):
    return goals_service.list_goals(session)


@router.post("/goals")
def create_goal(
    session: UserSession = Depends(require_session),
    payload: Any = Depends(authenticated_body),
):
    return goals_service.create_goal(session, payload)


@router.patch("/goals")
def update_goal(
    session: UserSession = Depends(require_session),
    payload: Any = Depends(authenticated_body),
):
    return goals_service.update_goal(session, payload)


@router.delete("/goals")
def delete_goals(session: UserSession = Depends(require_session)):
    return goals_service.delete_goals(session)


@router.get("/user-goals")
def list_user_goals(session: UserSession = Depends(require_session)):
    return goals_service.list_user_goals(session)


@router.post("/user-goals")
def create_user_goal(
    session: UserSession = Depends(require_session),
    payload: Any = Depends(authenticated_body),
):
    return goals_service.create_user_goal(session, payload)


@router.patch("/user-goals")
def update_user_goal(
    session: UserSession = Depends(require_session),
    payload: Any = Depends(authenticated_body),
):
    return goals_service.update_user_goal(session, payload)


@router.get("/scan-history")
def list_scans(
    limit: int = Query(default=scans_service.DEFAULT_SCAN_LIMIT, ge=1),
    session: UserSession = Depends(require_session),
):
    return scans_service.list_scans(session, limit=limit)


@router.post("/scan-history")
def save_scan(
    session: UserSession = Depends(require_session),
    payload: Any = Depends(authenticated_body),
):
    return scans_service.save_scan(session, payload)


@router.get("/messages")
def list_messages(
    conversation_id: Optional[str] = Query(default=None),
    session: UserSession = Depends(require_session),
):
    return conversations_service.list_messages(session, conversation_id)


@router.post("/messages")
def add_message(
    session: UserSession = Depends(require_session),
    payload: Any = Depends(authenticated_body),
):
    return conversations_service.add_message(session, payload)


@router.get("/chat-topics")
def list_topics(session: UserSession = Depends(require_session)):
    return conversations_service.list_topics(session)


@router.post("/chat-topics")
def track_topic(
    session: UserSession = Depends(require_session),
    payload: Any = Depends(authenticated_body),
):
    return conversations_service.track_topic(session, payload)


@router.get("/user-profile")
def get_profile(session: UserSession = Depends(require_session)):
    return profile_service.get_profile(session)


@router.get("/weather")
def geocode(
    action: Optional[str] = Query(default=None),
    q: Optional[str] = Query(default=None),
    lat: Optional[float] = Query(default=None),
    lon: Optional[float] = Query(default=None),
):
    return weather_service.geocode(action, q=q, lat=lat, lon=lon)


@router.post("/weather")
def current_weather(payload: Any = Depends(read_json_body)):
    client = weather_service.build_weather_client()
    request = parse_payload(
        WeatherRequest,
        payload,
        required=("latitude", "longitude"),
        missing_message="Latitude and longitude are required",
    )
    return client.current_report(request.latitude, request.longitude)
