"""Payloads of the user-scoped record endpoints."""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import Field

from .fields import OptionalNumber, SnakeModel, Text


class GoalCreate(SnakeModel):
    title: Text = None
    description: Text = None
    days: Optional[int] = Field(default=None, ge=1)
    environmental_impact: Optional[Dict[str, Any]] = None


class GoalAction(SnakeModel):
    goal_id: Text = None
    action: Text = None


class UserGoalCreate(SnakeModel):
    title: Text = None
    category: Text = None
    target_value: OptionalNumber = None


class UserGoalUpdate(SnakeModel):
    goal_id: Text = None
    current_value: OptionalNumber = None
    status: Text = None


class ScanCreate(SnakeModel):
    object_name: Text = None
    category: Text = None
    carbon_footprint: OptionalNumber = None


class MessageCreate(SnakeModel):
    conversation_id: Text = None
    role: Text = None
    content: Text = None


class TopicCreate(SnakeModel):
    topic: Text = None


class WeatherRequest(SnakeModel):
    latitude: OptionalNumber = None
    longitude: OptionalNumber = None
