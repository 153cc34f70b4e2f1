"""Chat history and topic tracking for the signed-in user."""

from __future__ import annotations

from typing import Any, Dict, Optional

from ...domain.errors import InputValidationError, ResourceNotFoundError
from ...infra.gateway import UserSession, utc_now_iso
from ...schemas import MessageCreate, TopicCreate
from ..validation import is_blank, parse_payload


CONVERSATIONS_TABLE = "chat_conversations"
MESSAGES_TABLE = "chat_messages"
TOPICS_TABLE = "chat_topics"
TOP_TOPICS_LIMIT = 10


def _require_conversation(session: UserSession, conversation_id: str) -> None:
    conversation = session.select_one(
        CONVERSATIONS_TABLE,
        {"id": conversation_id, "user_id": session.user_id},
        columns="id",
    )
    if conversation is None:
        raise ResourceNotFoundError("Conversation not found")


def list_messages(session: UserSession, conversation_id: Optional[str]) -> Dict[str, Any]:
    if is_blank(conversation_id):
        raise InputValidationError("Conversation ID required", ["conversation_id"])
    _require_conversation(session, conversation_id)
    messages = session.select(
        MESSAGES_TABLE,
        {"conversation_id": conversation_id},
        order_by="created_at",
    )
    return {"messages": messages}


def add_message(session: UserSession, payload: Any) -> Dict[str, Any]:
    request = parse_payload(
        MessageCreate,
        payload,
        required=("conversation_id",),
        missing_message="Conversation ID required",
    )
    _require_conversation(session, request.conversation_id)
    if is_blank(request.role) or is_blank(request.content):
        raise InputValidationError(
            "Message role and content are required", ["role", "content"]
        )
    message = session.insert(
        MESSAGES_TABLE,
        {
            "conversation_id": request.conversation_id,
            "role": request.role,
            "content": request.content,
        },
    )
    session.update(
        CONVERSATIONS_TABLE,
        {"updated_at": utc_now_iso()},
        {"id": request.conversation_id, "user_id": session.user_id},
    )
    return {"message": message}


def track_topic(session: UserSession, payload: Any) -> Dict[str, Any]:
    request = parse_payload(
        TopicCreate, payload, required=("topic",), missing_message="Topic required"
    )
    session.rpc(
        "upsert_chat_topic",
        {"user_uuid": session.user_id, "topic_name": request.topic},
    )
    return {"success": True}


def list_topics(session: UserSession) -> Dict[str, Any]:
    topics = session.select(
        TOPICS_TABLE,
        {"user_id": session.user_id},
        order_by="mentioned_count",
        descending=True,
        limit=TOP_TOPICS_LIMIT,
    )
    return {"topics": topics}
