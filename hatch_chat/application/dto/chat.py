"""Chat DTOs for API and WebSocket frames."""

from datetime import datetime
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Any, Optional

from hatch_chat.domain.entities.message import Message


class FallbackDTO(BaseModel):
    type: str
    reason: str


class MessageDTO(BaseModel):
    """DTO for message data returned to frontend (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    conversation_id: str
    message_type: str
    agent_id: Optional[str] = None
    user_id: Optional[str] = None
    sender_name: Optional[str] = None
    content: str
    parent_message_id: Optional[str] = None
    thread_root_id: Optional[str] = None
    thread_depth: int = 0
    metadata: dict[str, Any] = {}
    created_at: datetime

    @classmethod
    def from_entity(cls, message: Message) -> "MessageDTO":
        return cls(
            id=message.id.value,
            conversation_id=message.conversation_id,
            message_type=message.sender_kind,
            agent_id=message.agent_id,
            user_id=message.user_id,
            sender_name=message.sender_name,
            content=message.content,
            parent_message_id=message.parent_message_id,
            thread_root_id=message.thread_root_id,
            thread_depth=message.thread_depth,
            metadata=message.metadata,
            created_at=message.created_at,
        )

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class ErrorFrame(BaseModel):
    """
    Machine-readable error frame sent instead of closing the connection.

    {"type": "error", "code": "INVALID_ENVELOPE", "message": "...", "details": {...}}
    """

    type: str = "error"
    code: str
    message: str
    details: Optional[dict[str, Any]] = None

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)
