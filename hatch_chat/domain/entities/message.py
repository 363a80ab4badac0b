"""
Message Entity - a single turn in a conversation.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from hatch_chat.domain.value_objects.message_id import MessageId

SENDER_KINDS = ("user", "agent", "system")
FALLBACK_TYPES = ("system", "pm")


@dataclass(frozen=True)
class FallbackInfo:
    """Machine-readable marker for degraded responses."""

    type: str  # "system" or "pm"
    reason: str

    def __post_init__(self):
        if self.type not in FALLBACK_TYPES:
            raise ValueError(f"Invalid fallback type: {self.type}")

    def to_dict(self) -> dict[str, str]:
        return {"type": self.type, "reason": self.reason}


@dataclass
class Message:
    id: MessageId
    conversation_id: str
    sender_kind: str
    content: str
    created_at: datetime
    agent_id: Optional[str] = None
    user_id: Optional[str] = None
    sender_name: Optional[str] = None
    parent_message_id: Optional[str] = None
    thread_root_id: Optional[str] = None
    thread_depth: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.sender_kind not in SENDER_KINDS:
            raise ValueError(f"Invalid sender kind: {self.sender_kind}")

    @property
    def fallback(self) -> Optional[FallbackInfo]:
        raw = self.metadata.get("fallback")
        if not raw:
            return None
        return FallbackInfo(type=raw["type"], reason=raw["reason"])

    @classmethod
    def create(
        cls,
        conversation_id: str,
        sender_kind: str,
        content: str,
        agent_id: Optional[str] = None,
        user_id: Optional[str] = None,
        sender_name: Optional[str] = None,
        parent_message_id: Optional[str] = None,
        thread_root_id: Optional[str] = None,
        thread_depth: int = 0,
        metadata: Optional[dict[str, Any]] = None,
        fallback: Optional[FallbackInfo] = None,
        message_id: Optional[MessageId] = None,
    ) -> Message:
        """Factory method to create a new Message with a generated ID and timestamp."""
        meta = dict(metadata or {})
        if fallback is not None:
            meta["fallback"] = fallback.to_dict()
        return cls(
            id=message_id or MessageId.new("response" if sender_kind != "user" else "msg"),
            conversation_id=conversation_id,
            sender_kind=sender_kind,
            content=content,
            created_at=datetime.now(timezone.utc),
            agent_id=agent_id,
            user_id=user_id,
            sender_name=sender_name,
            parent_message_id=parent_message_id,
            thread_root_id=thread_root_id,
            thread_depth=thread_depth,
            metadata=meta,
        )
