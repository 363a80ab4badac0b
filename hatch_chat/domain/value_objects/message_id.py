"""
MessageId Value Object - identity of a persisted chat message.
"""

from dataclasses import dataclass
from uuid import uuid4


@dataclass(frozen=True)
class MessageId:
    value: str

    def __post_init__(self):
        if not self.value or not self.value.strip():
            raise ValueError("Message ID cannot be empty")

    @classmethod
    def new(cls, prefix: str = "msg") -> "MessageId":
        return cls(f"{prefix}-{uuid4().hex}")

    def __str__(self) -> str:
        return self.value
