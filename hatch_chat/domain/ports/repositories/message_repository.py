"""
Message Repository Port - Interface for message persistence.
Implementation: hatch_chat/infrastructure/persistence/in_memory_message_repository.py
"""

from abc import ABC, abstractmethod
from typing import Optional

from hatch_chat.domain.entities.message import Message
from hatch_chat.domain.value_objects.message_id import MessageId


class MessageRepository(ABC):
    @abstractmethod
    async def get_by_id(
        self, conversation_id: str, message_id: MessageId
    ) -> Optional[Message]:
        """Message ids are unique per conversation, not globally."""
        ...

    @abstractmethod
    async def get_by_conversation(
        self, conversation_id: str, limit: int = 200
    ) -> list[Message]:
        """Most recent `limit` messages, oldest first."""
        ...

    @abstractmethod
    async def save(self, message: Message) -> Message:
        """Idempotent on (conversation_id, message id): saving twice keeps one record."""
        ...
