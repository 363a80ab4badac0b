"""
In-memory Message Repository Implementation.

Saves are keyed by (conversation id, message id), so a retried write never
produces a second record for the same turn, and a client id reused in
another conversation never collides with the first one.
"""

import asyncio
import logging
from typing import Optional

from hatch_chat.domain.entities.message import Message
from hatch_chat.domain.ports.repositories.message_repository import MessageRepository
from hatch_chat.domain.value_objects.message_id import MessageId

logger = logging.getLogger(__name__)

_Key = tuple[str, str]


class InMemoryMessageRepository(MessageRepository):
    def __init__(self):
        self._messages: dict[_Key, Message] = {}
        self._by_conversation: dict[str, list[_Key]] = {}
        self._lock = asyncio.Lock()

    async def get_by_id(
        self, conversation_id: str, message_id: MessageId
    ) -> Optional[Message]:
        return self._messages.get((conversation_id, message_id.value))

    async def get_by_conversation(
        self, conversation_id: str, limit: int = 200
    ) -> list[Message]:
        keys = self._by_conversation.get(conversation_id, [])
        if limit > 0:
            keys = keys[-limit:]
        return [self._messages[k] for k in keys]

    async def save(self, message: Message) -> Message:
        key = (message.conversation_id, message.id.value)
        async with self._lock:
            existing = self._messages.get(key)
            if existing is not None:
                logger.debug(
                    "Message %s already persisted in %s, skipping",
                    message.id,
                    message.conversation_id,
                )
                return existing
            self._messages[key] = message
            self._by_conversation.setdefault(message.conversation_id, []).append(key)
            return message
