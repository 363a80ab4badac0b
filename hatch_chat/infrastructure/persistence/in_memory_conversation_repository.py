"""
In-memory Conversation Repository Implementation.
"""

import asyncio
import logging
from typing import Optional

from hatch_chat.domain.entities.conversation import Conversation
from hatch_chat.domain.ports.repositories.conversation_repository import (
    ConversationRepository,
)

logger = logging.getLogger(__name__)


class InMemoryConversationRepository(ConversationRepository):
    def __init__(self):
        self._conversations: dict[str, Conversation] = {}
        self._lock = asyncio.Lock()

    async def get_by_id(self, conversation_id: str) -> Optional[Conversation]:
        return self._conversations.get(conversation_id)

    async def get_by_project(self, project_id: str) -> list[Conversation]:
        return [c for c in self._conversations.values() if c.project_id == project_id]

    async def save(self, conversation: Conversation) -> Conversation:
        async with self._lock:
            existing = self._conversations.get(conversation.id)
            if existing is not None:
                return existing
            self._conversations[conversation.id] = conversation
            logger.debug("Created conversation %s (scope=%s)", conversation.id, conversation.scope)
            return conversation
