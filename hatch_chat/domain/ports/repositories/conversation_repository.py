"""
Conversation Repository Port - Interface for conversation persistence.
Implementation: hatch_chat/infrastructure/persistence/in_memory_conversation_repository.py
"""

from abc import ABC, abstractmethod
from typing import Optional
from hatch_chat.domain.entities.conversation import Conversation


class ConversationRepository(ABC):
    @abstractmethod
    async def get_by_id(self, conversation_id: str) -> Optional[Conversation]: ...

    @abstractmethod
    async def get_by_project(self, project_id: str) -> list[Conversation]: ...

    @abstractmethod
    async def save(self, conversation: Conversation) -> Conversation:
        """Create if absent; an existing conversation is returned unchanged."""
        ...
