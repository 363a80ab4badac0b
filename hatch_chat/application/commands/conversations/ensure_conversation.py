"""
Ensure Conversation Command - idempotent bootstrap of a canonical conversation.

Runs before any message is persisted: the conversation row for
project-/team-/agent- identifiers is created on first use and returned
unchanged afterwards. Scope and owning ids never change after creation.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from hatch_chat.application.common.interfaces import Command, CommandHandler
from hatch_chat.domain.entities.conversation import Conversation
from hatch_chat.domain.ports.repositories import ConversationRepository
from hatch_chat.domain.value_objects.conversation_id import ParsedConversationId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EnsureConversationCommand(Command[Conversation]):
    parsed: ParsedConversationId
    title: Optional[str] = None


class EnsureConversationHandler(CommandHandler[Conversation]):
    _conversation_repository: ConversationRepository

    def __init__(self, conversation_repository: ConversationRepository):
        self._conversation_repository = conversation_repository

    async def execute(self, command: EnsureConversationCommand) -> Conversation:
        existing = await self._conversation_repository.get_by_id(command.parsed.raw)
        if existing is not None:
            return existing
        conversation = await self._conversation_repository.save(
            Conversation.from_parsed(command.parsed, title=command.title)
        )
        logger.info(
            "[ConversationBootstrap] created %s (scope=%s)",
            conversation.id,
            conversation.scope,
        )
        return conversation
