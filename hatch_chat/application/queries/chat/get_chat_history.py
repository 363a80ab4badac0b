"""
GetChatHistory Query - conversation with its messages, oldest first.
"""

from dataclasses import dataclass

from hatch_chat.application.common.interfaces import Query, QueryHandler
from hatch_chat.config.settings import Config
from hatch_chat.domain.entities.conversation import Conversation
from hatch_chat.domain.entities.message import Message
from hatch_chat.domain.exceptions import EntityNotFoundError
from hatch_chat.domain.ports.repositories import ConversationRepository, MessageRepository


@dataclass
class GetChatHistoryResult:
    """Result containing conversation metadata and messages."""

    conversation: Conversation
    messages: list[Message]


@dataclass(frozen=True)
class GetChatHistoryQuery(Query[GetChatHistoryResult]):
    conversation_id: str
    limit: int = Config.CONVERSATION_MESSAGE_LIMIT


class GetChatHistoryHandler(QueryHandler[GetChatHistoryResult]):
    def __init__(
        self,
        conv_repo: ConversationRepository,
        msg_repo: MessageRepository,
    ):
        self._conv_repo = conv_repo
        self._msg_repo = msg_repo

    async def execute(self, query: GetChatHistoryQuery) -> GetChatHistoryResult:
        conversation = await self._conv_repo.get_by_id(query.conversation_id)
        if not conversation:
            raise EntityNotFoundError(f"Conversation {query.conversation_id} not found")
        messages = await self._msg_repo.get_by_conversation(
            query.conversation_id, limit=query.limit
        )
        return GetChatHistoryResult(conversation=conversation, messages=messages)
