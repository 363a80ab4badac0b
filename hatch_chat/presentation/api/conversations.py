"""
Conversations API Router - canonical conversation bootstrap and history.

Flow:
  HTTP Request → Router → Command/Query → Handler → Repository
                                 ↓
  HTTP Response ← Router ← Result ←
"""

from logging import getLogger
from typing import Optional

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Query, status
from pydantic import BaseModel, ConfigDict, Field

from hatch_chat.application.commands.conversations import (
    EnsureConversationCommand,
    EnsureConversationHandler,
)
from hatch_chat.application.dto.chat import MessageDTO
from hatch_chat.application.dto.roster import ConversationDTO
from hatch_chat.application.queries.chat import GetChatHistoryHandler, GetChatHistoryQuery
from hatch_chat.config.settings import Config
from hatch_chat.domain.value_objects.conversation_id import (
    ConversationScope,
    build_conversation_id,
    parse_conversation_id,
)

logger = getLogger(__name__)


# ==================== REQUEST/RESPONSE MODELS ====================


class CreateConversationRequest(BaseModel):
    """
    {"scope": "team", "projectId": "saas-startup", "contextId": "design"}
    """

    model_config = ConfigDict(populate_by_name=True)

    scope: ConversationScope
    project_id: str = Field(alias="projectId")
    context_id: Optional[str] = Field(default=None, alias="contextId")
    title: Optional[str] = None


class ConversationMessagesResponse(BaseModel):
    conversation: ConversationDTO
    messages: list[MessageDTO]


# ==================== ROUTER ====================

router = APIRouter(prefix="/conversations", tags=["conversations"])


# ==================== ENDPOINTS ====================


@router.post("", response_model=ConversationDTO, status_code=status.HTTP_201_CREATED)
@inject
async def create_conversation(
    request: CreateConversationRequest,
    handler: FromDishka[EnsureConversationHandler],
):
    """Create (or return) the canonical conversation for a scope."""
    conversation_id = build_conversation_id(request.scope, request.project_id, request.context_id)
    parsed = parse_conversation_id(conversation_id, known_project_id=request.project_id)
    conversation = await handler.execute(
        EnsureConversationCommand(parsed=parsed, title=request.title)
    )
    return ConversationDTO.from_entity(conversation)


@router.get(
    "/{conversation_id}/messages",
    response_model=ConversationMessagesResponse,
    response_model_by_alias=True,
)
@inject
async def get_conversation_messages(
    conversation_id: str,
    handler: FromDishka[GetChatHistoryHandler],
    limit: int = Query(default=Config.CONVERSATION_MESSAGE_LIMIT, ge=1),
):
    """Messages of a conversation, oldest first."""
    result = await handler.execute(
        GetChatHistoryQuery(conversation_id=conversation_id, limit=limit)
    )
    return ConversationMessagesResponse(
        conversation=ConversationDTO.from_entity(result.conversation),
        messages=[MessageDTO.from_entity(m) for m in result.messages],
    )
