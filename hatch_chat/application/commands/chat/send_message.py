"""
SendMessage Command - route one user turn and persist exactly one response.

Handler:
1. Check routing consistency of the validated identifier
2. Ensure the canonical conversation exists
3. Save the user message
4. Narrow the project roster to agents available in the scope
5. Resolve speaking authority, or fall back:
   - no agents in scope          -> PM fallback  (no_agents_in_scope)
   - authority resolution failed -> PM fallback  (authority_failed)
   - no agents in the project    -> System fallback (no_agents_in_project)
6. Generate the reply (canned text for fallbacks)
7. Check the no-fake-system-agent invariant, save the response

Persistence of the response never depends on agent availability or on the
reply generator succeeding.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional, Sequence

from hatch_chat.application.commands.conversations.ensure_conversation import (
    EnsureConversationCommand,
    EnsureConversationHandler,
)
from hatch_chat.application.common.interfaces import Command, CommandHandler
from hatch_chat.application.dto.chat import MessageDTO
from hatch_chat.application.ingress.message_ingress import IngressResult
from hatch_chat.config.settings import Config
from hatch_chat.domain.entities.agent import Agent
from hatch_chat.domain.entities.message import FallbackInfo, Message
from hatch_chat.domain.exceptions import ConversationIdError, EmptyRosterError
from hatch_chat.domain.ports.reply_generator import ReplyContext, ReplyGenerator
from hatch_chat.domain.ports.repositories import (
    AgentRepository,
    ConversationRepository,
    MessageRepository,
    ProjectRepository,
    TeamRepository,
)
from hatch_chat.domain.services.agent_availability import (
    ScopeContext,
    filter_available_agents,
)
from hatch_chat.domain.services.invariants import InvariantGuard
from hatch_chat.domain.services.speaking_authority import resolve_speaking_authority
from hatch_chat.domain.services.team_lead import is_product_manager
from hatch_chat.domain.value_objects.conversation_id import ParsedConversationId
from hatch_chat.domain.value_objects.message_id import MessageId

logger = logging.getLogger(__name__)

# Async callback receiving outbound frames (new_message, streaming_*)
EventSink = Callable[[dict[str, Any]], Awaitable[None]]

REASON_NO_AGENTS_IN_PROJECT = "no_agents_in_project"
REASON_NO_AGENTS_IN_SCOPE = "no_agents_in_scope"
REASON_AUTHORITY_FAILED = "authority_failed"

SYSTEM_SENDER_NAME = "System"
SYSTEM_FALLBACK_CONTENT = (
    "I'm sorry, but there are no agents available to respond at this time. "
    "Please add agents to this project to enable responses."
)
PM_FALLBACK_CONTENT = {
    "team": "This team has no agents yet. Add one and I'll continue as the team lead once assigned.",
    "agent": "That agent doesn't exist or isn't available in this project. Add it or switch back to project chat.",
    "project": "I'm here to help! Let me know what you'd like to work on.",
}
GENERATION_FAILED_CONTENT = (
    "I couldn't put a reply together just now. Please try again in a moment."
)


@dataclass(frozen=True)
class SendMessageCommand(Command["SendMessageResult"]):
    parsed: ParsedConversationId
    content: str
    addressed_agent_id: Optional[str] = None
    user_id: Optional[str] = None
    sender_name: Optional[str] = None
    parent_message_id: Optional[str] = None
    thread_root_id: Optional[str] = None
    thread_depth: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)
    message_id: Optional[str] = None  # client-supplied id makes retries idempotent

    @classmethod
    def from_ingress(cls, result: IngressResult) -> SendMessageCommand:
        envelope = result.envelope
        message = envelope.message
        return cls(
            parsed=result.parsed,
            content=message.content,
            addressed_agent_id=result.addressed_agent_id,
            user_id=message.user_id,
            sender_name=message.sender_name,
            parent_message_id=message.parent_message_id,
            thread_root_id=message.thread_root_id,
            thread_depth=message.thread_depth or 0,
            metadata=dict(message.metadata or {}),
            message_id=message.id,
        )


@dataclass
class ResponderDecision:
    """Who answers and why. agent is None only for the System fallback."""

    agent: Optional[Agent]
    reason: str
    fallback: Optional[FallbackInfo] = None

    @property
    def is_system_fallback(self) -> bool:
        return self.fallback is not None and self.fallback.type == "system"

    @property
    def is_pm_fallback(self) -> bool:
        return self.fallback is not None and self.fallback.type == "pm"


@dataclass
class SendMessageResult:
    user_message: Message
    response_message: Message
    decision: ResponderDecision
    available_agents: list[Agent]


def project_pm_fallback(roster: Sequence[Agent]) -> Optional[Agent]:
    """The project PM, else the first agent of the project, else None."""
    pm = next((a for a in roster if is_product_manager(a)), None)
    if pm is not None:
        return pm
    return roster[0] if roster else None


def decide_responder(
    parsed: ParsedConversationId,
    roster: Sequence[Agent],
    available: Sequence[Agent],
    addressed_agent_id: Optional[str],
) -> ResponderDecision:
    """
    Pick the responder for one turn. Never raises for an empty roster.

    Args:
        parsed: Decoded conversation identifier
        roster: Every agent of the project
        available: Agents available in the conversation scope
        addressed_agent_id: Explicitly addressed agent, if any
    """
    if not available:
        pm = project_pm_fallback(roster)
        if pm is not None:
            logger.warning(
                "No agents available in %s, using PM fallback %s", parsed.raw, pm.id
            )
            return ResponderDecision(
                agent=pm,
                reason="pm_fallback",
                fallback=FallbackInfo(type="pm", reason=REASON_NO_AGENTS_IN_SCOPE),
            )
        logger.warning("Project %s has no agents, using system fallback", parsed.project_id)
        return ResponderDecision(
            agent=None,
            reason="system_fallback",
            fallback=FallbackInfo(type="system", reason=REASON_NO_AGENTS_IN_PROJECT),
        )

    try:
        authority = resolve_speaking_authority(
            conversation_scope=parsed.scope,
            conversation_id=parsed.raw,
            available_agents=available,
            addressed_agent_id=addressed_agent_id,
            known_project_id=parsed.project_id,
        )
    except (EmptyRosterError, ConversationIdError) as e:
        logger.warning("Authority resolution failed for %s: %s", parsed.raw, e)
        pm = project_pm_fallback(roster) or available[0]
        return ResponderDecision(
            agent=pm,
            reason="pm_fallback",
            fallback=FallbackInfo(type="pm", reason=REASON_AUTHORITY_FAILED),
        )

    return ResponderDecision(agent=authority.allowed_speaker, reason=authority.reason)


class SendMessageHandler(CommandHandler[SendMessageResult]):
    def __init__(
        self,
        conv_repo: ConversationRepository,
        msg_repo: MessageRepository,
        project_repo: ProjectRepository,
        team_repo: TeamRepository,
        agent_repo: AgentRepository,
        reply_generator: ReplyGenerator,
        guard: InvariantGuard,
        history_limit: int = Config.REPLY_HISTORY_LIMIT,
    ):
        self.conv_repo = conv_repo
        self.msg_repo = msg_repo
        self.project_repo = project_repo
        self.team_repo = team_repo
        self.agent_repo = agent_repo
        self.reply_generator = reply_generator
        self.guard = guard
        self.history_limit = history_limit
        self._ensure_conversation = EnsureConversationHandler(conv_repo)

    async def execute(
        self, command: SendMessageCommand, emit: Optional[EventSink] = None
    ) -> SendMessageResult:
        parsed = command.parsed
        emit = emit or _discard

        self.guard.routing_consistency(
            parsed.raw, parsed.scope, parsed.project_id, parsed.context_id
        )

        await self._ensure_conversation.execute(EnsureConversationCommand(parsed=parsed))
        self.guard.conversation_exists(parsed.raw, await self.conv_repo.get_by_id(parsed.raw))

        history = await self.msg_repo.get_by_conversation(parsed.raw, limit=self.history_limit)

        user_message = await self.msg_repo.save(
            Message.create(
                conversation_id=parsed.raw,
                sender_kind="user",
                content=command.content,
                user_id=command.user_id,
                sender_name=command.sender_name,
                parent_message_id=command.parent_message_id,
                thread_root_id=command.thread_root_id,
                thread_depth=command.thread_depth,
                metadata=command.metadata,
                message_id=MessageId(command.message_id) if command.message_id else None,
            )
        )
        await emit(
            {
                "type": "new_message",
                "conversationId": parsed.raw,
                "message": MessageDTO.from_entity(user_message).to_wire(),
            }
        )

        project = await self.project_repo.get_by_id(parsed.project_id)
        if project is None:
            logger.warning("Project %s not found, treating roster as empty", parsed.project_id)
        roster = await self.agent_repo.get_by_project(parsed.project_id)
        available = filter_available_agents(roster, ScopeContext.from_parsed(parsed))

        decision = decide_responder(parsed, roster, available, command.addressed_agent_id)
        logger.info(
            "[Authority] scope=%s speaker=%s reason=%s",
            parsed.scope,
            decision.agent.id if decision.agent else None,
            decision.reason,
        )

        response_id = _response_id_for(user_message)
        replayed = await self.msg_repo.get_by_id(parsed.raw, response_id)
        if replayed is not None:
            logger.info("Turn %s already answered by %s, replaying", user_message.id, response_id)
            return SendMessageResult(
                user_message=user_message,
                response_message=replayed,
                decision=decision,
                available_agents=available,
            )

        await emit(
            {
                "type": "streaming_started",
                "messageId": response_id.value,
                "agentId": decision.agent.id if decision.agent else None,
                "agentName": decision.agent.name if decision.agent else SYSTEM_SENDER_NAME,
            }
        )

        context = ReplyContext(
            mode=parsed.scope,
            project_name=project.name if project else parsed.project_id,
            team_name=await self._team_name(parsed),
            history=[
                ("user" if m.sender_kind == "user" else "assistant", m.content)
                for m in history
            ],
        )
        content, generation_failed = await self._reply_content(
            decision, command.content, context, response_id, emit
        )

        response = self._build_response(
            command, parsed, user_message, decision, response_id, content, generation_failed
        )
        self.guard.no_fake_system_agent(response.agent_id, response.sender_kind)
        response = await self.msg_repo.save(response)

        return SendMessageResult(
            user_message=user_message,
            response_message=response,
            decision=decision,
            available_agents=available,
        )

    async def _team_name(self, parsed: ParsedConversationId) -> Optional[str]:
        if not parsed.team_id:
            return None
        team = await self.team_repo.get_by_id(parsed.team_id)
        return team.name if team else None

    async def _reply_content(
        self,
        decision: ResponderDecision,
        user_content: str,
        context: ReplyContext,
        response_id: MessageId,
        emit: EventSink,
    ) -> tuple[str, bool]:
        if decision.is_system_fallback:
            content = SYSTEM_FALLBACK_CONTENT
        elif decision.is_pm_fallback:
            content = PM_FALLBACK_CONTENT.get(context.mode, PM_FALLBACK_CONTENT["project"])
        else:
            return await self._stream_generated(decision.agent, user_content, context, response_id, emit)

        await emit(_chunk_frame(response_id, content, content))
        return content, False

    async def _stream_generated(
        self,
        agent: Agent,
        user_content: str,
        context: ReplyContext,
        response_id: MessageId,
        emit: EventSink,
    ) -> tuple[str, bool]:
        accumulated = ""
        try:
            async for chunk in self.reply_generator.stream_reply(agent, user_content, context):
                accumulated += chunk
                await emit(_chunk_frame(response_id, chunk, accumulated))
        except Exception as e:
            # The generator is external; its failure must not cost the turn.
            logger.error("Reply generation failed for agent %s: %s", agent.id, e)
            if not accumulated:
                accumulated = GENERATION_FAILED_CONTENT
                await emit(_chunk_frame(response_id, accumulated, accumulated))
            return accumulated, True
        return accumulated, False

    def _build_response(
        self,
        command: SendMessageCommand,
        parsed: ParsedConversationId,
        user_message: Message,
        decision: ResponderDecision,
        response_id: MessageId,
        content: str,
        generation_failed: bool,
    ) -> Message:
        metadata: dict[str, Any] = {"authority_reason": decision.reason}
        if generation_failed:
            metadata["generation_failed"] = True

        in_thread = bool(command.thread_root_id or command.parent_message_id)
        if decision.is_system_fallback:
            sender_kind, agent_id, sender_name = "system", None, SYSTEM_SENDER_NAME
        else:
            sender_kind, agent_id, sender_name = "agent", decision.agent.id, decision.agent.name

        return Message.create(
            conversation_id=parsed.raw,
            sender_kind=sender_kind,
            content=content,
            agent_id=agent_id,
            sender_name=sender_name,
            parent_message_id=user_message.id.value if in_thread else None,
            thread_root_id=(command.thread_root_id or command.parent_message_id) if in_thread else None,
            thread_depth=command.thread_depth + 1 if in_thread else 0,
            metadata=metadata,
            fallback=decision.fallback,
            message_id=response_id,
        )


def _chunk_frame(response_id: MessageId, chunk: str, accumulated: str) -> dict[str, Any]:
    return {
        "type": "streaming_chunk",
        "messageId": response_id.value,
        "chunk": chunk,
        "accumulatedContent": accumulated,
    }


async def _discard(event: dict[str, Any]) -> None:
    return None


def _response_id_for(user_message: Message) -> MessageId:
    # One response per user turn; a retried turn in the same conversation
    # maps onto the same id.
    return MessageId(f"response-for-{user_message.conversation_id}:{user_message.id.value}")
