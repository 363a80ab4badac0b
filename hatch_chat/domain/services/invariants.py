"""
Invariant Assertions - guards against fabricated identities and routing drift.

Strict mode (development/test) raises InvariantViolationError so regressions
surface immediately. Otherwise the violation is logged at WARNING and the
caller carries on; a data-quality defect never takes down a live connection.
"""

from __future__ import annotations

import logging
from typing import Optional

from hatch_chat.domain.entities.agent import SYSTEM_SENDER
from hatch_chat.domain.entities.conversation import Conversation
from hatch_chat.domain.exceptions.conversation_id import ConversationIdError
from hatch_chat.domain.exceptions.invariant_violation import InvariantViolationError
from hatch_chat.domain.value_objects.conversation_id import (
    build_conversation_id,
    parse_conversation_id,
)

logger = logging.getLogger(__name__)

NO_FAKE_SYSTEM_AGENT = "no_fake_system_agent"
ROUTING_CONSISTENCY = "routing_consistency"
CONVERSATION_EXISTS = "conversation_exists"


class InvariantGuard:
    """Checks routing invariants; behaviour on violation depends on `strict`."""

    def __init__(self, strict: bool):
        self.strict = strict

    def _violation(self, invariant: str, message: str) -> bool:
        if self.strict:
            raise InvariantViolationError(invariant, message)
        logger.warning("[INVARIANT] %s: %s", invariant, message)
        return False

    def no_fake_system_agent(
        self, agent_id: Optional[str], message_type: str
    ) -> bool:
        """
        A response about to be persisted must not impersonate a participant.

        - agent_id "system" is never valid
        - message_type "system" requires agent_id None
        - message_type "agent" requires a real agent id
        """
        if agent_id == SYSTEM_SENDER:
            return self._violation(
                NO_FAKE_SYSTEM_AGENT,
                "System fallback must have agentId=None, not 'system'. "
                f"Got agentId={agent_id!r}, messageType={message_type!r}",
            )
        if message_type == "system" and agent_id is not None:
            return self._violation(
                NO_FAKE_SYSTEM_AGENT,
                "System messages must have agentId=None. "
                f"Got agentId={agent_id!r}",
            )
        if message_type == "agent" and not agent_id:
            return self._violation(
                NO_FAKE_SYSTEM_AGENT,
                "Agent messages must carry a real agentId. "
                f"Got agentId={agent_id!r}",
            )
        return True

    def routing_consistency(
        self,
        conversation_id: str,
        mode: Optional[str],
        project_id: Optional[str],
        context_id: Optional[str],
    ) -> bool:
        """Rebuilding from (mode, project_id, context_id) must give back conversation_id."""
        if not conversation_id or not mode or not project_id:
            return self._violation(
                ROUTING_CONSISTENCY,
                "conversationId, mode and projectId are required",
            )
        if mode == "project" and context_id is not None:
            return self._violation(
                ROUTING_CONSISTENCY,
                f"Project mode must have contextId=None. Got contextId={context_id!r}",
            )
        if mode in ("team", "agent") and not context_id:
            return self._violation(
                ROUTING_CONSISTENCY,
                f"{mode.capitalize()} mode must have a non-empty contextId",
            )

        try:
            expected = build_conversation_id(mode, project_id, context_id)
            reparsed = parse_conversation_id(conversation_id, known_project_id=project_id)
        except ConversationIdError as exc:
            return self._violation(ROUTING_CONSISTENCY, str(exc))

        if (
            expected != conversation_id.strip()
            or reparsed.scope != mode
            or reparsed.context_id != context_id
        ):
            return self._violation(
                ROUTING_CONSISTENCY,
                f"Routing mismatch. Mode: {mode}, ProjectId: {project_id}, "
                f"ContextId: {context_id}. Expected conversationId: {expected}, "
                f"Got: {conversation_id}",
            )
        return True

    def conversation_exists(
        self, conversation_id: str, conversation: Optional[Conversation]
    ) -> bool:
        """Messages may only be persisted into a conversation that exists."""
        if conversation is None or conversation.id != conversation_id:
            return self._violation(
                CONVERSATION_EXISTS,
                f"Conversation must exist before persisting messages. Missing: {conversation_id}",
            )
        return True
