"""
Speaking Authority Resolution - which agent may answer next.

Rules, first applicable wins:
1. Explicit addressing (overrides every other rule)
2. Direct agent conversation -> that agent
3. Project scope -> first Product Manager
4. Team scope -> team lead (see team_lead.resolve_team_lead)
5. First agent in roster

A rule whose target is missing from the roster is skipped, never fatal.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from hatch_chat.domain.entities.agent import Agent
from hatch_chat.domain.exceptions.conversation_id import ConversationIdError
from hatch_chat.domain.exceptions.empty_roster import EmptyRosterError
from hatch_chat.domain.services.team_lead import resolve_team_lead
from hatch_chat.domain.value_objects.conversation_id import (
    SEPARATOR,
    parse_conversation_id,
)

logger = logging.getLogger(__name__)

REASON_EXPLICIT_ADDRESSING = "explicit_addressing"
REASON_DIRECT_AGENT = "direct_agent_conversation"
REASON_PROJECT_PM = "project_scope_pm_authority"
REASON_TEAM_LEAD = "team_scope_team_lead"
REASON_FALLBACK = "fallback_first_agent"


@dataclass(frozen=True)
class SpeakingAuthorityResult:
    allowed_speaker: Agent
    reason: str


def _find(agents: Sequence[Agent], agent_id: Optional[str]) -> Optional[Agent]:
    if not agent_id:
        return None
    return next((a for a in agents if a.id == agent_id), None)


def _target_agent_id(
    conversation_id: str, known_project_id: Optional[str]
) -> Optional[str]:
    parsed = parse_conversation_id(conversation_id, known_project_id)
    return parsed.agent_id


def _match_agent_by_tail(conversation_id: str, agents: Sequence[Agent]) -> Optional[Agent]:
    """
    Tolerant recovery for agent identifiers that could not be parsed.

    "agent-saas-startup-agent-1" matches the roster agent "agent-1". Roster
    order decides between several matches.
    """
    trimmed = conversation_id.strip()
    if not trimmed.startswith(f"agent{SEPARATOR}"):
        return None
    for agent in agents:
        if agent.id and trimmed.endswith(f"{SEPARATOR}{agent.id}"):
            return agent
    return None


def _target_team_id(conversation_id: str, known_project_id: Optional[str]) -> Optional[str]:
    try:
        return parse_conversation_id(conversation_id, known_project_id).team_id
    except ConversationIdError as exc:
        # Tolerant recovery: everything after the second hyphen. The team id
        # only labels the lead decision, the roster is already team-filtered.
        trimmed = conversation_id.strip()
        parts = trimmed.split(SEPARATOR)
        if parts[0] == "team" and len(parts) >= 3:
            logger.debug(
                "[SpeakingAuthority] structured parse failed for %s (%s), using tail",
                trimmed,
                exc,
            )
            return SEPARATOR.join(parts[2:])
        raise


def resolve_speaking_authority(
    conversation_scope: str,
    conversation_id: str,
    available_agents: Sequence[Agent],
    addressed_agent_id: Optional[str] = None,
    known_project_id: Optional[str] = None,
) -> SpeakingAuthorityResult:
    """
    Resolve which agent is allowed to speak in a conversation.

    Args:
        conversation_scope: "project", "team" or "agent"
        conversation_id: Canonical conversation identifier
        available_agents: Candidates, already filtered for the scope
        addressed_agent_id: Agent the user explicitly addressed, if any
        known_project_id: Owning project id, threaded into identifier parsing

    Raises:
        EmptyRosterError: if available_agents is empty
    """
    if not available_agents:
        raise EmptyRosterError(
            "Cannot resolve speaking authority: no agents available for "
            f"conversation {conversation_id}"
        )

    addressed = _find(available_agents, addressed_agent_id)
    if addressed is not None:
        return _decided(conversation_scope, addressed, REASON_EXPLICIT_ADDRESSING)
    if addressed_agent_id:
        logger.debug(
            "[SpeakingAuthority] addressed agent %s not in roster, continuing",
            addressed_agent_id,
        )

    if conversation_scope == "agent":
        try:
            target = _find(
                available_agents, _target_agent_id(conversation_id, known_project_id)
            )
        except ConversationIdError as exc:
            logger.debug(
                "[SpeakingAuthority] failed to parse agent conversationId %s: %s",
                conversation_id,
                exc,
            )
            target = _match_agent_by_tail(conversation_id, available_agents)
        if target is not None:
            return _decided(conversation_scope, target, REASON_DIRECT_AGENT)

    elif conversation_scope == "project":
        pm = next(
            (a for a in available_agents if "product manager" in a.role_lower), None
        )
        if pm is not None:
            return _decided(conversation_scope, pm, REASON_PROJECT_PM)

    elif conversation_scope == "team":
        try:
            team_id = _target_team_id(conversation_id, known_project_id)
        except ConversationIdError as exc:
            logger.warning(
                "[SpeakingAuthority] cannot recover team id from %s: %s",
                conversation_id,
                exc,
            )
            team_id = None
        if team_id:
            lead = resolve_team_lead(team_id, available_agents)
            return _decided(conversation_scope, lead.lead, REASON_TEAM_LEAD)

    return _decided(conversation_scope, available_agents[0], REASON_FALLBACK)


def _decided(scope: str, agent: Agent, reason: str) -> SpeakingAuthorityResult:
    logger.debug("[SpeakingAuthority] scope=%s speaker=%s reason=%s", scope, agent.id, reason)
    return SpeakingAuthorityResult(allowed_speaker=agent, reason=reason)
