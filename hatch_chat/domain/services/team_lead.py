"""
Team Lead Resolution - pick exactly one lead agent for a team.

Rules, first match wins:
1. Explicit lead flag (Agent.is_team_lead)
2. Role priority table (PMs excluded unless flagged)
3. First agent in roster order

The same roster always yields the same (lead, reason) pair.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

from hatch_chat.domain.entities.agent import Agent
from hatch_chat.domain.exceptions.empty_roster import EmptyRosterError

logger = logging.getLogger(__name__)

REASON_EXPLICIT = "explicit_team_lead"
REASON_ROLE_PRIORITY = "role_priority:{role}"
REASON_FALLBACK = "fallback:first_agent"

# Ordered: earlier keywords outrank later ones.
ROLE_PRIORITY: tuple[str, ...] = (
    "Tech Lead",
    "Engineering Lead",
    "Design Lead",
    "UX Lead",
    "Product Lead",
    "Team Lead",
    "Lead",
    "Senior Engineer",
    "Senior Designer",
)


@dataclass(frozen=True)
class TeamLeadResult:
    lead: Agent
    reason: str


def is_product_manager(agent: Agent) -> bool:
    """Role contains "product manager", or is exactly "pm" (case-insensitive)."""
    role = agent.role_lower.strip()
    return "product manager" in role or role == "pm"


def role_matches(role: str, keyword: str) -> bool:
    """
    Case-insensitive match of a priority keyword against a free-text role.

    Matches on substring, or, for multi-word keywords, when every word
    appears in the role in order ("Lead Tech Engineer" does not match
    "Tech Lead", "Tech Platform Lead" does).
    """
    role_lower = role.lower()
    keyword_lower = keyword.lower()
    if keyword_lower in role_lower:
        return True

    words = keyword_lower.split()
    if len(words) < 2:
        return False
    position = -1
    for word in words:
        position = role_lower.find(word, position + 1)
        if position == -1:
            return False
    return True


def _keyword_rule(keyword: str) -> tuple[str, Callable[[Agent], bool]]:
    return keyword, lambda agent: role_matches(agent.role, keyword)


# Single auditable table of (label, predicate), evaluated top to bottom.
ROLE_PRIORITY_RULES: tuple[tuple[str, Callable[[Agent], bool]], ...] = tuple(
    _keyword_rule(keyword) for keyword in ROLE_PRIORITY
)


def resolve_team_lead(team_id: str, agents: Sequence[Agent]) -> TeamLeadResult:
    """
    Resolve the Team Lead for a team.

    Args:
        team_id: Team identifier (used for logging and error messages)
        agents: Team roster, in roster order

    Returns:
        TeamLeadResult with the lead agent and the rule that selected it

    Raises:
        EmptyRosterError: if the roster is empty
    """
    if not agents:
        raise EmptyRosterError(
            f"Cannot resolve team lead: no agents provided for team {team_id}"
        )

    explicit = next((a for a in agents if a.is_team_lead), None)
    if explicit is not None:
        return _decided(team_id, TeamLeadResult(lead=explicit, reason=REASON_EXPLICIT))

    # PM exclusion. An all-PM roster still has to produce a lead.
    candidates = [a for a in agents if not is_product_manager(a)] or list(agents)

    for label, predicate in ROLE_PRIORITY_RULES:
        match = next((a for a in candidates if predicate(a)), None)
        if match is not None:
            return _decided(
                team_id,
                TeamLeadResult(lead=match, reason=REASON_ROLE_PRIORITY.format(role=label)),
            )

    return _decided(team_id, TeamLeadResult(lead=candidates[0], reason=REASON_FALLBACK))


def _decided(team_id: str, result: TeamLeadResult) -> TeamLeadResult:
    logger.debug(
        "[TeamLead] team=%s lead=%s reason=%s", team_id, result.lead.id, result.reason
    )
    return result
