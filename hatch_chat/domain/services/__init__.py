"""
DOMAIN SERVICES - pure routing logic

Synchronous, side-effect free (logging aside), no shared mutable state.
Safe to call concurrently from any number of message handlers.
"""

from hatch_chat.domain.services.team_lead import TeamLeadResult, resolve_team_lead
from hatch_chat.domain.services.speaking_authority import (
    SpeakingAuthorityResult,
    resolve_speaking_authority,
)
from hatch_chat.domain.services.agent_availability import (
    ScopeContext,
    filter_available_agents,
    is_agent_available,
)
from hatch_chat.domain.services.invariants import InvariantGuard

__all__ = [
    "TeamLeadResult",
    "resolve_team_lead",
    "SpeakingAuthorityResult",
    "resolve_speaking_authority",
    "ScopeContext",
    "filter_available_agents",
    "is_agent_available",
    "InvariantGuard",
]
