"""
Agent Availability - which agents of a project may answer in a scope.

Callers pass a roster already filtered to one project. Availability is
membership only:
- project mode: every agent
- team mode: agents of that team
- agent mode: the target agent, or every agent when no target is given
  (speaking authority makes the final pick)

New dimensions (enabled flags, capacity) are added as extra predicates in
AVAILABILITY_CHECKS.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from hatch_chat.domain.entities.agent import Agent
from hatch_chat.domain.value_objects.conversation_id import ParsedConversationId


@dataclass(frozen=True)
class ScopeContext:
    project_id: str
    mode: str  # "project" | "team" | "agent"
    team_id: Optional[str] = None
    agent_id: Optional[str] = None

    @classmethod
    def from_parsed(cls, parsed: ParsedConversationId) -> ScopeContext:
        return cls(
            project_id=parsed.project_id,
            mode=parsed.scope,
            team_id=parsed.team_id,
            agent_id=parsed.agent_id,
        )


def _has_identity(agent: Agent, scope: ScopeContext) -> bool:
    return bool(agent and agent.id)


def _in_scope(agent: Agent, scope: ScopeContext) -> bool:
    if scope.mode == "team":
        return bool(scope.team_id) and agent.team_id == scope.team_id
    if scope.mode == "agent" and scope.agent_id:
        return agent.id == scope.agent_id
    return True


AVAILABILITY_CHECKS: tuple[Callable[[Agent, ScopeContext], bool], ...] = (
    _has_identity,
    _in_scope,
)


def is_agent_available(agent: Agent, scope_context: ScopeContext) -> bool:
    return all(check(agent, scope_context) for check in AVAILABILITY_CHECKS)


def filter_available_agents(
    agents: Sequence[Agent], scope_context: ScopeContext
) -> list[Agent]:
    """Return the agents available in the scope, preserving roster order."""
    return [a for a in agents if is_agent_available(a, scope_context)]
