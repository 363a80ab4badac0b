"""
Conversation Entity - one canonical chat thread (project, team or agent).

Scope and owning ids are fixed at creation; there is no update path.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from hatch_chat.domain.value_objects.conversation_id import ParsedConversationId


@dataclass(frozen=True)
class Conversation:
    id: str
    scope: str
    project_id: str
    team_id: Optional[str] = None
    agent_id: Optional[str] = None
    title: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_parsed(
        cls, parsed: ParsedConversationId, title: Optional[str] = None
    ) -> Conversation:
        """Factory method to create a Conversation from its decoded identifier."""
        return cls(
            id=parsed.raw,
            scope=parsed.scope,
            project_id=parsed.project_id,
            team_id=parsed.team_id,
            agent_id=parsed.agent_id,
            title=title,
        )

    @property
    def context_id(self) -> Optional[str]:
        return self.team_id or self.agent_id
