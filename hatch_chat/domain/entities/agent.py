"""
Agent Entity - an AI colleague that can answer in a conversation.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

# Reserved label for system-generated messages. Never a valid agent id.
SYSTEM_SENDER = "system"


@dataclass
class Agent:
    id: str
    name: str
    role: str  # free text, e.g. "Senior Engineer", "Product Manager"
    project_id: str = ""
    team_id: Optional[str] = None
    is_team_lead: bool = False

    def __post_init__(self):
        if self.id == SYSTEM_SENDER:
            raise ValueError(f'"{SYSTEM_SENDER}" is reserved and cannot be an agent id')
        if self.role is None:
            self.role = ""

    @property
    def role_lower(self) -> str:
        return self.role.lower()
