"""
Project and Team Entities - containers for agents and conversations.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Project:
    id: str  # opaque, may contain hyphens
    name: str
    created_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self):
        if not self.id or not self.id.strip():
            raise ValueError("Project id cannot be empty")


@dataclass
class Team:
    id: str
    project_id: str
    name: str
    created_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self):
        if not self.id or not self.id.strip():
            raise ValueError("Team id cannot be empty")
        if not self.project_id:
            raise ValueError("Team must belong to a project")
