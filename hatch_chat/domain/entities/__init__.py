"""
ENTITIES - Business objects with identity

Each entity:
- Has a unique identifier
- Pure Python dataclasses (no ORM, no Pydantic)
"""

from hatch_chat.domain.entities.project import Project, Team
from hatch_chat.domain.entities.agent import Agent, SYSTEM_SENDER
from hatch_chat.domain.entities.conversation import Conversation
from hatch_chat.domain.entities.message import Message, FallbackInfo

__all__ = [
    "Project",
    "Team",
    "Agent",
    "SYSTEM_SENDER",
    "Conversation",
    "Message",
    "FallbackInfo",
]
