"""
REPOSITORY PORTS - Data persistence interfaces

Each repository port:
- Is an abstract base class (ABC)
- Defines methods the domain needs
- Does NOT specify implementation

Infrastructure layer provides implementations.
"""

from hatch_chat.domain.ports.repositories.conversation_repository import ConversationRepository
from hatch_chat.domain.ports.repositories.message_repository import MessageRepository
from hatch_chat.domain.ports.repositories.roster_repositories import (
    AgentRepository,
    ProjectRepository,
    TeamRepository,
)

__all__ = [
    "ConversationRepository",
    "MessageRepository",
    "ProjectRepository",
    "TeamRepository",
    "AgentRepository",
]
