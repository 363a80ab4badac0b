"""
Persistence Layer - repository implementations for domain ports.

The storage engine is an external collaborator; these in-process
implementations expose the same create/query contract.
"""

from hatch_chat.infrastructure.persistence.in_memory_conversation_repository import (
    InMemoryConversationRepository,
)
from hatch_chat.infrastructure.persistence.in_memory_message_repository import (
    InMemoryMessageRepository,
)
from hatch_chat.infrastructure.persistence.in_memory_roster_repositories import (
    InMemoryAgentRepository,
    InMemoryProjectRepository,
    InMemoryTeamRepository,
)

__all__ = [
    "InMemoryConversationRepository",
    "InMemoryMessageRepository",
    "InMemoryProjectRepository",
    "InMemoryTeamRepository",
    "InMemoryAgentRepository",
]
