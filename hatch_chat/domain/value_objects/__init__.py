"""
VALUE OBJECTS - Immutable domain types

Each value object:
- Has no identity (compared by value, not by ID)
- Is immutable (frozen dataclass)
- Validates itself on creation
- Pure Python (no framework dependencies)
"""

from hatch_chat.domain.value_objects.conversation_id import (
    ConversationScope,
    ParsedConversationId,
    build_conversation_id,
    parse_conversation_id,
    belongs_to_project,
    scope_prefix,
)
from hatch_chat.domain.value_objects.message_id import MessageId

__all__ = [
    "ConversationScope",
    "ParsedConversationId",
    "build_conversation_id",
    "parse_conversation_id",
    "belongs_to_project",
    "scope_prefix",
    "MessageId",
]
