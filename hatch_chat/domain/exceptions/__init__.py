"""
DOMAIN EXCEPTIONS - Business rule violations

These exceptions are raised by domain logic and caught by the application
and presentation layers. Presentation maps them to HTTP status codes or
WebSocket error frames.
"""

from hatch_chat.domain.exceptions.entity_not_found import EntityNotFoundError
from hatch_chat.domain.exceptions.validation_error import DomainValidationError
from hatch_chat.domain.exceptions.conversation_id import (
    ConversationIdError,
    MalformedConversationIdError,
    AmbiguousConversationIdError,
    ConversationIdMismatchError,
)
from hatch_chat.domain.exceptions.empty_roster import EmptyRosterError
from hatch_chat.domain.exceptions.invariant_violation import InvariantViolationError
from hatch_chat.domain.exceptions.envelope import EnvelopeValidationError

__all__ = [
    "EntityNotFoundError",
    "DomainValidationError",
    "ConversationIdError",
    "MalformedConversationIdError",
    "AmbiguousConversationIdError",
    "ConversationIdMismatchError",
    "EmptyRosterError",
    "InvariantViolationError",
    "EnvelopeValidationError",
]
