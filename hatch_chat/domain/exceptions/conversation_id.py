"""
Conversation identifier errors.
Maps to: HTTP 422 Unprocessable Entity / INVALID_ENVELOPE error frame

Parsing never guesses. Every failure is one of these, so callers can tell a
malformed string from one that only needs the owning project id to decode.
"""

from hatch_chat.domain.exceptions.validation_error import DomainValidationError


class ConversationIdError(DomainValidationError):
    """Base class for canonical conversation identifier failures."""


class MalformedConversationIdError(ConversationIdError):
    """The string does not follow the scope-prefix grammar."""


class AmbiguousConversationIdError(ConversationIdError):
    """Well-formed, but undecidable without the owning project id."""

    def __init__(self, conversation_id: str, segment_count: int):
        super().__init__(
            f'Ambiguous conversation ID — requires known projectId: "{conversation_id}" '
            f"has {segment_count} hyphen-separated parts, so the boundary between "
            "projectId and contextId cannot be determined."
        )
        self.conversation_id = conversation_id
        self.segment_count = segment_count


class ConversationIdMismatchError(ConversationIdError):
    """The identifier does not belong to the given project."""

    def __init__(self, conversation_id: str, known_project_id: str, expected_prefix: str):
        super().__init__(
            f'Conversation ID "{conversation_id}" does not belong to project '
            f'"{known_project_id}" (expected prefix "{expected_prefix}")'
        )
        self.conversation_id = conversation_id
        self.known_project_id = known_project_id
