"""
DomainValidationError - Raised when a roster or conversation rule is broken.

Duplicate project/team/agent ids and the reserved "system" agent id land
here, as do malformed conversation ids via the ConversationIdError family.
Maps to: HTTP 422 Unprocessable Entity
"""


class DomainValidationError(Exception):
    """Rejected roster change or conversation id."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
