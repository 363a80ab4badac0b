"""
EmptyRosterError - Raised when a resolver receives zero agents.

Fatal for the resolver, never for the chat: the send-message pipeline turns
it into a persisted PM or System fallback.
"""


class EmptyRosterError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
