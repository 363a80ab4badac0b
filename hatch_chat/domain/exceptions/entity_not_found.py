"""
EntityNotFoundError - Raised when a roster or conversation lookup misses.

Covers unknown projects and teams on the roster endpoints, and conversation
ids with no stored conversation when history is read.
Maps to: HTTP 404 Not Found
"""


class EntityNotFoundError(Exception):
    """A project, team or conversation id that is not in the store."""

    def __init__(self, message: str = "No such project, team or conversation."):
        super().__init__(message)
