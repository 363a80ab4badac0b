"""Conversation commands."""

from .ensure_conversation import EnsureConversationCommand, EnsureConversationHandler

__all__ = [
    "EnsureConversationCommand",
    "EnsureConversationHandler",
]
