"""Chat commands."""

from .send_message import (
    ResponderDecision,
    SendMessageCommand,
    SendMessageHandler,
    SendMessageResult,
    decide_responder,
)

__all__ = [
    "SendMessageCommand",
    "SendMessageHandler",
    "SendMessageResult",
    "ResponderDecision",
    "decide_responder",
]
