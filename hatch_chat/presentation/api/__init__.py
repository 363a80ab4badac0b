"""
API Routers - FastAPI endpoint definitions.
"""

from hatch_chat.presentation.api.chat import router as chat_router
from hatch_chat.presentation.api.conversations import router as conversations_router
from hatch_chat.presentation.api.projects import router as projects_router

__all__ = [
    "chat_router",
    "conversations_router",
    "projects_router",
]
