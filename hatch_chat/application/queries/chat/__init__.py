from .get_chat_history import (
    GetChatHistoryHandler,
    GetChatHistoryQuery,
    GetChatHistoryResult,
)

__all__ = ["GetChatHistoryQuery", "GetChatHistoryHandler", "GetChatHistoryResult"]
