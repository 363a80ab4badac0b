from hatch_chat.application.dto.chat import ErrorFrame, FallbackDTO, MessageDTO
from hatch_chat.application.dto.roster import AgentDTO, ConversationDTO, TeamDTO, ProjectDTO

__all__ = [
    "ErrorFrame",
    "FallbackDTO",
    "MessageDTO",
    "AgentDTO",
    "ConversationDTO",
    "TeamDTO",
    "ProjectDTO",
]
