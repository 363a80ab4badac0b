"""
Reply Generator Port - the text-generation backend.

Called only after a responder has been chosen. Implementations stream the
reply as text chunks.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import AsyncIterator, Optional

from hatch_chat.domain.entities.agent import Agent


@dataclass(frozen=True)
class ReplyContext:
    mode: str
    project_name: str
    team_name: Optional[str] = None
    # (role, content) pairs, oldest first; role is "user" or "assistant"
    history: list[tuple[str, str]] = field(default_factory=list)


class ReplyGenerator(ABC):
    @abstractmethod
    def stream_reply(
        self, agent: Agent, user_content: str, context: ReplyContext
    ) -> AsyncIterator[str]: ...
