"""
Deterministic reply generator used when no LLM provider is configured.
"""

from typing import AsyncIterator

from hatch_chat.domain.entities.agent import Agent
from hatch_chat.domain.ports.reply_generator import ReplyContext, ReplyGenerator


class CannedReplyGenerator(ReplyGenerator):
    async def stream_reply(
        self, agent: Agent, user_content: str, context: ReplyContext
    ) -> AsyncIterator[str]:
        where = context.team_name or context.project_name
        yield f"{agent.name} ({agent.role}) here. "
        yield f"Noted for {where}, I'll follow up on this."
