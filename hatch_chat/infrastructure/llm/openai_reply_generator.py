"""
OpenAI-backed reply generator (async, streaming).

Usage:
    generator = OpenAIReplyGenerator(AsyncOpenAI(api_key=...), model="gpt-4o-mini")
    async for chunk in generator.stream_reply(agent, "Hi", context):
        ...
"""

import logging
from typing import AsyncIterator

from httpx import Timeout
from openai import AsyncOpenAI

from hatch_chat.domain.entities.agent import Agent
from hatch_chat.domain.ports.reply_generator import ReplyContext, ReplyGenerator

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = Timeout(40.0, connect=10.0)

_SYSTEM_PROMPT = (
    "You are {name}, the {role} of the project \"{project}\"{team}. "
    "You are chatting in the {mode} conversation. Answer as yourself, briefly "
    "and concretely. Do not answer on behalf of other colleagues."
)


class OpenAIReplyGenerator(ReplyGenerator):
    def __init__(
        self,
        client: AsyncOpenAI,
        model: str,
        temperature: float = 0.7,
        max_tokens: int = 400,
    ):
        self._client = client
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens

    def _build_messages(
        self, agent: Agent, user_content: str, context: ReplyContext
    ) -> list[dict]:
        system = _SYSTEM_PROMPT.format(
            name=agent.name,
            role=agent.role or "team member",
            project=context.project_name,
            team=f', team "{context.team_name}"' if context.team_name else "",
            mode=context.mode,
        )
        messages = [{"role": "system", "content": system}]
        messages.extend({"role": role, "content": content} for role, content in context.history)
        messages.append({"role": "user", "content": user_content})
        return messages

    async def stream_reply(
        self, agent: Agent, user_content: str, context: ReplyContext
    ) -> AsyncIterator[str]:
        logger.debug("Streaming reply from %s for agent %s", self._model, agent.id)
        try:
            stream = await self._client.chat.completions.create(
                model=self._model,
                messages=self._build_messages(agent, user_content, context),
                temperature=self._temperature,
                max_tokens=self._max_tokens,
                stream=True,
                timeout=DEFAULT_TIMEOUT,
            )
            async for chunk in stream:
                if chunk.choices and chunk.choices[0].delta.content:
                    yield chunk.choices[0].delta.content
        except Exception as e:
            logger.error("Reply stream from %s for agent %s failed: %s", self._model, agent.id, e)
            raise
