"""
Send-message pipeline tests, driven directly against in-memory repositories.
"""

import asyncio

import pytest

from hatch_chat.application.commands.chat.send_message import (
    GENERATION_FAILED_CONTENT,
    SYSTEM_FALLBACK_CONTENT,
    SendMessageCommand,
    SendMessageHandler,
)
from hatch_chat.domain.entities.project import Project, Team
from hatch_chat.domain.exceptions import InvariantViolationError
from hatch_chat.domain.ports.reply_generator import ReplyGenerator
from hatch_chat.domain.services.invariants import InvariantGuard
from hatch_chat.domain.value_objects.conversation_id import (
    ParsedConversationId,
    parse_conversation_id,
)
from hatch_chat.infrastructure.persistence import (
    InMemoryAgentRepository,
    InMemoryConversationRepository,
    InMemoryMessageRepository,
    InMemoryProjectRepository,
    InMemoryTeamRepository,
)

from conftest import make_agent


class EchoGenerator(ReplyGenerator):
    def __init__(self):
        self.calls = []

    async def stream_reply(self, agent, user_content, context):
        self.calls.append((agent.id, user_content, context))
        yield f"{agent.name}: "
        yield "on it."


class BrokenGenerator(ReplyGenerator):
    async def stream_reply(self, agent, user_content, context):
        raise RuntimeError("provider unavailable")
        yield  # pragma: no cover


class Pipeline:
    def __init__(self, generator=None, strict=True):
        self.conversations = InMemoryConversationRepository()
        self.messages = InMemoryMessageRepository()
        self.projects = InMemoryProjectRepository()
        self.teams = InMemoryTeamRepository()
        self.agents = InMemoryAgentRepository()
        self.generator = generator or EchoGenerator()
        self.handler = SendMessageHandler(
            conv_repo=self.conversations,
            msg_repo=self.messages,
            project_repo=self.projects,
            team_repo=self.teams,
            agent_repo=self.agents,
            reply_generator=self.generator,
            guard=InvariantGuard(strict=strict),
        )
        self.events = []

    def seed(self, project_id="saas", agents=(), teams=()):
        async def _seed():
            await self.projects.save(Project(id=project_id, name=project_id.title()))
            for team_id in teams:
                await self.teams.save(Team(id=team_id, project_id=project_id, name=team_id))
            for agent in agents:
                await self.agents.save(agent)

        asyncio.run(_seed())

    def send(self, conversation_id, content="Hello team", known_project_id=None, **kwargs):
        async def emit(event):
            self.events.append(event)

        command = SendMessageCommand(
            parsed=parse_conversation_id(conversation_id, known_project_id),
            content=content,
            **kwargs,
        )
        return asyncio.run(self.handler.execute(command, emit=emit))

    def history(self, conversation_id):
        return asyncio.run(self.messages.get_by_conversation(conversation_id))


@pytest.fixture()
def pipeline():
    return Pipeline()


def test_project_with_zero_agents_persists_system_fallback(pipeline):
    pipeline.seed()
    result = pipeline.send("project-saas")

    response = result.response_message
    assert response.sender_kind == "system"
    assert response.agent_id is None
    assert response.sender_name == "System"
    assert response.content == SYSTEM_FALLBACK_CONTENT
    assert response.metadata["fallback"] == {"type": "system", "reason": "no_agents_in_project"}

    stored = pipeline.history("project-saas")
    assert [m.sender_kind for m in stored] == ["user", "system"]
    assert pipeline.generator.calls == []


def test_unknown_project_still_gets_a_response(pipeline):
    result = pipeline.send("project-ghost")
    assert result.response_message.fallback.type == "system"
    assert len(pipeline.history("project-ghost")) == 2


def test_project_scope_answered_by_product_manager(pipeline, dev, pm, designer):
    pipeline.seed(agents=[dev, pm, designer])
    result = pipeline.send("project-saas")

    response = result.response_message
    assert response.sender_kind == "agent"
    assert response.agent_id == "pm"
    assert response.content == "Priya: on it."
    assert response.metadata["authority_reason"] == "project_scope_pm_authority"
    assert response.fallback is None


def test_explicit_addressing(pipeline, dev, pm, designer):
    pipeline.seed(agents=[dev, pm, designer])
    result = pipeline.send("project-saas", addressed_agent_id="designer")
    assert result.response_message.agent_id == "designer"
    assert result.decision.reason == "explicit_addressing"


def test_empty_team_falls_back_to_project_pm(pipeline, dev, pm):
    pipeline.seed(agents=[dev, pm], teams=["design"])
    result = pipeline.send("team-saas-design")

    response = result.response_message
    assert response.agent_id == "pm"
    assert response.sender_kind == "agent"
    assert response.fallback.to_dict() == {"type": "pm", "reason": "no_agents_in_scope"}
    assert "team lead" in response.content
    assert pipeline.generator.calls == []


def test_unknown_agent_falls_back_to_first_agent_without_pm(pipeline, dev, designer):
    pipeline.seed(agents=[dev, designer])
    result = pipeline.send("agent-saas-ghost")
    assert result.response_message.agent_id == "dev"
    assert result.decision.fallback.reason == "no_agents_in_scope"


def test_team_lead_answers_in_team_scope(pipeline, pm, tech_lead):
    member = make_agent("ux", "UX Designer", team_id="design")
    pipeline.seed(agents=[pm, member, tech_lead], teams=["design"])
    result = pipeline.send("team-saas-design")

    assert result.response_message.agent_id == "tech-lead"
    assert result.decision.reason == "team_scope_team_lead"
    _, _, context = pipeline.generator.calls[0]
    assert context.mode == "team"
    assert context.team_name == "design"


def test_hyphenated_ids_with_known_project(pipeline):
    agent = make_agent("agent-1", "Engineer", project_id="saas-startup")
    pipeline.seed(project_id="saas-startup", agents=[agent])
    result = pipeline.send("agent-saas-startup-agent-1", known_project_id="saas-startup")
    assert result.response_message.agent_id == "agent-1"
    assert result.decision.reason == "direct_agent_conversation"


def test_frames_are_emitted_in_order(pipeline, pm):
    pipeline.seed(agents=[pm])
    result = pipeline.send("project-saas")

    types = [e["type"] for e in pipeline.events]
    assert types == ["new_message", "streaming_started", "streaming_chunk", "streaming_chunk"]
    assert pipeline.events[0]["message"]["messageType"] == "user"
    assert pipeline.events[1]["agentId"] == "pm"
    assert pipeline.events[-1]["accumulatedContent"] == "Priya: on it."
    assert pipeline.events[-1]["messageId"] == result.response_message.id.value


def test_generator_failure_still_persists_response(pm):
    pipeline = Pipeline(generator=BrokenGenerator())
    pipeline.seed(agents=[pm])
    result = pipeline.send("project-saas")

    response = result.response_message
    assert response.agent_id == "pm"
    assert response.content == GENERATION_FAILED_CONTENT
    assert response.metadata["generation_failed"] is True
    assert len(pipeline.history("project-saas")) == 2


def test_threaded_reply_links_to_user_message(pipeline, pm):
    pipeline.seed(agents=[pm])
    result = pipeline.send(
        "project-saas", parent_message_id="msg-root", thread_root_id="msg-root", thread_depth=1
    )
    response = result.response_message
    assert response.parent_message_id == result.user_message.id.value
    assert response.thread_root_id == "msg-root"
    assert response.thread_depth == 2


def test_retried_turn_is_not_persisted_twice(pipeline, pm):
    pipeline.seed(agents=[pm])
    first = pipeline.send("project-saas", message_id="msg-client-1")
    second = pipeline.send("project-saas", message_id="msg-client-1")

    assert second.response_message is first.response_message
    assert len(pipeline.history("project-saas")) == 2
    assert len(pipeline.generator.calls) == 1


def test_reused_client_id_in_another_conversation_is_a_new_turn(pipeline, pm, tech_lead):
    pipeline.seed(agents=[pm, tech_lead], teams=["design"])
    first = pipeline.send("project-saas", message_id="m-1")
    second = pipeline.send("team-saas-design", content="team question", message_id="m-1")

    team_history = pipeline.history("team-saas-design")
    assert len(team_history) == 2
    assert team_history[0].content == "team question"
    assert team_history[1].agent_id == "tech-lead"
    assert len(pipeline.history("project-saas")) == 2
    assert second.response_message.id != first.response_message.id
    assert len(pipeline.generator.calls) == 2


def test_history_is_passed_to_generator(pipeline, pm):
    pipeline.seed(agents=[pm])
    pipeline.send("project-saas", content="first")
    pipeline.send("project-saas", content="second")

    _, content, context = pipeline.generator.calls[-1]
    assert content == "second"
    assert context.history == [("user", "first"), ("assistant", "Priya: on it.")]


def test_conversation_is_bootstrapped(pipeline):
    pipeline.seed()
    pipeline.send("team-saas-design")
    conversation = asyncio.run(pipeline.conversations.get_by_id("team-saas-design"))
    assert conversation.scope == "team"
    assert conversation.team_id == "design"


def test_inconsistent_routing_raises_in_strict_mode(pipeline):
    pipeline.seed()
    bad = SendMessageCommand(
        parsed=ParsedConversationId(
            scope="agent", project_id="saas", context_id="design", raw="team-saas-design"
        ),
        content="hi",
    )
    with pytest.raises(InvariantViolationError):
        asyncio.run(pipeline.handler.execute(bad))
