import logging

import pytest

from hatch_chat.domain.entities.conversation import Conversation
from hatch_chat.domain.exceptions import InvariantViolationError
from hatch_chat.domain.services.invariants import (
    CONVERSATION_EXISTS,
    NO_FAKE_SYSTEM_AGENT,
    ROUTING_CONSISTENCY,
    InvariantGuard,
)
from hatch_chat.domain.value_objects.conversation_id import parse_conversation_id

strict_guard = InvariantGuard(strict=True)
lenient_guard = InvariantGuard(strict=False)


class TestNoFakeSystemAgent:
    def test_valid_messages(self):
        assert strict_guard.no_fake_system_agent(None, "system")
        assert strict_guard.no_fake_system_agent("pm", "agent")

    @pytest.mark.parametrize(
        "agent_id,message_type",
        [("system", "agent"), ("system", "system"), ("pm", "system"), (None, "agent")],
    )
    def test_strict_raises(self, agent_id, message_type):
        with pytest.raises(InvariantViolationError) as exc_info:
            strict_guard.no_fake_system_agent(agent_id, message_type)
        assert exc_info.value.invariant == NO_FAKE_SYSTEM_AGENT

    def test_lenient_logs(self, caplog):
        with caplog.at_level(logging.WARNING, logger="hatch_chat"):
            assert lenient_guard.no_fake_system_agent("system", "agent") is False
        assert "[INVARIANT]" in caplog.text


class TestRoutingConsistency:
    def test_consistent(self):
        assert strict_guard.routing_consistency("team-saas-design", "team", "saas", "design")
        assert strict_guard.routing_consistency(
            "team-saas-startup-design-team", "team", "saas-startup", "design-team"
        )
        assert strict_guard.routing_consistency("project-saas", "project", "saas", None)

    @pytest.mark.parametrize(
        "conversation_id,mode,project_id,context_id",
        [
            ("team-saas-design", "agent", "saas", "design"),
            ("team-saas-design", "team", "saas", "other"),
            ("team-saas-design", "team", "acme", "design"),
            ("project-saas", "project", "saas", "design"),
            ("team-saas-design", "team", "saas", None),
            ("", "team", "saas", "design"),
        ],
    )
    def test_inconsistent(self, conversation_id, mode, project_id, context_id):
        with pytest.raises(InvariantViolationError) as exc_info:
            strict_guard.routing_consistency(conversation_id, mode, project_id, context_id)
        assert exc_info.value.invariant == ROUTING_CONSISTENCY

    def test_lenient_returns_false(self):
        assert lenient_guard.routing_consistency("team-saas-design", "team", "saas", "x") is False


class TestConversationExists:
    def test_exists(self):
        conversation = Conversation.from_parsed(parse_conversation_id("project-saas"))
        assert strict_guard.conversation_exists("project-saas", conversation)

    def test_missing(self):
        with pytest.raises(InvariantViolationError) as exc_info:
            strict_guard.conversation_exists("project-saas", None)
        assert exc_info.value.invariant == CONVERSATION_EXISTS
