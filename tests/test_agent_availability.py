from hatch_chat.domain.services.agent_availability import (
    ScopeContext,
    filter_available_agents,
    is_agent_available,
)
from hatch_chat.domain.value_objects.conversation_id import parse_conversation_id

from conftest import make_agent

ROSTER = [
    make_agent("pm", "Product Manager"),
    make_agent("a", "Engineer", team_id="core"),
    make_agent("b", "Designer", team_id="design"),
    make_agent("c", "Tech Lead", team_id="core"),
]


def test_project_mode_keeps_everyone_in_order():
    scope = ScopeContext(project_id="saas", mode="project")
    assert [a.id for a in filter_available_agents(ROSTER, scope)] == ["pm", "a", "b", "c"]


def test_team_mode_filters_by_team():
    scope = ScopeContext.from_parsed(parse_conversation_id("team-saas-core"))
    assert [a.id for a in filter_available_agents(ROSTER, scope)] == ["a", "c"]


def test_team_mode_without_team_id_is_empty():
    scope = ScopeContext(project_id="saas", mode="team")
    assert filter_available_agents(ROSTER, scope) == []


def test_agent_mode_targets_one_agent():
    scope = ScopeContext.from_parsed(parse_conversation_id("agent-saas-b"))
    assert [a.id for a in filter_available_agents(ROSTER, scope)] == ["b"]


def test_agent_mode_unknown_target_is_empty():
    scope = ScopeContext(project_id="saas", mode="agent", agent_id="ghost")
    assert filter_available_agents(ROSTER, scope) == []


def test_agent_mode_without_target_keeps_everyone():
    scope = ScopeContext(project_id="saas", mode="agent")
    assert len(filter_available_agents(ROSTER, scope)) == len(ROSTER)


def test_agent_without_id_is_never_available():
    nameless = make_agent("x", "Engineer")
    nameless.id = ""
    assert not is_agent_available(nameless, ScopeContext(project_id="saas", mode="project"))
