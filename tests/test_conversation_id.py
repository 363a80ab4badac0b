import pytest

from hatch_chat.domain.exceptions import (
    AmbiguousConversationIdError,
    ConversationIdMismatchError,
    DomainValidationError,
    MalformedConversationIdError,
)
from hatch_chat.domain.value_objects.conversation_id import (
    belongs_to_project,
    build_conversation_id,
    parse_conversation_id,
    scope_prefix,
)


class TestBuild:
    def test_project(self):
        assert build_conversation_id("project", "saas") == "project-saas"

    def test_team(self):
        assert build_conversation_id("team", "saas", "design") == "team-saas-design"

    def test_agent_with_hyphenated_ids(self):
        assert (
            build_conversation_id("agent", "saas-startup", "agent-1")
            == "agent-saas-startup-agent-1"
        )

    def test_project_rejects_context(self):
        with pytest.raises(MalformedConversationIdError):
            build_conversation_id("project", "saas", "design")

    @pytest.mark.parametrize("context_id", [None, "", "   "])
    def test_team_requires_context(self, context_id):
        with pytest.raises(MalformedConversationIdError):
            build_conversation_id("team", "saas", context_id)

    def test_blank_project(self):
        with pytest.raises(MalformedConversationIdError):
            build_conversation_id("team", " ", "design")

    def test_unknown_scope(self):
        with pytest.raises(MalformedConversationIdError):
            build_conversation_id("channel", "saas", "design")


class TestParse:
    def test_simple_team_id(self):
        parsed = parse_conversation_id("team-saas-design")
        assert parsed.scope == "team"
        assert parsed.project_id == "saas"
        assert parsed.context_id == "design"
        assert parsed.team_id == "design"
        assert parsed.agent_id is None

    def test_project_id_keeps_hyphens(self):
        parsed = parse_conversation_id("project-saas-startup")
        assert parsed.scope == "project"
        assert parsed.project_id == "saas-startup"
        assert parsed.context_id is None

    def test_ambiguous_without_known_project(self):
        with pytest.raises(AmbiguousConversationIdError) as exc_info:
            parse_conversation_id("team-saas-startup-design-team")
        assert "requires known projectId" in str(exc_info.value)

    def test_known_project_resolves_ambiguity(self):
        parsed = parse_conversation_id(
            "team-saas-startup-design-team", known_project_id="saas-startup"
        )
        assert parsed.project_id == "saas-startup"
        assert parsed.context_id == "design-team"

    def test_mismatched_project(self):
        with pytest.raises(ConversationIdMismatchError):
            parse_conversation_id("team-saas-design", known_project_id="other")

    def test_mismatched_project_scope(self):
        with pytest.raises(ConversationIdMismatchError):
            parse_conversation_id("project-saas", known_project_id="other")

    @pytest.mark.parametrize(
        "raw",
        ["", "   ", "saas-design", "team-saas", "team--design", "project-", "agent-saas-"],
    )
    def test_malformed(self, raw):
        with pytest.raises(MalformedConversationIdError):
            parse_conversation_id(raw)

    def test_empty_context_after_known_project(self):
        with pytest.raises(MalformedConversationIdError):
            parse_conversation_id("team-saas-", known_project_id="saas")

    def test_input_is_trimmed(self):
        assert parse_conversation_id("  team-saas-design ").raw == "team-saas-design"

    @pytest.mark.parametrize(
        "scope,project_id,context_id",
        [
            ("project", "saas", None),
            ("project", "saas-startup", None),
            ("team", "saas", "design"),
            ("team", "saas-startup", "design-team"),
            ("agent", "a-b-c", "agent-1"),
        ],
    )
    def test_round_trip_with_known_project(self, scope, project_id, context_id):
        raw = build_conversation_id(scope, project_id, context_id)
        parsed = parse_conversation_id(raw, known_project_id=project_id)
        assert (parsed.scope, parsed.project_id, parsed.context_id) == (
            scope,
            project_id,
            context_id,
        )
        assert parsed.build() == raw


def test_scope_prefix():
    assert scope_prefix("team-saas-design") == "team"
    assert scope_prefix("channel-x") is None
    assert scope_prefix("") is None


def test_belongs_to_project():
    assert belongs_to_project("agent-saas-startup-agent-1", "saas-startup")
    assert not belongs_to_project("agent-saas-startup-agent-1", "acme")
    assert not belongs_to_project("nonsense", "saas")


def test_id_errors_are_domain_validation_errors():
    with pytest.raises(DomainValidationError) as exc_info:
        parse_conversation_id("team-saas")
    assert isinstance(exc_info.value, MalformedConversationIdError)
    assert exc_info.value.message
