import pytest

from hatch_chat.domain.exceptions import EmptyRosterError
from hatch_chat.domain.services.team_lead import (
    REASON_EXPLICIT,
    REASON_FALLBACK,
    is_product_manager,
    resolve_team_lead,
    role_matches,
)

from conftest import make_agent


class TestResolveTeamLead:
    def test_explicit_flag_wins_over_role(self):
        tech = make_agent("t", "Tech Lead")
        flagged = make_agent("f", "Junior Engineer", is_team_lead=True)
        result = resolve_team_lead("core", [tech, flagged])
        assert result.lead is flagged
        assert result.reason == REASON_EXPLICIT

    def test_role_priority_order(self):
        senior = make_agent("s", "Senior Engineer")
        design_lead = make_agent("d", "Design Lead")
        tech = make_agent("t", "Tech Lead")
        result = resolve_team_lead("core", [senior, design_lead, tech])
        assert result.lead is tech
        assert result.reason == "role_priority:Tech Lead"

    def test_in_order_word_match(self):
        lead = make_agent("l", "Tech Platform Lead")
        result = resolve_team_lead("core", [make_agent("s", "Senior Engineer"), lead])
        assert result.lead is lead
        assert result.reason == "role_priority:Tech Lead"

    def test_product_manager_excluded(self):
        pm = make_agent("pm", "Product Manager")
        dev = make_agent("dev", "Engineer")
        result = resolve_team_lead("core", [pm, dev])
        assert result.lead is dev
        assert result.reason == REASON_FALLBACK

    def test_flagged_product_manager_can_lead(self):
        pm = make_agent("pm", "Product Manager", is_team_lead=True)
        tech = make_agent("t", "Tech Lead")
        result = resolve_team_lead("core", [tech, pm])
        assert result.lead is pm
        assert result.reason == REASON_EXPLICIT

    def test_all_product_managers_still_yield_a_lead(self):
        first = make_agent("pm1", "Product Manager")
        second = make_agent("pm2", "PM")
        result = resolve_team_lead("core", [first, second])
        assert result.lead is first
        assert result.reason == REASON_FALLBACK

    def test_fallback_first_agent(self):
        a = make_agent("a", "Engineer")
        b = make_agent("b", "Designer")
        assert resolve_team_lead("core", [a, b]).lead is a

    def test_deterministic(self):
        roster = [
            make_agent("a", "Engineer"),
            make_agent("b", "Lead Designer"),
            make_agent("c", "Senior Designer"),
        ]
        results = {
            (r.lead.id, r.reason) for r in (resolve_team_lead("core", roster) for _ in range(5))
        }
        assert results == {("b", "role_priority:Lead")}

    def test_empty_roster(self):
        with pytest.raises(EmptyRosterError):
            resolve_team_lead("core", [])


def test_is_product_manager():
    assert is_product_manager(make_agent("a", "Senior Product Manager"))
    assert is_product_manager(make_agent("b", " pm "))
    assert not is_product_manager(make_agent("c", "Product Designer"))


def test_role_matches():
    assert role_matches("Staff Tech Lead", "Tech Lead")
    assert not role_matches("Lead Tech Engineer", "Tech Lead")
    assert not role_matches("Engineer", "Lead")
