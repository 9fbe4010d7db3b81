"""
Tests for the content catalog and character generation.
"""

import pytest

from mandate.content.catalog import (
    ContentCatalog,
    get_action,
    get_archetypes,
    get_available_actions,
    get_issues,
    get_parties,
    get_proposals,
)
from mandate.content.generator import generate_character
from mandate.errors import MandateError, UnknownContentError
from mandate.state.schema import ActionType, GamePhase, PlayerRole, VictoryType


def action_ids(actions):
    return [a.id for a in actions]


COMMON = ["act_poll", "act_dinner", "act_internal", "act_rest"]


class TestAvailableActions:
    """Common actions plus the role's own."""

    def test_candidate(self):
        actions = get_available_actions(PlayerRole.CANDIDATE, VictoryType.OFFICE)

        assert action_ids(actions) == COMMON + ["act_rally", "act_media"]

    def test_incumbent(self):
        actions = get_available_actions(PlayerRole.INCUMBENT, VictoryType.OFFICE)

        assert action_ids(actions) == COMMON + ["act_gov_project", "act_gov_law", "act_gov_speech"]

    def test_opposition(self):
        actions = get_available_actions(PlayerRole.OPPOSITION, VictoryType.CYCLES)

        assert action_ids(actions) == COMMON + [
            "act_opp_criticize", "act_opp_investigate", "act_opp_protest",
        ]

    def test_dictator_incumbent_gets_institution_actions(self):
        ids = action_ids(get_available_actions(PlayerRole.INCUMBENT, VictoryType.DICTATOR))

        assert ids[-4:] == [
            "act_inst_congress", "act_inst_military", "act_inst_courts", "act_win_dictator",
        ]

    @pytest.mark.parametrize("role", [PlayerRole.CANDIDATE, PlayerRole.OPPOSITION])
    def test_dictator_actions_only_for_incumbents(self, role):
        ids = action_ids(get_available_actions(role, VictoryType.DICTATOR))

        assert "act_win_dictator" not in ids

    def test_phase_filter_keeps_unrestricted_actions(self):
        actions = get_available_actions(PlayerRole.CANDIDATE, VictoryType.OFFICE, GamePhase.ELECTION)

        assert len(actions) == 6

    def test_returned_lists_are_fresh(self):
        first = get_available_actions(PlayerRole.CANDIDATE, VictoryType.OFFICE)
        first.clear()

        assert len(get_available_actions(PlayerRole.CANDIDATE, VictoryType.OFFICE)) == 6

    def test_action_ids_unique(self):
        ids = action_ids(ContentCatalog().all_actions())

        assert len(ids) == len(set(ids))


class TestLookups:

    def test_action(self):
        action = get_action("act_win_dictator")

        assert action.type == ActionType.GOVERNANCE
        assert action.difficulty == 25
        assert action.cost.energy == 50
        assert action.cost.funds == 50

    def test_unknown_action(self):
        with pytest.raises(UnknownContentError) as exc_info:
            get_action("act_nope")

        assert str(exc_info.value) == "Unknown action: act_nope"
        assert isinstance(exc_info.value, KeyError)
        assert isinstance(exc_info.value, MandateError)

    def test_issues(self):
        issues = get_issues()

        assert len(issues) == 7
        assert issues[0].id == "issue_transport"
        assert not issues[0].controversial

    def test_proposals_by_issue(self):
        proposals = get_proposals("issue_transport")

        assert [p.id for p in proposals] == ["prop_metro", "prop_bus"]
        assert proposals[1].pop_effect["demo_biz"] == -2

    def test_issue_without_proposals(self):
        assert get_proposals("issue_wages") == []
        assert get_proposals("issue_unknown") == []

    def test_proposals_reference_known_issues(self):
        known = {issue.id for issue in get_issues()}

        assert all(p.issue_id in known for p in ContentCatalog().proposals())

    def test_archetypes_and_parties(self):
        assert len(get_archetypes()) == 5
        assert len(get_parties()) == 5

    def test_custom_data_dir(self, tmp_path):
        (tmp_path / "issues.json").write_text(
            '{"issues": [{"id": "issue_x", "name": "X"}], "proposals": []}',
            encoding="utf-8",
        )

        catalog = ContentCatalog(tmp_path)

        assert [i.id for i in catalog.issues()] == ["issue_x"]


class TestGenerateCharacter:
    """Characters are drawn from an archetype with small stat variation."""

    def test_name_from_pool(self, dice):
        character = generate_character("arch_union", dice(0, 0, 0, choice_index=2))

        assert character.name == "Carlos Negotiator"
        assert character.archetype_id == "arch_union"

    def test_stats_vary_by_one(self, dice):
        rng = dice(1, -1, 0)

        character = generate_character("arch_union", rng)

        assert character.stats.charisma == 7
        assert character.stats.intelligence == 4
        assert character.stats.resources == 5
        assert rng.calls == [(-1, 1)] * 3

    def test_stats_never_below_one(self, dice):
        character = generate_character("arch_student", dice(0, 0, -1))

        assert character.stats.resources == 1

    def test_flavour_text(self, dice):
        character = generate_character("arch_tech", dice(0, 0, 0))

        assert character.flavour_text == "A rising star in the Technocrat movement."
        assert character.id.startswith("char_")

    def test_unknown_archetype(self, dice):
        with pytest.raises(UnknownContentError):
            generate_character("arch_wizard", dice())
