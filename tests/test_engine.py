"""
Tests for the CampaignEngine session orchestrator.

The engine loads a session, runs a pure operation, saves the result with a
version check and emits events. Rules themselves are tested elsewhere.
"""

import pytest

from mandate.errors import GameOverError, SessionNotFoundError, StaleStateError, UnknownContentError
from mandate.state.event_bus import EventType
from mandate.state.schema import GamePhase, PlayerRole, VictoryConfig, VictoryType
from mandate.state.schemas import RejectionReason
from mandate.systems.engine import CampaignEngine


@pytest.fixture
def make_engine(memory_store, bus, dice):
    """make_engine(15, history_limit=1): engine whose next d20 is 15."""
    def _make(*rolls, **config):
        return CampaignEngine(memory_store, rng=dice(*rolls), config=config or None, bus=bus)
    return _make


@pytest.fixture
def engine(make_engine):
    return make_engine()


@pytest.fixture
def started(engine, room, character, party):
    """Engine with a session created for the room."""
    engine.create_session(room, character, party)
    return engine


class TestCreateSession:

    def test_session_saved(self, engine, memory_store, room, character, party):
        state = engine.create_session(room, character, party)

        assert memory_store.load(room.id) == state

    def test_session_created_event(self, engine, bus, room, character, party):
        engine.create_session(room, character, party)

        events = bus.get_history(EventType.SESSION_CREATED)
        assert len(events) == 1
        assert events[0].room_id == room.id
        assert events[0].season == 1
        assert events[0].data == {"victory": "OFFICE"}

    def test_missing_session(self, engine):
        with pytest.raises(SessionNotFoundError):
            engine.get_session("room-404")


class TestTakeAction:

    def test_applied_action_saved(self, make_engine, memory_store, room, character, party):
        engine = make_engine(15)
        engine.create_session(room, character, party)

        result = engine.take_action(room.id, "act_rally")

        assert result.applied
        assert result.roll.d20 == 15
        stored = memory_store.load(room.id)
        assert stored == result.state
        assert stored.state_version == 1
        assert stored.player_state.stats.popularity == 13

    def test_turn_resolved_event(self, make_engine, bus, room, character, party):
        engine = make_engine(15)
        engine.create_session(room, character, party)

        engine.take_action(room.id, "act_rally")

        event = bus.get_history(EventType.TURN_RESOLVED)[0]
        assert event.data == {"action_id": "act_rally", "turn": 1, "d20": 15, "outcome": "SUCCESS"}

    def test_refused_action_not_saved(self, started, memory_store, bus, room):
        state = memory_store.load(room.id)
        state.player_state.stats.funds = 0
        memory_store.save(state)

        result = started.take_action(room.id, "act_rally")

        assert not result.applied
        assert result.rejection == RejectionReason.INSUFFICIENT_FUNDS
        assert memory_store.load(room.id).state_version == 0
        rejected = bus.get_history(EventType.ACTION_REJECTED)
        assert rejected[0].data == {"action_id": "act_rally", "reason": "insufficient_funds"}

    def test_expected_version_matches(self, started, room):
        result = started.take_action(room.id, "act_rest", expected_version=0)

        assert result.state.state_version == 1

    def test_stale_expected_version(self, started, room):
        started.take_action(room.id, "act_rest")

        with pytest.raises(StaleStateError):
            started.take_action(room.id, "act_rest", expected_version=0)

    def test_unknown_action(self, started, room):
        with pytest.raises(UnknownContentError):
            started.take_action(room.id, "act_teleport")

    def test_phase_changed_event(self, started, memory_store, bus, room):
        state = memory_store.load(room.id)
        state.current_turn = 36
        memory_store.save(state)

        result = started.take_action(room.id, "act_rest")

        assert result.state.phase == GamePhase.ELECTION
        event = bus.get_history(EventType.PHASE_CHANGED)[0]
        assert event.data == {"before": "PRIMARY", "after": "ELECTION"}

    def test_history_limit_from_config(self, make_engine, room, character, party):
        engine = make_engine(history_limit=1)
        engine.create_session(room, character, party)

        result = engine.take_action(room.id, "act_rest")

        assert len(result.state.turn_history) == 1

    def test_strict_validation_from_config(self, make_engine, room, character, party):
        engine = make_engine(strict_validation=True)
        engine.create_session(room, character, party)

        result = engine.take_action(room.id, "act_gov_speech")

        assert result.rejection == RejectionReason.ROLE_NOT_ALLOWED


class TestGameOver:

    @pytest.fixture
    def coup_engine(self, make_engine, memory_store, room, character, party):
        engine = make_engine(20)
        dictator_room = room.model_copy(update={"victory": VictoryConfig(type=VictoryType.DICTATOR)})
        engine.create_session(dictator_room, character, party)

        state = memory_store.load(room.id)
        state.player_state.role = PlayerRole.INCUMBENT
        state.player_state.stats.popularity = 85
        state.player_state.stats.funds = 100
        state.institutions.military = 75
        state.institutions.congress = 65
        memory_store.save(state)
        return engine

    def test_game_over_event(self, coup_engine, bus, room):
        result = coup_engine.take_action(room.id, "act_win_dictator")

        assert result.game_ended
        events = bus.get_history(EventType.GAME_OVER)
        assert events[0].data == {"winner": True}

    def test_finished_game_refuses_actions(self, coup_engine, room):
        coup_engine.take_action(room.id, "act_win_dictator")

        with pytest.raises(GameOverError) as exc_info:
            coup_engine.take_action(room.id, "act_rest")

        assert exc_info.value.winner is True

    def test_finished_game_refuses_season_end(self, coup_engine, room):
        coup_engine.take_action(room.id, "act_win_dictator")

        with pytest.raises(GameOverError):
            coup_engine.end_season(room.id, won_election=True)


class TestPlatformAndPreview:

    def test_set_platform(self, started, memory_store, bus, room):
        state = started.set_platform(room.id, ["issue_transport"], ["prop_metro"], expected_version=0)

        assert memory_store.load(room.id) == state
        assert state.player_state.agenda == ["issue_transport"]
        event = bus.get_history(EventType.PLATFORM_UPDATED)[0]
        assert event.data == {"agenda": ["issue_transport"], "program": ["prop_metro"]}

    def test_preview(self, started, room):
        preview = started.preview(room.id, "act_media")

        assert preview.feasible
        assert preview.action_id == "act_media"

    def test_available_actions(self, started, room):
        ids = [a.id for a in started.available_actions(room.id)]

        assert "act_rally" in ids
        assert "act_gov_project" not in ids


class TestEndSeason:

    def test_next_season(self, started, memory_store, bus, room):
        state = memory_store.load(room.id)
        state.current_turn = 48
        memory_store.save(state)

        new_state = started.end_season(room.id, won_election=False)

        assert memory_store.load(room.id) == new_state
        assert new_state.player_state.season == 2
        event = bus.get_history(EventType.SEASON_STARTED)[0]
        assert event.season == 2
        assert event.data == {"role": "OPPOSITION", "sphere": "MUNICIPAL"}

    def test_victory(self, started, bus, room):
        final = started.end_season(room.id, won_election=True)

        assert final.game_over
        assert bus.get_history(EventType.GAME_OVER)[0].data == {"winner": True}

    def test_early_end_warns(self, started, room, caplog):
        with caplog.at_level("WARNING", logger="mandate.systems.engine"):
            started.end_season(room.id, won_election=False)

        assert "season ended early" in caplog.text
