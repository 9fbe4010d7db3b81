"""
Pytest fixtures for MANDATE engine tests.

Provides in-memory stores, a fresh session, and a dice stub that replays
exact rolls.
"""

import pytest

from mandate.content.catalog import get_party
from mandate.state import MemorySessionStore, reset_event_bus
from mandate.state.event_bus import EventBus
from mandate.state.schema import (
    Character,
    CharacterStats,
    PlayerRole,
    RoomConfig,
    ScenarioLocation,
    VictoryConfig,
    VictoryType,
)
from mandate.systems.setup import initialize_game


class ForcedDice:
    """
    Random source that returns queued values.

    randint() pops the next queued roll and fails the test if none is
    left, so an unexpected roll is caught. choice() picks a fixed index.
    """

    def __init__(self, *rolls: int, choice_index: int = 0, random_value: float = 0.0):
        self.rolls = list(rolls)
        self.choice_index = choice_index
        self.random_value = random_value
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        assert self.rolls, f"Unexpected roll randint({a}, {b})"
        return self.rolls.pop(0)

    def random(self) -> float:
        return self.random_value

    def choice(self, seq):
        return seq[self.choice_index]


@pytest.fixture
def dice():
    """Factory for ForcedDice: dice(15) rolls a natural 15."""
    return ForcedDice


@pytest.fixture(autouse=True)
def fresh_event_bus():
    """Each test gets its own global event bus."""
    reset_event_bus()
    yield
    reset_event_bus()


@pytest.fixture
def bus():
    """Isolated event bus."""
    return EventBus()


@pytest.fixture
def memory_store():
    """In-memory session store for testing."""
    return MemorySessionStore()


@pytest.fixture
def room():
    """Room in a city whose name adds no demographic variance."""
    return RoomConfig(
        id="room-101",
        name="Test Room",
        location=ScenarioLocation(city="Recife", state="PE", country="Brazil"),
        victory=VictoryConfig(type=VictoryType.OFFICE, value=1),
    )


@pytest.fixture
def character():
    """Union leader with fixed stats (charisma 6, intelligence 5, resources 5)."""
    return Character(
        id="char_test",
        name="Maria of the Metalworkers",
        archetype_id="arch_union",
        stats=CharacterStats(charisma=6, intelligence=5, resources=5),
    )


@pytest.fixture
def party():
    return get_party("party_cent")


@pytest.fixture
def state(room, character, party):
    """Fresh season 1 session."""
    return initialize_game(room, character, party)


@pytest.fixture
def incumbent_state(state):
    """Session where the player holds office."""
    state.player_state.role = PlayerRole.INCUMBENT
    state.player_state.current_office = "Mayor"
    return state


@pytest.fixture
def dictator_state(room, character, party):
    """Incumbent in a DICTATOR room, at the coup thresholds used by the tests."""
    dictator_room = room.model_copy(update={"victory": VictoryConfig(type=VictoryType.DICTATOR)})
    session = initialize_game(dictator_room, character, party)
    session.player_state.role = PlayerRole.INCUMBENT
    session.player_state.stats.popularity = 85
    session.player_state.stats.funds = 100
    session.institutions.military = 75
    session.institutions.congress = 65
    return session
