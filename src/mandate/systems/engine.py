"""
Session orchestrator for MANDATE.

The pure engine functions take a state and return a state. A host
application also needs to load that state, save the result, and tell its
UI what happened. CampaignEngine does that sequencing:

    load -> pure operation -> save (version-checked) -> emit events

It never resolves anything itself.

Usage:
    engine = CampaignEngine(MemorySessionStore(), rng=random.Random(7))
    state = engine.create_session(room, character, party)
    result = engine.take_action(room.id, "act_rally")
    if result.state.season_complete:
        engine.end_season(room.id, won_election=True)
"""

from __future__ import annotations

import logging
import random

from ..config import DEFAULT_CONFIG, Config
from ..content.catalog import ContentCatalog, get_catalog
from ..errors import GameOverError, SessionNotFoundError, StaleStateError
from ..state.event_bus import EventBus, EventType, get_event_bus
from ..state.schema import (
    Character,
    GameAction,
    GameSessionState,
    PoliticalParty,
    RoomConfig,
)
from ..state.schemas.action import ActionPreview
from ..state.schemas.turn_result import TurnResult
from ..state.store import SessionStore
from ..tools.dice import RandomSource
from .platform import update_platform
from .seasons import start_next_season
from .setup import initialize_game
from .turns import resolve_turn
from .validation import ActionValidator

logger = logging.getLogger(__name__)


class CampaignEngine:
    """
    Sequences engine operations against a session store.

    Responsibilities:
    - Loading and saving sessions with an optimistic version check
    - Refusing to act on finished games
    - Emitting events for UI reactivity

    NOT responsible for:
    - Resolving actions (systems.turns)
    - Season rules (systems.seasons)
    - Deciding who won an election (the host does)
    """

    def __init__(
        self,
        store: SessionStore,
        rng: RandomSource | None = None,
        config: Config | None = None,
        catalog: ContentCatalog | None = None,
        bus: EventBus | None = None,
    ):
        self.store = store
        self.config: Config = {**DEFAULT_CONFIG, **(config or {})}
        self.rng = rng or random.Random(self.config.get("seed"))
        self.catalog = catalog or get_catalog()
        self.validator = ActionValidator(strict=bool(self.config.get("strict_validation")))
        self._bus = bus or get_event_bus()

    # ─── Loading & Saving ────────────────────────────────────────

    def get_session(self, room_id: str) -> GameSessionState:
        state = self.store.load(room_id)
        if state is None:
            raise SessionNotFoundError(room_id)
        return state

    def _load_for_update(self, room_id: str, expected_version: int | None) -> GameSessionState:
        state = self.get_session(room_id)
        if state.game_over:
            raise GameOverError(room_id, state.winner)
        if expected_version is not None and expected_version != state.state_version:
            raise StaleStateError(expected=state.state_version, got=expected_version)
        return state

    def _emit(self, event_type: EventType, state: GameSessionState, **data) -> None:
        self._bus.emit(
            event_type,
            room_id=state.room_id,
            season=state.player_state.season,
            **data,
        )

    # ─── Operations ──────────────────────────────────────────────

    def create_session(
        self,
        room: RoomConfig,
        character: Character,
        party: PoliticalParty,
    ) -> GameSessionState:
        """Start a new session for a room, replacing any previous one."""
        state = initialize_game(room, character, party)
        self.store.save(state)
        logger.info(
            "Room %s: new session in %s for %s (%s)",
            room.id, room.location.city, character.name, party.acronym,
        )
        self._emit(EventType.SESSION_CREATED, state, victory=room.victory.type.value)
        return state

    def available_actions(self, room_id: str) -> list[GameAction]:
        state = self.get_session(room_id)
        return self.catalog.available_actions(
            state.player_state.role,
            state.victory_config.type,
            state.phase,
        )

    def preview(self, room_id: str, action_id: str) -> ActionPreview:
        """What taking an action would need. No mutation."""
        state = self.get_session(room_id)
        return self.validator.validate(state, self.catalog.action(action_id))

    def set_platform(
        self,
        room_id: str,
        agenda: list[str],
        program: list[str],
        expected_version: int | None = None,
    ) -> GameSessionState:
        state = self._load_for_update(room_id, expected_version)
        new_state = update_platform(state, agenda, program)
        self.store.save(new_state, expected_version=state.state_version)
        self._emit(EventType.PLATFORM_UPDATED, new_state, agenda=list(agenda), program=list(program))
        return new_state

    def take_action(
        self,
        room_id: str,
        action_id: str,
        expected_version: int | None = None,
    ) -> TurnResult:
        """
        Resolve an action for a room's session and persist the result.

        A refused action is reported in the TurnResult and not saved.

        Raises:
            SessionNotFoundError: No session for the room
            GameOverError: The game has ended
            StaleStateError: expected_version is behind the stored session
            UnknownContentError: No such action
        """
        state = self._load_for_update(room_id, expected_version)
        action = self.catalog.action(action_id)

        result = resolve_turn(
            state,
            action,
            rng=self.rng,
            strict=self.validator.strict,
            history_limit=self.config.get("history_limit"),
        )

        if not result.applied:
            logger.warning(
                "Room %s: %s refused (%s)", room_id, action_id, result.rejection.value,
            )
            self._emit(EventType.ACTION_REJECTED, state, action_id=action_id, reason=result.rejection.value)
            return result

        new_state = result.state
        self.store.save(new_state, expected_version=state.state_version)

        self._emit(
            EventType.TURN_RESOLVED,
            new_state,
            action_id=action_id,
            turn=state.current_turn,
            d20=result.roll.d20 if result.roll else None,
            outcome=new_state.turn_history[0].type.value,
        )
        if new_state.phase != state.phase:
            self._emit(EventType.PHASE_CHANGED, new_state, before=state.phase.value, after=new_state.phase.value)
        if new_state.game_over:
            self._emit(EventType.GAME_OVER, new_state, winner=new_state.winner)

        return result

    def end_season(self, room_id: str, won_election: bool) -> GameSessionState:
        """Close the season with the election result the host decided."""
        state = self._load_for_update(room_id, None)
        if not state.season_complete:
            logger.warning(
                "Room %s: season ended early at turn %d/%d",
                room_id, state.current_turn, state.max_turns,
            )

        new_state = start_next_season(state, won_election, rng=self.rng)
        self.store.save(new_state, expected_version=state.state_version)

        if new_state.game_over:
            self._emit(EventType.GAME_OVER, new_state, winner=new_state.winner)
        else:
            self._emit(
                EventType.SEASON_STARTED,
                new_state,
                role=new_state.player_state.role.value,
                sphere=new_state.player_state.sphere.value,
            )
        return new_state
