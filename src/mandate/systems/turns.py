"""
Turn resolver for MANDATE.

Applies one player action to a session and returns the next session:

    affordability gate -> pay costs -> d20 check -> effects
        -> incumbent decay -> advance clock (primary -> election)
        -> energy regen -> log

The input state is never mutated. An unaffordable action, or any action
on a finished game, returns the input state itself.

The only randomness is the d20, drawn from the rng argument so tests can
force exact rolls.
"""

from __future__ import annotations

import logging
import math
from typing import Callable

from ..state.schema import (
    PRIMARY_END_TURN,
    STAT_CEILING,
    ActionType,
    EventType,
    GameAction,
    GamePhase,
    GameSessionState,
    PlayerRole,
    clamp_stat,
)
from ..state.schemas.action import RejectionReason
from ..state.schemas.turn_result import TurnResult
from ..tools.dice import RandomSource, RollResult, roll_check
from .validation import check_affordability, check_eligibility

logger = logging.getLogger(__name__)


# Special actions, matched by id before type
REST_ACTION_ID = "act_rest"
DICTATOR_ACTION_ID = "act_win_dictator"

# Institution actions and the loyalty each one builds
INSTITUTION_ACTIONS: dict[str, str] = {
    "act_inst_congress": "congress",
    "act_inst_military": "military",
    "act_inst_courts": "judiciary",
}

REST_ENERGY = 30
ENERGY_REGEN = 5
CRITICAL_MAGNITUDE = 1.5
GAFFE_PENALTY = 5
SATISFACTION_SHIFT = 5

# Coup succeeds only above all three (and on a successful roll)
COUP_MIN_POPULARITY = 80
COUP_MIN_MILITARY = 70
COUP_MIN_CONGRESS = 60

# Incumbents' city decays every DECAY_INTERVAL turns
DECAY_INTERVAL = 3
SERVICES_UNREST_THRESHOLD = 40

NOMINATION_THRESHOLD = 40


def _scaled(base: int, magnitude: float) -> int:
    return math.floor(base * magnitude)


# ─── Success Effects ─────────────────────────────────────────────
# Each takes (state, action, magnitude), mutates the working copy and
# returns the text appended to the log line.

def _campaign_effect(state: GameSessionState, action: GameAction, magnitude: float) -> str:
    state.player_state.stats.popularity += _scaled(3, magnitude)
    return " Public support increased."


def _party_effect(state: GameSessionState, action: GameAction, magnitude: float) -> str:
    stats = state.player_state.stats
    stats.party_support += _scaled(3, magnitude)
    stats.funds += _scaled(10, magnitude)
    return " Party standing improved."


def _governance_effect(state: GameSessionState, action: GameAction, magnitude: float) -> str:
    stats = state.player_state.stats
    state.governance.services += _scaled(5, magnitude)
    state.governance.economy += _scaled(2, magnitude)
    stats.popularity += _scaled(4, magnitude)
    stats.coherence += 2
    for group in state.demographics:
        group.satisfaction = clamp_stat(group.satisfaction + SATISFACTION_SHIFT)
    return " Public services improved. Satisfaction up."


def _attack_effect(state: GameSessionState, action: GameAction, magnitude: float) -> str:
    state.player_state.stats.popularity += _scaled(3, magnitude)
    for group in state.demographics:
        group.satisfaction = clamp_stat(group.satisfaction - SATISFACTION_SHIFT)
    return " Effective criticism. Public satisfaction dropped."


def _institution_effect(state: GameSessionState, action: GameAction, magnitude: float) -> str:
    institution = INSTITUTION_ACTIONS.get(action.id)
    if institution is not None:
        current = getattr(state.institutions, institution)
        setattr(state.institutions, institution, current + _scaled(5, magnitude))
    return " Institutional support grew."


SUCCESS_EFFECTS: dict[ActionType, Callable[[GameSessionState, GameAction, float], str]] = {
    ActionType.CAMPAIGN: _campaign_effect,
    ActionType.PARTY: _party_effect,
    ActionType.GOVERNANCE: _governance_effect,
    ActionType.ATTACK: _attack_effect,
    ActionType.INSTITUTION: _institution_effect,
}


# ─── Resolution ──────────────────────────────────────────────────

def _pay_costs(state: GameSessionState, action: GameAction) -> None:
    stats = state.player_state.stats
    stats.funds -= action.cost.funds
    stats.energy -= action.cost.energy
    state.governance.budget -= action.cost.budget


def _attempt_coup(state: GameSessionState, roll: RollResult) -> tuple[str, EventType]:
    """Declare absolute power. Ends the game either way."""
    stats = state.player_state.stats
    seized = (
        roll.success
        and stats.popularity > COUP_MIN_POPULARITY
        and state.institutions.military > COUP_MIN_MILITARY
        and state.institutions.congress > COUP_MIN_CONGRESS
    )

    state.game_over = True
    state.winner = seized
    logger.info("Room %s: coup %s", state.room_id, "succeeded" if seized else "failed")

    if seized:
        return (
            "STATE OF EXCEPTION DECLARED. YOU HAVE SEIZED ABSOLUTE POWER. VICTORY!",
            EventType.SUCCESS,
        )
    return "The coup failed! You have been impeached and arrested.", EventType.CRITICAL


def _apply_outcome(
    state: GameSessionState, action: GameAction, roll: RollResult,
) -> tuple[str, EventType]:
    message = f"[{action.type.value}] {action.name}: {roll.describe()}"

    if roll.success:
        magnitude = CRITICAL_MAGNITUDE if roll.critical else 1.0
        effect = SUCCESS_EFFECTS.get(action.type)
        if effect is not None:
            message += effect(state, action, magnitude)
        return message, EventType.SUCCESS

    if roll.critical_failure:
        stats = state.player_state.stats
        stats.popularity = max(0, stats.popularity - GAFFE_PENALTY)
        return message + " CRITICAL FAILURE! Major gaffe committed.", EventType.CRITICAL

    return message + " Little to no effect.", EventType.FAILURE


def _incumbent_decay(state: GameSessionState) -> None:
    """An incumbent's city wears down unless they keep governing."""
    if state.player_state.role != PlayerRole.INCUMBENT:
        return

    governance = state.governance
    if state.current_turn % DECAY_INTERVAL == 0:
        governance.economy -= 1
        governance.services -= 1
        governance.security -= 1

    if governance.services < SERVICES_UNREST_THRESHOLD:
        state.player_state.stats.popularity -= 1


def _advance_clock(state: GameSessionState) -> None:
    state.current_turn += 1

    if state.current_turn > PRIMARY_END_TURN and state.phase == GamePhase.PRIMARY:
        state.phase = GamePhase.ELECTION
        office = state.player_state.target_office
        logger.info("Room %s: primary over, election phase begins", state.room_id)

        # Narrative only: a denied ticket still goes on to the election
        if state.player_state.stats.party_support < NOMINATION_THRESHOLD:
            state.log(
                state.current_turn,
                f"CONVENTION: Party support too low. You were denied the ticket for {office}.",
                EventType.CRITICAL,
            )
        else:
            state.log(
                state.current_turn,
                f"CONVENTION: You are the official nominee for {office}!",
                EventType.SUCCESS,
            )


def resolve_turn(
    state: GameSessionState,
    action: GameAction,
    rng: RandomSource | None = None,
    strict: bool = False,
    history_limit: int | None = None,
) -> TurnResult:
    """
    Resolve one action and report what happened.

    Args:
        state: Current session (not modified)
        action: The action taken
        rng: Random source for the d20
        strict: Also refuse actions the player's role or the phase doesn't allow
        history_limit: Keep at most this many history entries (None = all)

    Returns:
        TurnResult. When not applied, result.state is the input state.
    """
    if state.game_over:
        return TurnResult(state=state, applied=False, rejection=RejectionReason.GAME_OVER)

    rejection = check_affordability(state, action)
    if rejection is None and strict:
        rejection = check_eligibility(state, action)
    if rejection is not None:
        logger.debug("Room %s: %s refused (%s)", state.room_id, action.id, rejection.value)
        return TurnResult(state=state, applied=False, rejection=rejection)

    new_state = state.model_copy(deep=True)
    stats = new_state.player_state.stats
    _pay_costs(new_state, action)

    roll: RollResult | None = None
    if action.id == REST_ACTION_ID:
        stats.energy = min(STAT_CEILING, stats.energy + REST_ENERGY)
        message, event_type = f"Rested and recovered {REST_ENERGY} energy.", EventType.INFO
    else:
        modifier = new_state.player_state.character.stats.get(action.stat_modifier)
        roll = roll_check(modifier, action.difficulty, rng)
        logger.debug("Room %s: %s %s", state.room_id, action.id, roll.describe())

        if action.id == DICTATOR_ACTION_ID:
            message, event_type = _attempt_coup(new_state, roll)
        else:
            message, event_type = _apply_outcome(new_state, action, roll)

    _incumbent_decay(new_state)

    if not new_state.game_over:
        _advance_clock(new_state)

    if action.id != REST_ACTION_ID and not new_state.game_over:
        stats.energy = min(STAT_CEILING, stats.energy + ENERGY_REGEN)

    new_state.log(state.current_turn, message, event_type)
    new_state.trim_history(history_limit)
    new_state.state_version += 1

    return TurnResult(state=new_state, applied=True, roll=roll)


def process_turn(
    state: GameSessionState,
    action: GameAction,
    rng: RandomSource | None = None,
) -> GameSessionState:
    """
    Resolve one action and return the next state.

    Refused actions (unaffordable, or game already over) return the input
    state unchanged; use resolve_turn to learn why.
    """
    return resolve_turn(state, action, rng).state
