"""
Season transitions.

Called by the host when a season's clock has run out and the election has
been decided. Either ends the game (CYCLES or OFFICE victory) or starts
the next season with progress carried over:

- demographics (after drift), governance, institutions, character, party
- role becomes INCUMBENT on a win, OPPOSITION on a loss
- a municipal win promotes the player to the state sphere
- energy refilled, fundraising bonus added, clock reset to turn 1
"""

from __future__ import annotations

import logging
import random

from ..state.schema import (
    SPHERE_LEVELS,
    DemographicGroup,
    EventType,
    GamePhase,
    GameSessionState,
    PlayerRole,
    PoliticalSphere,
    VictoryType,
    clamp_stat,
)
from ..tools.dice import RandomSource

logger = logging.getLogger(__name__)

DRIFT_POPULARITY_THRESHOLD = 70
DRIFT_SUPPORT_GAIN = 5
DRIFT_DEMAND_CHANCE = 0.5
SEASON_FUNDS_BONUS = 50

# Office the player runs for next, by whether they were promoted
PROMOTED_TARGET_OFFICE = "Governor"
DEFAULT_TARGET_OFFICE = "President"


def apply_demographic_drift(
    state: GameSessionState,
    rng: RandomSource | None = None,
) -> list[DemographicGroup]:
    """
    A popular politician moulds the electorate.

    Above the popularity threshold, one random group warms to the player
    and may adopt the player's lead agenda issue as its top demand.
    Returns new groups; state is not modified.
    """
    rng = rng or random
    groups = [g.model_copy(deep=True) for g in state.demographics]

    if state.player_state.stats.popularity <= DRIFT_POPULARITY_THRESHOLD or not groups:
        return groups

    target = rng.choice(groups)
    target.support = clamp_stat(target.support + DRIFT_SUPPORT_GAIN)

    agenda = state.player_state.agenda
    if agenda:
        lead_issue = agenda[0]
        if lead_issue not in target.demands and rng.random() > DRIFT_DEMAND_CHANCE:
            target.demands = [lead_issue, *target.demands[1:]]
            logger.debug("%s now demands %s", target.name, lead_issue)

    logger.debug("Drift: %s support -> %d", target.name, target.support)
    return groups


def _end_game(state: GameSessionState, message: str, event_type: EventType) -> GameSessionState:
    final = state.model_copy(deep=True)
    final.game_over = True
    final.winner = True
    final.log(state.current_turn, message, event_type)
    final.state_version += 1
    logger.info("Room %s: game over, player won (%s)", state.room_id, state.victory_config.type.value)
    return final


def start_next_season(
    state: GameSessionState,
    won_election: bool,
    rng: RandomSource | None = None,
) -> GameSessionState:
    """
    Close the current season and open the next, or end the game.

    Args:
        state: Session at the end of its season (not modified)
        won_election: Whether the player won this season's election
        rng: Random source for demographic drift

    Returns:
        A terminal state on victory, otherwise season N+1 at turn 1.
        A state that is already over is returned as is.
    """
    if state.game_over:
        return state

    player = state.player_state
    victory = state.victory_config
    next_season = player.season + 1
    new_role = PlayerRole.INCUMBENT if won_election else PlayerRole.OPPOSITION
    new_office = player.target_office if won_election else None
    sphere = player.sphere

    # Surviving the configured number of cycles is victory
    if victory.type == VictoryType.CYCLES and next_season > victory.value:
        return _end_game(state, "Game Over! Cycle limit reached.", EventType.INFO)

    if (
        victory.type == VictoryType.OFFICE
        and won_election
        and SPHERE_LEVELS[sphere] >= victory.value
    ):
        return _end_game(state, "Victory! You have achieved the target office.", EventType.SUCCESS)

    drifted = apply_demographic_drift(state, rng)

    promoted = won_election and sphere == PoliticalSphere.MUNICIPAL

    new_state = state.model_copy(deep=True)
    new_state.current_turn = 1
    new_state.phase = GamePhase.PRIMARY
    new_state.demographics = drifted

    new_player = new_state.player_state
    new_player.season = next_season
    new_player.role = new_role
    new_player.current_office = new_office
    new_player.sphere = PoliticalSphere.STATE if promoted else sphere
    new_player.target_office = PROMOTED_TARGET_OFFICE if promoted else DEFAULT_TARGET_OFFICE
    new_player.stats.energy = 100
    new_player.stats.funds += SEASON_FUNDS_BONUS

    title = new_office if new_role == PlayerRole.INCUMBENT else "Opposition Leader"
    new_state.log(
        1,
        f"Season {next_season} Begins! You are now the {title}. Public opinion has shifted slightly.",
        EventType.INFO,
    )
    new_state.state_version += 1

    logger.info(
        "Room %s: season %d begins, player is %s in %s sphere",
        state.room_id, next_season, new_role.value, new_player.sphere.value,
    )
    return new_state
