"""
MANDATE - a turn-based political campaign simulation engine.

The engine is a set of pure functions over GameSessionState:

    initialize_game(room, character, party)
    update_platform(state, agenda, program)
    process_turn(state, action, rng=None)
    start_next_season(state, won_election, rng=None)

plus catalog lookups (get_available_actions, get_issues, get_proposals).
"""

from .content.catalog import get_available_actions, get_issues, get_proposals
from .content.generator import generate_character
from .state.schema import GameSessionState, RoomConfig
from .systems.engine import CampaignEngine
from .systems.platform import update_platform
from .systems.seasons import start_next_season
from .systems.setup import initialize_game
from .systems.turns import process_turn, resolve_turn

__version__ = "0.1.0"

__all__ = [
    "initialize_game",
    "update_platform",
    "process_turn",
    "resolve_turn",
    "start_next_season",
    "get_available_actions",
    "get_issues",
    "get_proposals",
    "generate_character",
    "GameSessionState",
    "RoomConfig",
    "CampaignEngine",
]
