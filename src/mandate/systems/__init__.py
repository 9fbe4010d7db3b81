"""
Game systems for MANDATE.

Each system is a set of pure functions from (state, input) to a new state.
CampaignEngine sequences them against a session store.
"""

from .setup import initialize_game, generate_demographics
from .platform import update_platform, validate_platform, toggle_agenda_item, toggle_program_item
from .validation import ActionValidator, check_affordability, check_eligibility
from .turns import process_turn, resolve_turn
from .seasons import start_next_season, apply_demographic_drift
from .engine import CampaignEngine

__all__ = [
    "initialize_game",
    "generate_demographics",
    "update_platform",
    "validate_platform",
    "toggle_agenda_item",
    "toggle_program_item",
    "ActionValidator",
    "check_affordability",
    "check_eligibility",
    "process_turn",
    "resolve_turn",
    "start_next_season",
    "apply_demographic_drift",
    # Orchestration
    "CampaignEngine",
]
