"""Tools used by the engine systems."""

from .dice import RandomSource, RollResult, roll_check, roll_d20

__all__ = [
    "RandomSource",
    "RollResult",
    "roll_check",
    "roll_d20",
]
