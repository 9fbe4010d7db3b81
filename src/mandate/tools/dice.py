"""
Dice rolling for MANDATE skill checks.

A check is d20 + the character stat the action names, against the action's
difficulty. A natural 20 is a critical, a natural 1 a critical failure.

The random source is always injectable so tests can replay exact rolls.
"""

import random
from dataclasses import dataclass
from typing import Protocol


class RandomSource(Protocol):
    """The subset of random.Random the engine uses."""

    def randint(self, a: int, b: int) -> int: ...

    def random(self) -> float: ...

    def choice(self, seq): ...


@dataclass
class RollResult:
    """Result of a skill check."""
    d20: int
    modifier: int
    total: int
    dc: int
    success: bool

    @property
    def critical(self) -> bool:
        return self.d20 == 20

    @property
    def critical_failure(self) -> bool:
        return self.d20 == 1

    @property
    def margin(self) -> int:
        """Positive = over DC, negative = under."""
        return self.total - self.dc

    @property
    def narrative(self) -> str:
        if self.critical:
            return "critical success"
        if self.critical_failure:
            return "critical failure"
        if self.success:
            return "narrow success" if self.margin < 4 else "solid success"
        return "near miss" if self.margin > -4 else "clear failure"

    def describe(self) -> str:
        """'Rolled 14 + 7 = 21 (DC 12).'"""
        return f"Rolled {self.d20} + {self.modifier} = {self.total} (DC {self.dc})."


def roll_d20(rng: RandomSource | None = None) -> int:
    """Roll a single d20."""
    return (rng or random).randint(1, 20)


def roll_check(modifier: int, dc: int, rng: RandomSource | None = None) -> RollResult:
    """
    Roll a d20 skill check.

    Args:
        modifier: The character stat added to the roll
        dc: Difficulty the total must meet or beat
        rng: Random source; the module-level generator when None

    Returns:
        RollResult with all roll information
    """
    d20 = roll_d20(rng)
    total = d20 + modifier
    return RollResult(
        d20=d20,
        modifier=modifier,
        total=total,
        dc=dc,
        success=total >= dc,
    )
