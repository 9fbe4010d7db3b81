"""
Character generation.

Drawing a character from an archetype: a themed name from the archetype's
pool and each base stat nudged by -1, 0 or +1 (never below 1).
"""

from __future__ import annotations

import random

from ..state.schema import Character, CharacterStats, generate_id
from ..tools.dice import RandomSource
from .catalog import get_archetype

FALLBACK_NAME = "Unknown Politician"
STAT_FLOOR = 1


def _vary(base: int, rng: RandomSource) -> int:
    return max(STAT_FLOOR, base + rng.randint(-1, 1))


def generate_character(archetype_id: str, rng: RandomSource | None = None) -> Character:
    """
    Draw a new character from an archetype.

    Raises:
        UnknownContentError: If the archetype doesn't exist
    """
    rng = rng or random
    archetype = get_archetype(archetype_id)

    name = rng.choice(archetype.name_pool) if archetype.name_pool else FALLBACK_NAME
    base = archetype.base_stats

    return Character(
        id=f"char_{generate_id()}",
        name=name,
        archetype_id=archetype.id,
        stats=CharacterStats(
            charisma=_vary(base.charisma, rng),
            intelligence=_vary(base.intelligence, rng),
            resources=_vary(base.resources, rng),
        ),
        flavour_text=f"A rising star in the {archetype.name} movement.",
    )
