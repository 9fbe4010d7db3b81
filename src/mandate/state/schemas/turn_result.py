"""
TurnResult: the detailed outcome of resolving one action.

process_turn returns only the new state. resolve_turn returns this, which
also says whether the action was applied, why not, and what was rolled.
"""

from pydantic import BaseModel

from ...tools.dice import RollResult
from ..schema import GameSessionState
from .action import RejectionReason


class TurnResult(BaseModel):
    state: GameSessionState
    applied: bool
    rejection: RejectionReason | None = None
    roll: RollResult | None = None  # None for rest, rejections

    @property
    def game_ended(self) -> bool:
        return self.applied and self.state.game_over
