"""
Validation result schemas.

The engine never throws on bad input; it answers with values. These are
the values: why an action was refused, and the advisory previews a host
can show before the player commits.
"""

from enum import Enum

from pydantic import BaseModel, Field


class RejectionReason(str, Enum):
    """Why a turn was not applied."""
    INSUFFICIENT_FUNDS = "insufficient_funds"
    INSUFFICIENT_ENERGY = "insufficient_energy"
    INSUFFICIENT_BUDGET = "insufficient_budget"
    GAME_OVER = "game_over"
    ROLE_NOT_ALLOWED = "role_not_allowed"      # Strict mode only
    PHASE_NOT_ALLOWED = "phase_not_allowed"    # Strict mode only


class RequirementStatus(str, Enum):
    MET = "met"
    UNMET = "unmet"


class Requirement(BaseModel):
    """
    A single precondition and whether it holds.

    Shown to the player so they see exactly what's missing.
    """
    label: str  # "Energy 20"
    status: RequirementStatus
    detail: str = ""  # "Have 15"

    @property
    def met(self) -> bool:
        return self.status == RequirementStatus.MET


class ActionPreview(BaseModel):
    """
    What taking an action would require. No mutation.

    feasible reflects what the resolver enforces (affordability, game not
    over). Role and phase requirements are advisory and only block when the
    caller asks for strict checking.
    """
    action_id: str
    feasible: bool
    requirements: list[Requirement] = Field(default_factory=list)
    rejection: RejectionReason | None = None
    summary: str = ""


class PlatformCheck(BaseModel):
    """Advisory check of an agenda/program selection."""
    valid: bool
    problems: list[str] = Field(default_factory=list)
