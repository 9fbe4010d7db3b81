"""
Result schemas for the MANDATE engine.

- ActionPreview: advisory check of an action before it is taken
- PlatformCheck: advisory check of an agenda/program selection
- TurnResult: outcome of a resolved (or refused) turn
"""

from .action import (
    ActionPreview,
    PlatformCheck,
    RejectionReason,
    Requirement,
    RequirementStatus,
)
from .turn_result import TurnResult

__all__ = [
    "ActionPreview",
    "PlatformCheck",
    "RejectionReason",
    "Requirement",
    "RequirementStatus",
    "TurnResult",
]
