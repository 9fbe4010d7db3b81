"""
Action validation for the turn resolver.

Pure functions over (state, action). No state mutation.

check_affordability is what the resolver itself enforces. ActionValidator
builds a full preview for a host to show before the player commits,
including the advisory role/phase requirements the resolver does not
re-check unless asked to be strict.
"""

from __future__ import annotations

from ..state.schema import GameAction, GameSessionState
from ..state.schemas.action import (
    ActionPreview,
    RejectionReason,
    Requirement,
    RequirementStatus,
)


def check_affordability(state: GameSessionState, action: GameAction) -> RejectionReason | None:
    """
    The first resource the player can't cover, or None if affordable.

    Checked in order: funds, energy, public budget.
    """
    stats = state.player_state.stats
    cost = action.cost

    if cost.funds and stats.funds < cost.funds:
        return RejectionReason.INSUFFICIENT_FUNDS
    if cost.energy and stats.energy < cost.energy:
        return RejectionReason.INSUFFICIENT_ENERGY
    if cost.budget and state.governance.budget < cost.budget:
        return RejectionReason.INSUFFICIENT_BUDGET
    return None


def check_eligibility(state: GameSessionState, action: GameAction) -> RejectionReason | None:
    """Role and phase restrictions. Advisory: only strict resolution enforces them."""
    if action.required_role and state.player_state.role not in action.required_role:
        return RejectionReason.ROLE_NOT_ALLOWED
    if action.required_phase is not None and action.required_phase != state.phase:
        return RejectionReason.PHASE_NOT_ALLOWED
    return None


class ActionValidator:
    """
    Builds ActionPreviews.

    Stateless; all state comes from the arguments.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict

    def validate(self, state: GameSessionState, action: GameAction) -> ActionPreview:
        requirements = self._resource_requirements(state, action)
        requirements.append(self._role_requirement(state, action))
        if action.required_phase is not None:
            requirements.append(self._phase_requirement(state, action))

        rejection: RejectionReason | None
        if state.game_over:
            rejection = RejectionReason.GAME_OVER
        else:
            rejection = check_affordability(state, action)
            if rejection is None and self.strict:
                rejection = check_eligibility(state, action)

        if rejection is None:
            summary = f"{action.name}: d20 + {action.stat_modifier.value} vs DC {action.difficulty}."
        else:
            summary = f"{action.name}: not available ({rejection.value.replace('_', ' ')})."

        return ActionPreview(
            action_id=action.id,
            feasible=rejection is None,
            requirements=requirements,
            rejection=rejection,
            summary=summary,
        )

    def _resource_requirements(
        self, state: GameSessionState, action: GameAction,
    ) -> list[Requirement]:
        stats = state.player_state.stats
        have = {
            "funds": stats.funds,
            "energy": stats.energy,
            "budget": state.governance.budget,
        }
        requirements = []
        for resource, needed in action.cost.model_dump().items():
            if not needed:
                continue
            requirements.append(Requirement(
                label=f"{resource.title()} {needed}",
                status=RequirementStatus.MET if have[resource] >= needed else RequirementStatus.UNMET,
                detail=f"Have {have[resource]}",
            ))
        return requirements

    def _role_requirement(self, state: GameSessionState, action: GameAction) -> Requirement:
        role = state.player_state.role
        allowed = not action.required_role or role in action.required_role
        return Requirement(
            label="Role: " + ", ".join(r.value.title() for r in action.required_role),
            status=RequirementStatus.MET if allowed else RequirementStatus.UNMET,
            detail=f"You are {role.value.title()}",
        )

    def _phase_requirement(self, state: GameSessionState, action: GameAction) -> Requirement:
        return Requirement(
            label=f"Phase: {action.required_phase.value.title()}",
            status=(
                RequirementStatus.MET if action.required_phase == state.phase
                else RequirementStatus.UNMET
            ),
            detail=f"Current: {state.phase.value.title()}",
        )
