"""
Platform editor: the player's agenda (issues) and program (proposals).

update_platform is a pure replace with no validation; the caps and the
"proposal needs its issue on the agenda" rule are enforced by callers.
validate_platform and the toggle helpers give callers that enforcement.
"""

from __future__ import annotations

import logging

from ..content.catalog import ContentCatalog, get_catalog
from ..errors import UnknownContentError
from ..state.schema import GameSessionState
from ..state.schemas.action import PlatformCheck

logger = logging.getLogger(__name__)

MAX_AGENDA_ITEMS = 3


def update_platform(
    state: GameSessionState,
    agenda: list[str],
    program: list[str],
) -> GameSessionState:
    """Replace the player's agenda and program. Accepts anything."""
    new_state = state.model_copy(deep=True)
    new_state.player_state.agenda = list(agenda)
    new_state.player_state.program = list(program)
    new_state.state_version += 1
    return new_state


def validate_platform(
    agenda: list[str],
    program: list[str],
    catalog: ContentCatalog | None = None,
) -> PlatformCheck:
    """Report everything wrong with a selection, without changing it."""
    catalog = catalog or get_catalog()
    problems: list[str] = []

    if len(agenda) > MAX_AGENDA_ITEMS:
        problems.append(f"Agenda has {len(agenda)} issues; the limit is {MAX_AGENDA_ITEMS}.")
    if len(set(agenda)) != len(agenda):
        problems.append("Agenda lists the same issue more than once.")
    if len(set(program)) != len(program):
        problems.append("Program lists the same proposal more than once.")

    known_issues = {issue.id for issue in catalog.issues()}
    for issue_id in agenda:
        if issue_id not in known_issues:
            problems.append(f"Unknown issue: {issue_id}")

    for proposal_id in program:
        try:
            proposal = catalog.proposal(proposal_id)
        except UnknownContentError:
            problems.append(f"Unknown proposal: {proposal_id}")
            continue
        if proposal.issue_id not in agenda:
            problems.append(f"{proposal.name} requires {proposal.issue_id} on the agenda.")

    return PlatformCheck(valid=not problems, problems=problems)


def toggle_agenda_item(state: GameSessionState, issue_id: str) -> GameSessionState:
    """
    Add or remove one agenda issue.

    Adding a fourth issue is refused by returning the state unchanged.
    """
    agenda = list(state.player_state.agenda)
    if issue_id in agenda:
        agenda.remove(issue_id)
    elif len(agenda) >= MAX_AGENDA_ITEMS:
        logger.debug("Agenda full, not adding %s", issue_id)
        return state
    else:
        agenda.append(issue_id)
    return update_platform(state, agenda, state.player_state.program)


def toggle_program_item(state: GameSessionState, proposal_id: str) -> GameSessionState:
    """Add or remove one program proposal."""
    program = list(state.player_state.program)
    if proposal_id in program:
        program.remove(proposal_id)
    else:
        program.append(proposal_id)
    return update_platform(state, state.player_state.agenda, program)
