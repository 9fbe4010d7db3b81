"""
Content catalog for MANDATE.

Static reference data: archetypes, parties, issues, proposals and actions.
Loaded from the bundled JSON files on first use and validated into the
schema models. Nothing here holds game state.
"""

from __future__ import annotations

import json
from pathlib import Path

from ..errors import UnknownContentError
from ..state.schema import (
    Archetype,
    GameAction,
    GamePhase,
    Issue,
    PlayerRole,
    PoliticalParty,
    Proposal,
    VictoryType,
)


DATA_DIR = Path(__file__).parent / "data"


class ContentCatalog:
    """
    Lookup tables over the bundled content.

    Each file is read once and cached. Lists returned to callers are fresh
    copies, so callers can't corrupt the cache.
    """

    def __init__(self, data_dir: Path | None = None):
        self._data_dir = data_dir or DATA_DIR
        self._cache: dict[str, dict] = {}

    def _load(self, name: str) -> dict:
        if name not in self._cache:
            path = self._data_dir / f"{name}.json"
            with open(path, "r", encoding="utf-8") as f:
                self._cache[name] = json.load(f)
        return self._cache[name]

    # ─── Characters & Parties ────────────────────────────────────

    def archetypes(self) -> list[Archetype]:
        return [Archetype.model_validate(a) for a in self._load("archetypes")["archetypes"]]

    def archetype(self, archetype_id: str) -> Archetype:
        for archetype in self.archetypes():
            if archetype.id == archetype_id:
                return archetype
        raise UnknownContentError("archetype", archetype_id)

    def parties(self) -> list[PoliticalParty]:
        return [PoliticalParty.model_validate(p) for p in self._load("parties")["parties"]]

    def party(self, party_id: str) -> PoliticalParty:
        for party in self.parties():
            if party.id == party_id:
                return party
        raise UnknownContentError("party", party_id)

    # ─── Issues & Proposals ──────────────────────────────────────

    def issues(self) -> list[Issue]:
        return [Issue.model_validate(i) for i in self._load("issues")["issues"]]

    def proposals(self, issue_id: str | None = None) -> list[Proposal]:
        """All proposals, or only those under one issue."""
        proposals = [Proposal.model_validate(p) for p in self._load("issues")["proposals"]]
        if issue_id is None:
            return proposals
        return [p for p in proposals if p.issue_id == issue_id]

    def proposal(self, proposal_id: str) -> Proposal:
        for proposal in self.proposals():
            if proposal.id == proposal_id:
                return proposal
        raise UnknownContentError("proposal", proposal_id)

    # ─── Actions ─────────────────────────────────────────────────

    def _action_group(self, group: str) -> list[GameAction]:
        return [GameAction.model_validate(a) for a in self._load("actions").get(group, [])]

    def all_actions(self) -> list[GameAction]:
        groups = ["common", *(role.value for role in PlayerRole), "dictator"]
        return [action for group in groups for action in self._action_group(group)]

    def action(self, action_id: str) -> GameAction:
        for action in self.all_actions():
            if action.id == action_id:
                return action
        raise UnknownContentError("action", action_id)

    def available_actions(
        self,
        role: PlayerRole,
        victory_type: VictoryType,
        phase: GamePhase | None = None,
    ) -> list[GameAction]:
        """
        Actions offered to a player.

        Common actions plus the role's own. Dictator-mode institution
        actions are only offered to an incumbent in a DICTATOR room.
        If phase is given, actions tied to the other phase are dropped.
        """
        actions = self._action_group("common") + self._action_group(role.value)

        if victory_type == VictoryType.DICTATOR and role == PlayerRole.INCUMBENT:
            actions += self._action_group("dictator")

        if phase is not None:
            actions = [a for a in actions if a.required_phase in (None, phase)]

        return actions


# Global default catalog
_catalog: ContentCatalog | None = None


def get_catalog() -> ContentCatalog:
    """Get the shared catalog over the bundled data."""
    global _catalog
    if _catalog is None:
        _catalog = ContentCatalog()
    return _catalog


def get_archetypes() -> list[Archetype]:
    return get_catalog().archetypes()


def get_archetype(archetype_id: str) -> Archetype:
    return get_catalog().archetype(archetype_id)


def get_parties() -> list[PoliticalParty]:
    return get_catalog().parties()


def get_party(party_id: str) -> PoliticalParty:
    return get_catalog().party(party_id)


def get_issues() -> list[Issue]:
    return get_catalog().issues()


def get_proposals(issue_id: str) -> list[Proposal]:
    """Proposals filed under an issue. Unknown issues have none."""
    return get_catalog().proposals(issue_id)


def get_proposal(proposal_id: str) -> Proposal:
    return get_catalog().proposal(proposal_id)


def get_action(action_id: str) -> GameAction:
    return get_catalog().action(action_id)


def get_available_actions(
    role: PlayerRole,
    victory_type: VictoryType,
    phase: GamePhase | None = None,
) -> list[GameAction]:
    return get_catalog().available_actions(role, victory_type, phase)
