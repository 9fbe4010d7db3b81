"""
Session storage abstraction.

The engine is storage-agnostic; these stores sit at the boundary where a
host application persists GameSessionState keyed by room id. Writes carry
an optimistic-concurrency check on state_version so two players racing on
the same room can't silently overwrite each other.
"""

import json
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import ValidationError

from ..errors import StaleStateError
from .schema import GameSessionState

logger = logging.getLogger(__name__)


@runtime_checkable
class SessionStore(Protocol):
    """
    Storage interface for game sessions.

    Implementations:
    - JsonSessionStore: File-based persistence
    - MemorySessionStore: In-memory storage (testing)
    """

    def save(self, state: GameSessionState, expected_version: int | None = None) -> None:
        """
        Persist a session.

        expected_version is the state_version the caller loaded. If the
        stored copy has moved on since, StaleStateError is raised.
        """
        ...

    def load(self, room_id: str) -> GameSessionState | None:
        """Load a session by room id. Returns None if not found."""
        ...

    def delete(self, room_id: str) -> bool:
        """Delete a session. Returns True if deleted."""
        ...

    def list_all(self) -> list[dict]:
        """List all sessions with summary metadata."""
        ...

    def exists(self, room_id: str) -> bool:
        ...


def _summary(state: GameSessionState) -> dict:
    return {
        "room_id": state.room_id,
        "city": state.location.city,
        "season": state.player_state.season,
        "turn": state.current_turn,
        "phase": state.phase.value,
        "game_over": state.game_over,
        "state_version": state.state_version,
    }


class JsonSessionStore:
    """
    File-based session storage using JSON.

    One file per room, with a backup of the previous save.
    """

    def __init__(self, sessions_dir: Path | str = "sessions"):
        self.sessions_dir = Path(sessions_dir)
        self.sessions_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, room_id: str) -> Path:
        return self.sessions_dir / f"{room_id}.json"

    def save(self, state: GameSessionState, expected_version: int | None = None) -> None:
        """Save session to JSON file with backup."""
        session_file = self._path(state.room_id)

        if session_file.exists():
            if expected_version is not None:
                current = self.load(state.room_id)
                if current is not None and current.state_version != expected_version:
                    logger.warning(
                        "Rejected stale write for room %s (stored v%d, caller v%d)",
                        state.room_id, current.state_version, expected_version,
                    )
                    raise StaleStateError(expected=current.state_version, got=expected_version)

            backup = session_file.with_suffix(".json.bak")
            backup.write_text(session_file.read_text(encoding="utf-8"), encoding="utf-8")

        session_file.write_text(state.model_dump_json(indent=2), encoding="utf-8")
        logger.debug("Saved room %s at v%d", state.room_id, state.state_version)

    def load(self, room_id: str) -> GameSessionState | None:
        session_file = self._path(room_id)
        if not session_file.exists():
            return None

        try:
            return GameSessionState.model_validate_json(session_file.read_text(encoding="utf-8"))
        except ValidationError:
            logger.error("Corrupt session file for room %s", room_id)
            return None

    def delete(self, room_id: str) -> bool:
        session_file = self._path(room_id)
        if session_file.exists():
            session_file.unlink()
            return True
        return False

    def list_all(self) -> list[dict]:
        """List all sessions, most recently modified first."""
        sessions = []

        for f in sorted(
            self.sessions_dir.glob("*.json"),
            key=lambda x: x.stat().st_mtime,
            reverse=True,
        ):
            if f.name.startswith("."):
                continue
            try:
                state = GameSessionState.model_validate(json.loads(f.read_text(encoding="utf-8")))
            except (json.JSONDecodeError, ValidationError):
                continue
            sessions.append(_summary(state))

        return sessions

    def exists(self, room_id: str) -> bool:
        return self._path(room_id).exists()


class MemorySessionStore:
    """
    In-memory session storage for testing.

    Stores deep copies so callers can't mutate what was saved.
    """

    def __init__(self):
        self.sessions: dict[str, GameSessionState] = {}

    def save(self, state: GameSessionState, expected_version: int | None = None) -> None:
        current = self.sessions.get(state.room_id)
        if current is not None and expected_version is not None:
            if current.state_version != expected_version:
                logger.warning(
                    "Rejected stale write for room %s (stored v%d, caller v%d)",
                    state.room_id, current.state_version, expected_version,
                )
                raise StaleStateError(expected=current.state_version, got=expected_version)
        self.sessions[state.room_id] = state.model_copy(deep=True)

    def load(self, room_id: str) -> GameSessionState | None:
        state = self.sessions.get(room_id)
        return state.model_copy(deep=True) if state is not None else None

    def delete(self, room_id: str) -> bool:
        if room_id in self.sessions:
            del self.sessions[room_id]
            return True
        return False

    def list_all(self) -> list[dict]:
        return [_summary(s) for s in self.sessions.values()]

    def exists(self, room_id: str) -> bool:
        return room_id in self.sessions

    def clear(self) -> None:
        """Clear all sessions (test utility)."""
        self.sessions.clear()
