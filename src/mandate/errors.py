"""
Exceptions raised around the MANDATE engine.

The pure engine operations never raise: rejected actions come back as
values. These are for lookups, stores and the session orchestrator.
"""


class MandateError(Exception):
    """Base error for the package."""
    pass


class UnknownContentError(MandateError, KeyError):
    """A catalog lookup (archetype, party, action, ...) found nothing."""
    def __init__(self, kind: str, content_id: str):
        self.kind = kind
        self.content_id = content_id
        super().__init__(f"Unknown {kind}: {content_id}")

    def __str__(self) -> str:
        return self.args[0]


class SessionNotFoundError(MandateError):
    """No stored session for a room."""
    def __init__(self, room_id: str):
        self.room_id = room_id
        super().__init__(f"No session stored for room {room_id}")


class StaleStateError(MandateError):
    """A write's state_version doesn't match the stored one."""
    def __init__(self, expected: int, got: int):
        self.expected = expected
        self.got = got
        super().__init__(
            f"Stale state: expected version {expected}, got {got}. "
            "Reload the session and retry."
        )


class GameOverError(MandateError):
    """Attempted to act on a finished game."""
    def __init__(self, room_id: str, winner: bool | None):
        self.room_id = room_id
        self.winner = winner
        outcome = "won" if winner else "lost"
        super().__init__(f"Game in room {room_id} is over ({outcome}).")
