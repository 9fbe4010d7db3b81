"""
Event bus for MANDATE engine notifications.

Lets a host application (UI, achievements, analytics) react to what the
engine did without the engine knowing about it.

Usage:
    from mandate.state.event_bus import get_event_bus, EventType

    bus = get_event_bus()
    bus.on(EventType.GAME_OVER, show_final_screen)

    # Emitted by CampaignEngine after each operation
    bus.emit(EventType.GAME_OVER, room_id="101", winner=True)
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Engine events that can be published."""

    # Session lifecycle
    SESSION_CREATED = "session.created"
    SEASON_STARTED = "season.started"
    GAME_OVER = "game.over"

    # Turn events
    TURN_RESOLVED = "turn.resolved"
    ACTION_REJECTED = "action.rejected"
    PHASE_CHANGED = "phase.changed"

    # Platform
    PLATFORM_UPDATED = "platform.updated"


@dataclass
class GameEvent:
    """
    Event payload for the event bus.

    Attributes:
        type: The event type
        data: Event-specific payload
        room_id: Room the session belongs to
        season: Season number when the event occurred
        timestamp: When the event was emitted
    """

    type: EventType
    data: dict = field(default_factory=dict)
    room_id: str = ""
    season: int = 0
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"[{self.type.value}] {self.data}"


EventHandler = Callable[[GameEvent], None]


class EventBus:
    """
    Synchronous event bus.

    Listeners are called immediately on emit(). A failing listener is
    logged and skipped so it can't break the others.
    """

    def __init__(self, history_limit: int = 100):
        self._listeners: dict[EventType, list[EventHandler]] = {}
        self._history: list[GameEvent] = []
        self._history_limit = history_limit

    def on(self, event_type: EventType, handler: EventHandler) -> None:
        """Subscribe to an event type."""
        handlers = self._listeners.setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)

    def off(self, event_type: EventType, handler: EventHandler) -> None:
        """Unsubscribe from an event type."""
        if event_type in self._listeners and handler in self._listeners[event_type]:
            self._listeners[event_type].remove(handler)

    def emit(
        self,
        event_type: EventType,
        room_id: str = "",
        season: int = 0,
        **data,
    ) -> GameEvent:
        """
        Emit an event to all subscribers.

        Returns:
            The emitted GameEvent (for chaining/testing)
        """
        event = GameEvent(
            type=event_type,
            data=data,
            room_id=room_id,
            season=season,
        )

        self._history.append(event)
        if len(self._history) > self._history_limit:
            self._history = self._history[-self._history_limit :]

        for handler in list(self._listeners.get(event_type, [])):
            try:
                handler(event)
            except Exception:
                logger.exception("Error in handler for %s", event_type.value)

        return event

    def clear(self) -> None:
        """Clear all listeners. Useful for testing."""
        self._listeners.clear()

    def get_history(self, event_type: EventType | None = None) -> list[GameEvent]:
        """Recent events, optionally filtered by type."""
        if event_type is None:
            return list(self._history)
        return [e for e in self._history if e.type == event_type]

    def listener_count(self, event_type: EventType) -> int:
        return len(self._listeners.get(event_type, []))


# Global singleton instance
_event_bus: EventBus | None = None


def get_event_bus() -> EventBus:
    """Get the global event bus instance."""
    global _event_bus
    if _event_bus is None:
        _event_bus = EventBus()
    return _event_bus


def reset_event_bus() -> None:
    """Reset the global event bus. Useful for testing."""
    global _event_bus
    _event_bus = None
