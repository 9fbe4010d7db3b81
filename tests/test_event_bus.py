"""
Tests for the event bus.
"""

from mandate.state.event_bus import EventBus, EventType, GameEvent, get_event_bus, reset_event_bus


class TestEventBus:

    def test_emit_calls_listener(self, bus):
        received = []
        bus.on(EventType.TURN_RESOLVED, received.append)

        event = bus.emit(EventType.TURN_RESOLVED, room_id="r1", season=2, turn=5)

        assert received == [event]
        assert isinstance(event, GameEvent)
        assert event.room_id == "r1"
        assert event.season == 2
        assert event.data == {"turn": 5}

    def test_listener_only_gets_its_type(self, bus):
        received = []
        bus.on(EventType.GAME_OVER, received.append)

        bus.emit(EventType.TURN_RESOLVED)

        assert received == []

    def test_subscribe_once(self, bus):
        handler = lambda event: None  # noqa: E731
        bus.on(EventType.GAME_OVER, handler)
        bus.on(EventType.GAME_OVER, handler)

        assert bus.listener_count(EventType.GAME_OVER) == 1

    def test_off(self, bus):
        received = []
        bus.on(EventType.GAME_OVER, received.append)
        bus.off(EventType.GAME_OVER, received.append)

        bus.emit(EventType.GAME_OVER)

        assert received == []

    def test_failing_listener_does_not_block_others(self, bus):
        received = []

        def broken(event):
            raise RuntimeError("boom")

        bus.on(EventType.SEASON_STARTED, broken)
        bus.on(EventType.SEASON_STARTED, received.append)

        bus.emit(EventType.SEASON_STARTED)

        assert len(received) == 1

    def test_history_limit(self):
        bus = EventBus(history_limit=3)
        for turn in range(5):
            bus.emit(EventType.TURN_RESOLVED, turn=turn)

        history = bus.get_history()
        assert [e.data["turn"] for e in history] == [2, 3, 4]

    def test_history_filter(self, bus):
        bus.emit(EventType.TURN_RESOLVED)
        bus.emit(EventType.GAME_OVER, winner=False)

        assert len(bus.get_history(EventType.GAME_OVER)) == 1

    def test_clear(self, bus):
        bus.on(EventType.GAME_OVER, print)

        bus.clear()

        assert bus.listener_count(EventType.GAME_OVER) == 0


class TestGlobalBus:

    def test_singleton(self):
        assert get_event_bus() is get_event_bus()

    def test_reset(self):
        first = get_event_bus()

        reset_event_bus()

        assert get_event_bus() is not first
