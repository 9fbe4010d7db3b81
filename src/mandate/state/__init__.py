"""State models, storage and events for MANDATE sessions."""

from .schema import (
    GameSessionState,
    PlayerState,
    CampaignStats,
    Character,
    CharacterStats,
    Archetype,
    PoliticalParty,
    Issue,
    Proposal,
    GameAction,
    ActionCost,
    DemographicGroup,
    GovernanceStats,
    Institutions,
    TurnEvent,
    RoomConfig,
    ScenarioLocation,
    VictoryConfig,
    GamePhase,
    PlayerRole,
    PoliticalSphere,
    VictoryType,
    EventType,
    ActionType,
    StatName,
    MAX_TURNS,
    PRIMARY_END_TURN,
)
from .store import SessionStore, JsonSessionStore, MemorySessionStore
from .event_bus import (
    EventBus,
    GameEvent,
    get_event_bus,
    reset_event_bus,
)
from .event_bus import EventType as BusEventType

__all__ = [
    # Schema
    "GameSessionState",
    "PlayerState",
    "CampaignStats",
    "Character",
    "CharacterStats",
    "Archetype",
    "PoliticalParty",
    "Issue",
    "Proposal",
    "GameAction",
    "ActionCost",
    "DemographicGroup",
    "GovernanceStats",
    "Institutions",
    "TurnEvent",
    "RoomConfig",
    "ScenarioLocation",
    "VictoryConfig",
    "GamePhase",
    "PlayerRole",
    "PoliticalSphere",
    "VictoryType",
    "EventType",
    "ActionType",
    "StatName",
    "MAX_TURNS",
    "PRIMARY_END_TURN",
    # Store
    "SessionStore",
    "JsonSessionStore",
    "MemorySessionStore",
    # Event Bus
    "EventBus",
    "BusEventType",
    "GameEvent",
    "get_event_bus",
    "reset_event_bus",
]
