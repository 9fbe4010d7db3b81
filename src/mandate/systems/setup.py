"""
Session initializer.

Builds the opening GameSessionState for a room. Pure construction:
no randomness, no failure modes.
"""

from __future__ import annotations

from ..state.schema import (
    CampaignStats,
    Character,
    DemographicGroup,
    EventType,
    GamePhase,
    GameSessionState,
    GovernanceStats,
    Institutions,
    PlayerRole,
    PlayerState,
    PoliticalParty,
    PoliticalSphere,
    RoomConfig,
    ScenarioLocation,
    TurnEvent,
)

STARTING_OFFICE = "Mayor"
FUNDS_PER_RESOURCE = 10


def location_variance(location: ScenarioLocation) -> int:
    """Small, stable per-city perturbation in [0, 2]."""
    return len(location.city) % 3


def generate_demographics(location: ScenarioLocation) -> list[DemographicGroup]:
    """
    The electorate of a city.

    Same five groups everywhere; the city shifts a few points of population
    between workers and business owners.
    """
    variance = location_variance(location)

    return [
        DemographicGroup(
            id="demo_union", name="Union Workers", size=30 - variance,
            support=20, satisfaction=50, power=1.2,
            demands=["issue_wages", "issue_transport"],
        ),
        DemographicGroup(
            id="demo_biz", name="Business Owners", size=15 + variance,
            support=20, satisfaction=50, power=2.0,
            demands=["issue_tax", "issue_security"],
        ),
        DemographicGroup(
            id="demo_youth", name="Students & Youth", size=25,
            support=10, satisfaction=50, power=0.8,
            demands=["issue_transport", "issue_environment"],
        ),
        DemographicGroup(
            id="demo_retirees", name="Retirees", size=20,
            support=30, satisfaction=50, power=1.5,
            demands=["issue_health", "issue_security"],
        ),
        DemographicGroup(
            id="demo_religious", name="Religious Groups", size=10,
            support=15, satisfaction=50, power=1.3,
            demands=["issue_family"],
        ),
    ]


def initialize_game(
    room: RoomConfig,
    character: Character,
    party: PoliticalParty,
) -> GameSessionState:
    """Start season 1 of a room's campaign as a municipal candidate."""
    return GameSessionState(
        room_id=room.id,
        location=room.location,
        current_turn=1,
        phase=GamePhase.PRIMARY,
        player_state=PlayerState(
            character=character,
            party=party,
            role=PlayerRole.CANDIDATE,
            current_office=None,
            target_office=STARTING_OFFICE,
            sphere=PoliticalSphere.MUNICIPAL,
            season=1,
            stats=CampaignStats(
                popularity=10,
                party_support=20,
                funds=character.stats.resources * FUNDS_PER_RESOURCE,
                energy=100,
                coherence=100,
            ),
            agenda=[],
            program=[],
        ),
        demographics=generate_demographics(room.location),
        governance=GovernanceStats(economy=50, security=50, services=50, budget=100),
        institutions=Institutions(congress=30, judiciary=40, military=20),
        victory_config=room.victory,
        game_over=False,
        turn_history=[
            TurnEvent(turn=1, message="Season 1 begins. Formulate your agenda!", type=EventType.INFO),
        ],
    )
