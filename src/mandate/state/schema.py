"""
Pydantic models for MANDATE game state.

The session state is versioned for migration support.
Designed to serialize to JSON and round-trip through any document store
without loss; the engine itself never touches storage.
"""

from enum import Enum
from typing import ClassVar
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


# -----------------------------------------------------------------------------
# Rules constants
# -----------------------------------------------------------------------------

MAX_TURNS = 48          # 4 years * 12 months
PRIMARY_END_TURN = 36   # End of year 3
STAT_CEILING = 100      # Cap for energy, support and satisfaction


# -----------------------------------------------------------------------------
# Enums
# -----------------------------------------------------------------------------

class GamePhase(str, Enum):
    PRIMARY = "PRIMARY"      # Years 1-3
    ELECTION = "ELECTION"    # Year 4


class PlayerRole(str, Enum):
    CANDIDATE = "CANDIDATE"
    INCUMBENT = "INCUMBENT"
    OPPOSITION = "OPPOSITION"


class PoliticalSphere(str, Enum):
    MUNICIPAL = "MUNICIPAL"
    STATE = "STATE"
    FEDERAL = "FEDERAL"


# Numeric office level used by OFFICE victory (1=Mayor, 2=State, 3=Fed)
SPHERE_LEVELS: dict[PoliticalSphere, int] = {
    PoliticalSphere.MUNICIPAL: 1,
    PoliticalSphere.STATE: 2,
    PoliticalSphere.FEDERAL: 3,
}


class VictoryType(str, Enum):
    CYCLES = "CYCLES"        # Survive N seasons
    OFFICE = "OFFICE"        # Win an election at level N or above
    DICTATOR = "DICTATOR"    # Seize absolute power


class EventType(str, Enum):
    """Severity tag on a turn history entry."""
    INFO = "INFO"
    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"
    CRITICAL = "CRITICAL"


class StatName(str, Enum):
    """Character stats an action can roll against."""
    CHARISMA = "charisma"
    INTELLIGENCE = "intelligence"
    RESOURCES = "resources"


class ActionType(str, Enum):
    RESEARCH = "RESEARCH"
    CAMPAIGN = "CAMPAIGN"
    PARTY = "PARTY"
    POLICY = "POLICY"
    PERSONAL = "PERSONAL"
    GOVERNANCE = "GOVERNANCE"
    ATTACK = "ATTACK"
    INSTITUTION = "INSTITUTION"


class Temperament(str, Enum):
    PRAGMATIC = "PRAGMATIC"
    IDEALIST = "IDEALIST"
    RUTHLESS = "RUTHLESS"
    CHARISMATIC = "CHARISMATIC"


class Specialization(str, Enum):
    STRATEGIST = "STRATEGIST"
    ORATOR = "ORATOR"
    FUNDRAISER = "FUNDRAISER"
    OPERATOR = "OPERATOR"


class EconomicStance(str, Enum):
    NEOLIBERAL = "NEOLIBERAL"
    DEVELOPMENTALIST = "DEVELOPMENTALIST"
    SOCIAL_DEMOCRAT = "SOCIAL_DEMOCRAT"
    LIBERTARIAN = "LIBERTARIAN"
    CENTER = "CENTR_ECON"


class SocialStance(str, Enum):
    CONSERVATIVE = "CONSERVATIVE"
    PROGRESSIVE = "PROGRESSIVE"
    MODERATE = "MODERATE"
    RADICAL = "RADICAL"
    TRADITIONALIST = "TRADITIONALIST"


class ArchetypeBackground(str, Enum):
    UNION_LEADER = "UNION_LEADER"
    TYCOON = "TYCOON"
    INTELLECTUAL = "INTELLECTUAL"
    OUTSIDER = "OUTSIDER"
    MILITARY = "MILITARY"
    INFLUENCER = "INFLUENCER"
    STUDENT = "STUDENT"
    HEIR = "HEIR"


def generate_id() -> str:
    return str(uuid4())[:8]


def clamp_stat(value: int, floor: int = 0, ceiling: int = STAT_CEILING) -> int:
    """Clamp a bounded stat into [floor, ceiling]."""
    return max(floor, min(ceiling, value))


# -----------------------------------------------------------------------------
# Room & Scenario
# -----------------------------------------------------------------------------

class ScenarioLocation(BaseModel):
    """Where a room's campaign takes place."""
    model_config = ConfigDict(frozen=True)

    city: str
    state: str = ""
    country: str = ""


class VictoryConfig(BaseModel):
    """
    How a room is won. Set at room creation and never changed.

    value: CYCLES = number of seasons; OFFICE = 1 Mayor, 2 State, 3 Federal;
    DICTATOR ignores it.
    """
    model_config = ConfigDict(frozen=True)

    type: VictoryType = VictoryType.OFFICE
    value: int = 1


class RoomConfig(BaseModel):
    """The slice of a game room the engine needs to start a session."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=generate_id)
    name: str = ""
    location: ScenarioLocation
    victory: VictoryConfig = Field(default_factory=VictoryConfig)


# -----------------------------------------------------------------------------
# Content (catalog records)
# -----------------------------------------------------------------------------

class CharacterStats(BaseModel):
    charisma: int = 0
    intelligence: int = 0
    resources: int = 0

    def get(self, stat: StatName) -> int:
        return getattr(self, stat.value)


class Archetype(BaseModel):
    """A character class. Generated characters start from its base stats."""
    id: str
    name: str
    description: str = ""
    icon: str = ""
    base_stats: CharacterStats
    background: ArchetypeBackground | None = None
    name_pool: list[str] = Field(default_factory=list)


class Character(BaseModel):
    """Player persona. Immutable for the life of a session."""
    id: str = Field(default_factory=lambda: f"char_{generate_id()}")
    name: str
    archetype_id: str
    temperament: Temperament | None = None
    specialization: Specialization | None = None
    description: str = ""
    stats: CharacterStats
    flavour_text: str = ""


class PoliticalParty(BaseModel):
    id: str
    name: str
    acronym: str
    spectrum: str = ""
    economic_stance: EconomicStance | None = None
    social_stance: SocialStance | None = None
    color: str = ""
    bonuses: list[str] = Field(default_factory=list)
    maluses: list[str] = Field(default_factory=list)


class Issue(BaseModel):
    id: str
    name: str
    description: str = ""
    controversial: bool = False


class Proposal(BaseModel):
    id: str
    issue_id: str
    name: str
    cost: int = 0  # Resource cost to implement/maintain
    pop_effect: dict[str, int] = Field(default_factory=dict)  # demographic id -> support change


class ActionCost(BaseModel):
    """Partial cost map. Missing entries cost nothing."""
    funds: int = 0
    energy: int = 0
    budget: int = 0  # Public treasury (governance only)


class GameAction(BaseModel):
    """A catalog action the player can take on their turn."""
    model_config = ConfigDict(frozen=True)

    id: str
    type: ActionType
    name: str
    description: str = ""
    cost: ActionCost = Field(default_factory=ActionCost)
    difficulty: int = 0  # Target number for d20 + stat
    stat_modifier: StatName = StatName.CHARISMA
    # Advisory only: the resolver does not re-check these
    required_role: list[PlayerRole] = Field(default_factory=lambda: list(PlayerRole))
    required_phase: GamePhase | None = None


# -----------------------------------------------------------------------------
# Session State
# -----------------------------------------------------------------------------

class CampaignStats(BaseModel):
    """The player's mutable campaign numbers."""
    popularity: int = 10       # General public; floored at 0 only on gaffes
    party_support: int = 20    # Internal party standing
    funds: int = 0             # Unbounded accumulator
    energy: int = Field(default=100, ge=0, le=STAT_CEILING)
    coherence: int = 100       # How well actions match promises


class PlayerState(BaseModel):
    character: Character
    party: PoliticalParty
    role: PlayerRole = PlayerRole.CANDIDATE
    current_office: str | None = None  # "Mayor", "Governor", ...
    target_office: str | None = "Mayor"
    sphere: PoliticalSphere = PoliticalSphere.MUNICIPAL
    season: int = Field(default=1, ge=1)
    stats: CampaignStats = Field(default_factory=CampaignStats)
    agenda: list[str] = Field(default_factory=list)   # Issue ids
    program: list[str] = Field(default_factory=list)  # Proposal ids


class DemographicGroup(BaseModel):
    id: str
    name: str
    size: int                                   # Share of population (not normalized)
    support: int = Field(default=0, ge=0, le=STAT_CEILING)
    satisfaction: int = Field(default=50, ge=0, le=STAT_CEILING)
    power: float = 1.0                          # Political influence multiplier
    demands: list[str] = Field(default_factory=list)  # Issue ids, fixed length


class GovernanceStats(BaseModel):
    """The 'reality' of the city. Never clamped; may go negative."""
    economy: int = 50
    security: int = 50
    services: int = 50
    budget: int = 100  # Treasury; kept non-negative by the cost gate


class Institutions(BaseModel):
    """Institutional loyalty. Only read by DICTATOR victory."""
    congress: int = 30
    judiciary: int = 40
    military: int = 20

    INSTITUTION_NAMES: ClassVar[tuple[str, ...]] = ("congress", "judiciary", "military")


class TurnEvent(BaseModel):
    """A single turn history entry."""
    turn: int
    message: str
    type: EventType = EventType.INFO


class GameSessionState(BaseModel):
    """
    Complete session state.

    This is the root model that gets serialized by the host application.
    Engine operations never mutate an instance they receive; they return a
    new one.

    state_version is bumped by every operation that changes state and is
    used as an optimistic-concurrency token by session stores.
    """
    schema_version: str = "1.0.0"
    state_version: int = 0

    room_id: str
    location: ScenarioLocation
    current_turn: int = Field(default=1, ge=1)
    max_turns: int = MAX_TURNS
    phase: GamePhase = GamePhase.PRIMARY

    player_state: PlayerState
    demographics: list[DemographicGroup] = Field(default_factory=list)
    governance: GovernanceStats = Field(default_factory=GovernanceStats)
    institutions: Institutions = Field(default_factory=Institutions)
    victory_config: VictoryConfig = Field(default_factory=VictoryConfig)

    game_over: bool = False
    winner: bool | None = None

    # Newest first
    turn_history: list[TurnEvent] = Field(default_factory=list)

    @property
    def season_complete(self) -> bool:
        """Whether the season clock has run out and an election is due."""
        return self.current_turn >= self.max_turns

    @property
    def stats(self) -> CampaignStats:
        return self.player_state.stats

    def log(self, turn: int, message: str, type: EventType = EventType.INFO) -> None:
        """Prepend an entry to the turn history."""
        self.turn_history.insert(0, TurnEvent(turn=turn, message=message, type=type))

    def trim_history(self, limit: int | None) -> None:
        """Drop the oldest history entries beyond limit. None keeps everything."""
        if limit is not None and len(self.turn_history) > limit:
            del self.turn_history[limit:]
