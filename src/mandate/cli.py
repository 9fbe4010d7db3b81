"""
Command-line interface for MANDATE.

Headless tooling around the engine, for balancing and smoke-testing:

    python -m mandate simulate --seed 7 --archetype arch_union --victory OFFICE:2
    python -m mandate catalog --role INCUMBENT --victory DICTATOR

simulate plays whole seasons with a simple autoplay policy and prints a
summary. The election outcome is decided here, by the host, not by the
engine.
"""

from __future__ import annotations

import argparse
import logging
import random
import sys

from rich.console import Console
from rich.table import Table

from .config import load_config
from .content.catalog import get_catalog
from .content.generator import generate_character
from .state.schema import (
    GameAction,
    GameSessionState,
    PlayerRole,
    RoomConfig,
    ScenarioLocation,
    VictoryConfig,
    VictoryType,
)
from .state.store import MemorySessionStore
from .systems.engine import CampaignEngine
from .systems.turns import REST_ACTION_ID
from .systems.validation import check_affordability

console = Console()

# Autoplay: rest below this much energy
REST_BELOW_ENERGY = 30
# Host-side election rule used by simulate
ELECTION_MIN_POPULARITY = 40
ELECTION_MIN_PARTY_SUPPORT = 40


def parse_victory(value: str) -> VictoryConfig:
    """'OFFICE:2' -> VictoryConfig(type=OFFICE, value=2). Value defaults to 1."""
    kind, _, amount = value.partition(":")
    try:
        return VictoryConfig(type=VictoryType(kind.upper()), value=int(amount or 1))
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid victory condition: {value}") from e


def choose_action(state: GameSessionState, actions: list[GameAction]) -> GameAction:
    """
    Greedy autoplay policy.

    Rest when tired; otherwise the affordable action with the best odds
    (lowest difficulty minus stat), skipping pure research and rest.
    """
    rest = next(a for a in actions if a.id == REST_ACTION_ID)
    if state.player_state.stats.energy < REST_BELOW_ENERGY:
        return rest

    character = state.player_state.character
    candidates = [
        a for a in actions
        if a.id != REST_ACTION_ID
        and a.type.value != "RESEARCH"
        and check_affordability(state, a) is None
    ]
    if not candidates:
        return rest
    return min(candidates, key=lambda a: a.difficulty - character.stats.get(a.stat_modifier))


def choose_resting(state: GameSessionState, actions: list[GameAction]) -> GameAction:
    """Baseline policy: never act, only rest."""
    return next(a for a in actions if a.id == REST_ACTION_ID)


STRATEGIES = {
    "greedy": choose_action,
    "rest": choose_resting,
}


def decide_election(state: GameSessionState) -> bool:
    stats = state.player_state.stats
    return (
        stats.popularity >= ELECTION_MIN_POPULARITY
        and stats.party_support >= ELECTION_MIN_PARTY_SUPPORT
    )


def run_simulation(args: argparse.Namespace) -> GameSessionState:
    config = load_config(args.sessions_dir)
    rng = random.Random(args.seed if args.seed is not None else config.get("seed"))

    catalog = get_catalog()
    engine = CampaignEngine(MemorySessionStore(), rng=rng, config=config, catalog=catalog)

    room = RoomConfig(
        id="sim",
        name="Simulation",
        location=ScenarioLocation(city=args.city, state="", country=""),
        victory=args.victory,
    )
    character = generate_character(args.archetype, rng)
    party = catalog.party(args.party)
    state = engine.create_session(room, character, party)

    strategy = STRATEGIES[args.strategy]
    seasons: list[dict] = []
    while not state.game_over and state.player_state.season <= args.max_seasons:
        while not state.season_complete and not state.game_over:
            actions = engine.available_actions(room.id)
            action = strategy(state, actions)
            state = engine.take_action(room.id, action.id).state

        if state.game_over:
            break

        won = decide_election(state)
        seasons.append({
            "season": state.player_state.season,
            "role": state.player_state.role.value,
            "popularity": state.player_state.stats.popularity,
            "party_support": state.player_state.stats.party_support,
            "won": won,
        })
        state = engine.end_season(room.id, won)

    render_summary(state, seasons)
    return state


def render_summary(state: GameSessionState, seasons: list[dict]) -> None:
    player = state.player_state
    console.print(
        f"[bold]{player.character.name}[/bold] ({player.party.acronym}) "
        f"in {state.location.city}"
    )

    table = Table(title="Seasons")
    table.add_column("Season", justify="right")
    table.add_column("Role")
    table.add_column("Popularity", justify="right")
    table.add_column("Party", justify="right")
    table.add_column("Election")
    for row in seasons:
        table.add_row(
            str(row["season"]),
            row["role"],
            str(row["popularity"]),
            str(row["party_support"]),
            "[green]won[/green]" if row["won"] else "[red]lost[/red]",
        )
    console.print(table)

    if state.game_over:
        outcome = "[bold green]VICTORY[/bold green]" if state.winner else "[bold red]GAME OVER[/bold red]"
    else:
        outcome = "[yellow]unfinished[/yellow]"
    console.print(f"Result: {outcome} (season {player.season}, turn {state.current_turn})")

    for event in state.turn_history[:5]:
        console.print(f"  T{event.turn} [{event.type.value}] {event.message}")


def show_catalog(args: argparse.Namespace) -> None:
    role = PlayerRole(args.role.upper())
    actions = get_catalog().available_actions(role, args.victory.type)

    table = Table(title=f"Actions for {role.value.title()} ({args.victory.type.value})")
    table.add_column("Id")
    table.add_column("Type")
    table.add_column("Cost")
    table.add_column("DC", justify="right")
    table.add_column("Stat")
    for action in actions:
        cost = ", ".join(f"{k} {v}" for k, v in action.cost.model_dump().items() if v) or "-"
        table.add_row(action.id, action.type.value, cost, str(action.difficulty), action.stat_modifier.value)
    console.print(table)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mandate", description="MANDATE campaign engine tools")
    parser.add_argument("--sessions-dir", default="sessions", help="Directory holding config")
    parser.add_argument("--log-level", default=None, help="Override configured log level")
    sub = parser.add_subparsers(dest="command", required=True)

    sim = sub.add_parser("simulate", help="Autoplay a campaign")
    sim.add_argument("--seed", type=int, default=None)
    sim.add_argument("--city", default="São Paulo")
    sim.add_argument("--archetype", default="arch_union")
    sim.add_argument("--party", default="party_cent")
    sim.add_argument("--victory", type=parse_victory, default=VictoryConfig(type=VictoryType.OFFICE, value=2))
    sim.add_argument("--max-seasons", type=int, default=5)
    sim.add_argument("--strategy", default="greedy", choices=sorted(STRATEGIES))

    cat = sub.add_parser("catalog", help="List actions available to a role")
    cat.add_argument("--role", default="CANDIDATE", choices=[r.value for r in PlayerRole])
    cat.add_argument("--victory", type=parse_victory, default=VictoryConfig())

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    level = args.log_level or load_config(args.sessions_dir).get("log_level", "INFO")
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.command == "simulate":
        run_simulation(args)
    elif args.command == "catalog":
        show_catalog(args)
    return 0


if __name__ == "__main__":
    sys.exit(main())
