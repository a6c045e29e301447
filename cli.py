#!/usr/bin/env python3
"""
CLI for testing the FLAMES match simulation and squad engines
"""
import logging
import random

import click
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from flames.config import settings
from flames.database import init_db
from flames.engine import MatchSimulation, SquadEngine
from flames.engine.match_engine import InningsSummary
from flames.generators import get_roster
from flames.models import Squad
from flames.validators import SquadValidator

console = Console()


@click.group()
@click.option("--log-level", default=settings.LOG_LEVEL, help="Python logging level")
def cli(log_level: str):
    """FLAMES Fantasy - JPL match simulation and squad builder"""
    logging.basicConfig(level=log_level.upper(), format="%(levelname)s %(name)s: %(message)s")


@cli.command()
def init():
    """Initialize the database"""
    console.print("[yellow]Initializing database...[/yellow]")
    init_db()
    console.print("[green]Database initialized successfully![/green]")


@cli.command()
def teams():
    """List the JPL franchises"""
    roster = get_roster()
    table = Table(title="JPL Teams")
    table.add_column("Code", style="cyan")
    table.add_column("Name")
    table.add_column("Motto", style="magenta")
    table.add_column("Players", justify="right")

    for team in roster.teams():
        table.add_row(team.short_name, team.name, team.motto, str(len(roster.players(team.id))))

    console.print(table)


@cli.command()
@click.option("--team", "team_id", default=None, help="Team code, e.g. JJ")
def players(team_id):
    """List catalog players"""
    roster = get_roster()
    if team_id and roster.team(team_id) is None:
        console.print(f"[red]Unknown team '{team_id}'[/red]")
        return
    pool = roster.players(team_id) if team_id else roster.all_players()

    table = Table(title=f"Players ({len(pool)} total)")
    table.add_column("ID")
    table.add_column("Name", style="cyan")
    table.add_column("Team")
    table.add_column("Role", style="magenta")
    table.add_column("Credit", justify="right")
    table.add_column("Runs", justify="right")
    table.add_column("Wkts", justify="right")
    table.add_column("Form", justify="right", style="green")

    for p in pool:
        table.add_row(
            p.id, p.name, p.team_id, p.role.value, str(p.credit),
            str(p.season_runs), str(p.season_wickets), f"{p.form_average:.1f}",
        )

    console.print(table)


def _print_innings(innings: InningsSummary, title: str):
    bat = Table(title=f"{title}: {innings.runs}/{innings.wickets} ({innings.overs} ov, extras {innings.extras})")
    bat.add_column("Batter", style="cyan")
    bat.add_column("R", justify="right")
    bat.add_column("B", justify="right")
    bat.add_column("4s", justify="right")
    bat.add_column("6s", justify="right")
    bat.add_column("SR", justify="right")
    for b in innings.batting_card:
        name = b.name if b.is_out else f"{b.name}*"
        bat.add_row(name, str(b.runs), str(b.balls), str(b.fours), str(b.sixes), f"{b.strike_rate:.1f}")
    console.print(bat)

    bowl = Table()
    bowl.add_column("Bowler", style="magenta")
    bowl.add_column("O", justify="right")
    bowl.add_column("R", justify="right")
    bowl.add_column("W", justify="right")
    bowl.add_column("Econ", justify="right")
    for s in innings.bowling_card:
        bowl.add_row(s.name, s.overs_display, str(s.runs), str(s.wickets), f"{s.economy:.2f}")
    console.print(bowl)


@cli.command()
@click.option("--fixture", "fixture_id", default="JPL09_M12", help="Fixture id")
@click.option("--seed", default=None, type=int, help="Random seed for a repeatable match")
@click.option("--commentary", default=10, help="Commentary lines to show")
def simulate(fixture_id: str, seed, commentary: int):
    """Simulate a full match ball by ball"""
    roster = get_roster()
    fixture = roster.fixture(fixture_id)
    if fixture is None:
        console.print(f"[red]Unknown fixture '{fixture_id}'[/red]")
        return

    simulation = MatchSimulation(roster, rng=random.Random(seed), max_commentary=settings.MAX_COMMENTARY)
    state = simulation.start(simulation.create(fixture))
    home, away = roster.team(fixture.home_team_id), roster.team(fixture.away_team_id)
    console.print(Panel(f"{home.name} vs {away.name}\n{fixture.venue}\n{fixture.toss}", title=fixture.id))

    while state.is_live:
        state = simulation.advance(state)

    for number, innings in enumerate(simulation.scorecard(state), start=1):
        _print_innings(innings, f"Innings {number} - {roster.team(innings.batting_team_id).name}")

    console.print("\n[bold]Latest commentary:[/bold]")
    for entry in reversed(state.commentary[:commentary]):
        console.print(f"  {entry.text}")

    console.print(Panel(f"[bold green]{state.result.summary}[/bold green]", title="Result"))


def _print_squad(squad: Squad):
    table = Table(title=f"{squad.name} ({squad.size} players, {squad.credits_spent}/{squad.budget} credits)")
    table.add_column("Name", style="cyan")
    table.add_column("Team")
    table.add_column("Role", style="magenta")
    table.add_column("Credit", justify="right")
    table.add_column("Score", justify="right", style="green")
    table.add_column("")
    for p in squad.players:
        tag = "C" if p.id == squad.captain_id else ("VC" if p.id == squad.vice_captain_id else "")
        table.add_row(p.name, p.team_id, p.role.value, str(p.credit), f"{SquadEngine.score(p, squad):.1f}", tag)
    console.print(table)


@cli.command("smart-fill")
@click.option("--mode", type=click.Choice(["recommended", "form"]), default="recommended")
@click.option("--budget", default=settings.SQUAD_BUDGET, help="Credit budget")
def smart_fill(mode: str, budget: int):
    """Build a squad greedily and elect its captain"""
    roster = get_roster()
    squad = SquadEngine.smart_fill(roster.all_players(), Squad(budget=budget), budget=budget, mode=mode)

    pick = SquadEngine.pick_captaincy(squad.players)
    if pick is not None:
        squad.assign_captaincy(pick.captain, pick.vice_captain)

    _print_squad(squad)
    report = SquadValidator.validate(squad)
    if report["valid"]:
        console.print("[green]Squad is ready to join a contest.[/green]")
    else:
        for error in report["errors"]:
            console.print(f"[red]- {error}[/red]")


@cli.command()
@click.option("--team", "team_ids", multiple=True, help="Restrict the pool to these team codes")
def captaincy(team_ids):
    """Suggest a captain and vice-captain"""
    roster = get_roster()
    pool = [p for p in roster.all_players() if not team_ids or p.team_id in team_ids]
    pick = SquadEngine.pick_captaincy(pool)
    if pick is None:
        console.print("[yellow]No recommendation available.[/yellow]")
        return
    console.print(
        f"FLAMES AI suggests: Captain [bold]{pick.captain.name}[/bold] ({pick.captain_impact:.1f}), "
        f"Vice-Captain [bold]{pick.vice_captain.name}[/bold] ({pick.vice_captain_impact:.1f})"
    )


if __name__ == "__main__":
    cli()
