"""Command-line interface for heat and station rundown scheduling."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from .competition import CompetitionConfig, load_competition_config
from .models import Participant
from .roster_csv import parse_roster_csv
from .rundown_printer import format_rundown
from .rundown_validator import RundownViolation, validate_rundown

app = typer.Typer(
    name="rundown",
    help="Assign competitors to heats and stations",
    no_args_is_help=True,
)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _load_inputs(
    roster_file: Path, config_file: Path | None
) -> tuple[list[Participant], CompetitionConfig]:
    try:
        participants = parse_roster_csv(roster_file)
        config = load_competition_config(config_file)
    except (FileNotFoundError, ValueError) as e:
        typer.echo(f"Error reading input: {e}", err=True)
        raise typer.Exit(1)
    return participants, config


RosterArgument = Annotated[
    Path,
    typer.Argument(
        help="Path to the roster CSV (id,name,team,division,event,group,heat,station,time)",
        exists=True,
        readable=True,
    ),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config", "-c",
        help="Competition config JSON (events, divisions, entry codes, rundown configs)",
        exists=True,
        readable=True,
    ),
]


@app.command("generate")
def generate(
    roster_file: RosterArgument,
    config_file: ConfigOption = None,
    event: Annotated[
        str | None,
        typer.Option(
            "--event", "-e",
            help="Only (re)schedule this event, appended after the heats of other events",
        ),
    ] = None,
    title: Annotated[
        str | None,
        typer.Option("--title", help="Title printed above the rundown"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose/debug logging"),
    ] = False,
) -> None:
    """Generate the rundown and print it."""
    setup_logging(verbose=verbose)

    participants, config = _load_inputs(roster_file, config_file)
    namelist = config.build_namelist(participants)

    if event and not any(p.event_code == event for p in namelist.participants):
        typer.echo(f"No participants entered for event '{event}'", err=True)

    results = namelist.generate_rundown(event)

    # Sanity check, not a blocker
    try:
        validate_rundown(namelist.participants, namelist.get_rundown_config)
    except RundownViolation as e:
        typer.echo(f"⚠️  Rundown failed validation: {e}", err=True)

    typer.echo(format_rundown(namelist, title=title or config.title))
    typer.echo(f"\n{len(results)} participants scheduled")


@app.command("info")
def info(
    roster_file: RosterArgument,
    config_file: ConfigOption = None,
) -> None:
    """Show entries per event, division and team without scheduling."""
    participants, config = _load_inputs(roster_file, config_file)
    namelist = config.build_namelist(participants)

    typer.echo(f"Participants: {len(namelist.participants)}")

    typer.echo("\nEntries by event:")
    for summary in namelist.hierarchy():
        total = sum(d.count for d in summary.divisions)
        typer.echo(f"  {summary.event.code} {summary.event.name}: {total} entries")
        for division in summary.divisions:
            if not division.count:
                continue
            code = division.entry_code or "-"
            typer.echo(f"    - {division.division} [{code}]: {division.count}")

    typer.echo("\nTeams:")
    for team in namelist.teams():
        typer.echo(f"  {team.name}: {team.count} competitors")


if __name__ == "__main__":
    app()
