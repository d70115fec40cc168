"""
CLI entry point for Dice Roller.

This module provides the Typer-based command-line interface.

Commands:
    roll      Roll a die and save the result
    history   Show recent rolls
    total     Show how many rolls are stored
    clear     Delete the roll history

The CLI is thin: it resolves settings, opens a DiceGame, and formats what
the game returns. Everything else lives in the library.
"""

import json
import logging
import traceback
from pathlib import Path
from typing import Annotated, NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape

from diceroller import __version__
from diceroller.errors import ConfigError, DiceRollerError, StorageError
from diceroller.game import DiceGame
from diceroller.log import setup_logging
from diceroller.report import build_history_dict, print_history, roll_to_dict
from diceroller.schema import Settings, load_settings

app = typer.Typer(
    name="diceroller",
    help="Roll dice and keep a history of every result.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()
logger = logging.getLogger(__name__)


# =============================================================================
# Shared Options
# =============================================================================

DbOption = Annotated[
    Optional[Path],
    typer.Option(
        "--db",
        help="Path to the SQLite history database. Overrides the config file.",
        resolve_path=True,
    ),
]
ConfigOption = Annotated[
    Optional[Path],
    typer.Option(
        "--config",
        "-c",
        help="Path to a YAML settings file.",
        exists=True,
        readable=True,
        resolve_path=True,
    ),
]
JsonOption = Annotated[
    bool,
    typer.Option("--json", help="Output results in JSON format."),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", help="Enable verbose output."),
]
DebugOption = Annotated[
    bool,
    typer.Option("--debug", help="Enable debug logging and full error tracebacks."),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold]diceroller[/bold] version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """
    Dice Roller - roll dice from 1 to 100 sides and keep the history.
    """
    pass


# =============================================================================
# Helpers
# =============================================================================


def _load_settings(config: Path | None, json_output: bool, debug: bool) -> Settings:
    """Load settings from --config, or defaults when none is given."""
    if config is None:
        return Settings()
    try:
        return load_settings(config)
    except ConfigError as e:
        _fail(e, json_output, debug)


def _open_game(db_path: Path, seed: int | None, json_output: bool, debug: bool) -> DiceGame:
    logger.info("Using database: %s", db_path)
    try:
        return DiceGame.open(db_path, seed=seed)
    except StorageError as e:
        _fail(e, json_output, debug)


def _fail(error: DiceRollerError, json_output: bool, debug: bool) -> NoReturn:
    """Report an error and exit with status 1."""
    if json_output:
        _output_json_error(error, debug)
    elif isinstance(error, StorageError):
        console.print(f"[red]Storage error: {escape(error.message)}[/red]")
    else:
        console.print(f"[red]Error: {escape(error.message)}[/red]")

    if debug and not json_output:
        console.print(f"[dim]{escape(traceback.format_exc())}[/dim]")
    raise typer.Exit(code=1)


def _output_json_error(error: DiceRollerError, include_traceback: bool = False) -> None:
    """Output an error in JSON format."""
    output = {"error": True, **error.to_dict()}
    if include_traceback:
        output["traceback"] = traceback.format_exc()
    print(json.dumps(output, indent=2, default=str))


# =============================================================================
# Commands
# =============================================================================


@app.command()
def roll(
    sides: Annotated[
        Optional[int],
        typer.Argument(help="Number of sides on the die (1-100). Defaults to the configured die."),
    ] = None,
    db: DbOption = None,
    config: ConfigOption = None,
    seed: Annotated[
        Optional[int],
        typer.Option("--seed", help="Seed the roller for a reproducible result."),
    ] = None,
    json_output: JsonOption = False,
    verbose: VerboseOption = False,
    debug: DebugOption = False,
) -> None:
    """
    Roll a die and save the result to the history.

    Example:
        $ diceroller roll 20
    """
    setup_logging(verbose=verbose, debug=debug)
    settings = _load_settings(config, json_output, debug)
    sides = settings.default_sides if sides is None else sides
    seed = settings.seed if seed is None else seed
    db_path = db or settings.resolved_db_path

    with _open_game(db_path, seed, json_output, debug) as game:
        try:
            result = game.roll_and_save(sides)
        except DiceRollerError as e:
            _fail(e, json_output, debug)

        if json_output:
            print(json.dumps(roll_to_dict(result), indent=2))
            return

        if result.is_max:
            style = "bold green"
        elif result.is_min:
            style = "red"
        else:
            style = "bold"
        console.print(f"Rolled d{result.sides}: [{style}]{result.result}[/{style}]")
        if verbose:
            console.print(f"[dim]Saved as roll {result.id} at {result.timestamp.isoformat()}[/dim]")


@app.command()
def history(
    db: DbOption = None,
    config: ConfigOption = None,
    limit: Annotated[
        Optional[int],
        typer.Option(
            "--limit",
            "-n",
            help="Maximum number of rolls to show. Defaults to the configured limit.",
            min=1,
        ),
    ] = None,
    show_all: Annotated[
        bool,
        typer.Option("--all", "-a", help="Show the whole history."),
    ] = False,
    json_output: JsonOption = False,
    verbose: VerboseOption = False,
    debug: DebugOption = False,
) -> None:
    """
    Show recorded rolls, most recent first.

    Example:
        $ diceroller history -n 5
    """
    setup_logging(verbose=verbose, debug=debug)
    settings = _load_settings(config, json_output, debug)
    db_path = db or settings.resolved_db_path
    limit = settings.recent_limit if limit is None else limit

    with _open_game(db_path, settings.seed, json_output, debug) as game:
        try:
            rolls = game.get_history() if show_all else game.get_recent(limit)
            total = game.get_total()
        except DiceRollerError as e:
            _fail(e, json_output, debug)

    if json_output:
        print(json.dumps(build_history_dict(rolls, total), indent=2))
    else:
        print_history(rolls, console=console, total=total)


@app.command()
def total(
    db: DbOption = None,
    config: ConfigOption = None,
    json_output: JsonOption = False,
    verbose: VerboseOption = False,
    debug: DebugOption = False,
) -> None:
    """
    Show how many rolls are stored.

    Example:
        $ diceroller total
    """
    setup_logging(verbose=verbose, debug=debug)
    settings = _load_settings(config, json_output, debug)
    db_path = db or settings.resolved_db_path

    with _open_game(db_path, settings.seed, json_output, debug) as game:
        try:
            count = game.get_total()
        except DiceRollerError as e:
            _fail(e, json_output, debug)

    if json_output:
        print(json.dumps({"total": count}))
    else:
        console.print(f"Total rolls: [bold]{count}[/bold]")


@app.command()
def clear(
    db: DbOption = None,
    config: ConfigOption = None,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Don't ask for confirmation."),
    ] = False,
    verbose: VerboseOption = False,
    debug: DebugOption = False,
) -> None:
    """
    Delete every recorded roll.

    Example:
        $ diceroller clear --yes
    """
    setup_logging(verbose=verbose, debug=debug)
    settings = _load_settings(config, False, debug)
    db_path = db or settings.resolved_db_path

    with _open_game(db_path, settings.seed, False, debug) as game:
        try:
            count = game.get_total()
            if count == 0:
                console.print("[dim]History is already empty.[/dim]")
                return

            if not yes and not typer.confirm(f"Delete {count} roll(s)?"):
                console.print("[yellow]Aborted.[/yellow]")
                raise typer.Exit(code=1)

            game.clear_history()
        except DiceRollerError as e:
            _fail(e, False, debug)

    console.print(f"[green]Cleared {count} roll(s).[/green]")


if __name__ == "__main__":
    app()
