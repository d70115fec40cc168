"""
Console report generator for Dice Roller.

Renders the roll history as a Rich table. Natural maxima are shown in green
and ones in red so streaks stand out at a glance.
"""

from collections.abc import Sequence

from rich.console import Console
from rich.table import Table

from diceroller.schema import Roll


def _format_result(roll: Roll) -> str:
    if roll.is_max:
        return f"[bold green]{roll.result}[/bold green]"
    if roll.is_min:
        return f"[red]{roll.result}[/red]"
    return str(roll.result)


def render_history_table(rolls: Sequence[Roll], title: str | None = None) -> Table:
    """
    Build a table of rolls.

    Args:
        rolls: Rolls to show, in display order
        title: Optional table title

    Returns:
        A Rich Table ready to print
    """
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("#", style="dim", width=4)
    table.add_column("ID", justify="right")
    table.add_column("Die", style="cyan")
    table.add_column("Result", justify="right")
    table.add_column("Rolled At (UTC)")

    for index, roll in enumerate(rolls, start=1):
        table.add_row(
            str(index),
            str(roll.id) if roll.id is not None else "-",
            f"d{roll.sides}",
            _format_result(roll),
            roll.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
        )

    return table


def print_history(
    rolls: Sequence[Roll],
    console: Console | None = None,
    total: int | None = None,
) -> None:
    """
    Print the roll history.

    Args:
        rolls: Rolls to show, most recent first
        console: Rich Console instance (creates one if not provided)
        total: Total rolls stored, shown when only part of the history is listed
    """
    if console is None:
        console = Console()

    if not rolls:
        if total:
            console.print(f"[dim]Showing 0 of {total} rolls[/dim]")
        else:
            console.print("[dim]No rolls yet.[/dim]")
        return

    console.print(render_history_table(rolls, title="Roll History"))
    if total is not None and total > len(rolls):
        console.print(f"[dim]Showing {len(rolls)} of {total} rolls[/dim]")
