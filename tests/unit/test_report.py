"""
Unit tests for the report module.

Tests cover:
- JSON history documents
- Console table rendering
"""

import json
from datetime import UTC, datetime
from io import StringIO

from rich.console import Console

from diceroller.report import (
    build_history_dict,
    generate_json_history,
    print_history,
    render_history_table,
    roll_to_dict,
)
from diceroller.schema import Roll


def _console() -> tuple[Console, StringIO]:
    output = StringIO()
    return Console(file=output, force_terminal=False, width=120), output


class TestJsonReport:
    """Tests for JSON output."""

    def test_roll_to_dict(self) -> None:
        """A roll becomes a flat dict with an ISO timestamp."""
        roll = Roll(id=3, sides=20, result=17, timestamp=datetime(2024, 5, 1, 12, 0, tzinfo=UTC))
        assert roll_to_dict(roll) == {
            "id": 3,
            "sides": 20,
            "result": 17,
            "timestamp": "2024-05-01T12:00:00+00:00",
        }

    def test_build_history_dict(self) -> None:
        """History documents carry total and count."""
        rolls = [Roll(id=2, sides=6, result=6), Roll(id=1, sides=6, result=1)]
        data = build_history_dict(rolls, total=5)

        assert data["total"] == 5
        assert data["count"] == 2
        assert [r["id"] for r in data["rolls"]] == [2, 1]

    def test_generate_json_history_parses(self) -> None:
        """The JSON string round-trips through json.loads."""
        text = generate_json_history([Roll(id=1, sides=4, result=3)], total=1)
        data = json.loads(text)
        assert data["rolls"][0]["sides"] == 4

    def test_empty_history(self) -> None:
        """An empty history is still a valid document."""
        assert build_history_dict([], total=0) == {"total": 0, "count": 0, "rolls": []}


class TestConsoleReport:
    """Tests for console output."""

    def test_table_has_row_per_roll(self) -> None:
        """One table row per roll."""
        rolls = [Roll(id=i, sides=6, result=3) for i in range(1, 4)]
        table = render_history_table(rolls)
        assert table.row_count == 3

    def test_print_history(self) -> None:
        """Printed history shows dice and results."""
        console, output = _console()
        rolls = [
            Roll(id=2, sides=20, result=20, timestamp=datetime(2024, 5, 1, 12, 0, 5, tzinfo=UTC)),
            Roll(id=1, sides=8, result=3, timestamp=datetime(2024, 5, 1, 12, 0, 0, tzinfo=UTC)),
        ]

        print_history(rolls, console=console)
        text = output.getvalue()

        assert "Roll History" in text
        assert "d20" in text
        assert "d8" in text
        assert "2024-05-01 12:00:05" in text

    def test_print_empty_history(self) -> None:
        """An empty history prints a placeholder."""
        console, output = _console()
        print_history([], console=console)
        assert "No rolls yet" in output.getvalue()

    def test_no_rows_shown_but_history_exists(self) -> None:
        """An empty page of a non-empty history isn't reported as empty."""
        console, output = _console()
        print_history([], console=console, total=4)
        text = output.getvalue()
        assert "Showing 0 of 4 rolls" in text
        assert "No rolls yet" not in text

    def test_partial_history_note(self) -> None:
        """When only part of the history is shown, say so."""
        console, output = _console()
        print_history([Roll(id=9, sides=6, result=2)], console=console, total=9)
        assert "Showing 1 of 9 rolls" in output.getvalue()
