"""
JSON report generator for Dice Roller.

Produces structured output for scripts consuming the CLI.

Design Principles:
    - Consistent schema: Same keys whether one roll or the whole history
    - ISO timestamps: Standard datetime format
"""

import json
from collections.abc import Sequence
from typing import Any

from diceroller.schema import Roll


def roll_to_dict(roll: Roll) -> dict[str, Any]:
    """Convert a roll to a JSON-ready dictionary."""
    return {
        "id": roll.id,
        "sides": roll.sides,
        "result": roll.result,
        "timestamp": roll.timestamp.isoformat(),
    }


def build_history_dict(rolls: Sequence[Roll], total: int) -> dict[str, Any]:
    """
    Build a history document.

    Args:
        rolls: Rolls to include, most recent first
        total: Number of rolls stored overall

    Returns:
        Dictionary with total, count, and rolls
    """
    return {
        "total": total,
        "count": len(rolls),
        "rolls": [roll_to_dict(r) for r in rolls],
    }


def generate_json_history(
    rolls: Sequence[Roll],
    total: int,
    indent: int = 2,
) -> str:
    """Serialize a history document to a JSON string."""
    return json.dumps(build_history_dict(rolls, total), indent=indent)
