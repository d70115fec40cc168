"""
Reporting module for Dice Roller.

Output formats:
    - Console: Rich table of rolls with highlighted maxima and ones
    - JSON: Structured history for programmatic consumption

Example:
    from diceroller.report import generate_json_history, print_history

    print_history(game.get_recent(10))
    print(generate_json_history(game.get_history(), game.get_total()))
"""

from diceroller.report.console import print_history, render_history_table
from diceroller.report.json import build_history_dict, generate_json_history, roll_to_dict

__all__ = [
    "print_history",
    "render_history_table",
    "build_history_dict",
    "generate_json_history",
    "roll_to_dict",
]
