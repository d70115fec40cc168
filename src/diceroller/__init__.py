"""
Dice Roller - Roll dice and keep a history of every result.

It provides:
- Fair rolls for dice with 1 to 100 sides
- Persistent roll history in a local SQLite file
- A command-line interface with table and JSON output

Example usage:
    $ diceroller roll 20
    $ diceroller history -n 5
    $ diceroller clear --yes

Or from Python:
    from diceroller import DiceGame

    with DiceGame.open("dice.db") as game:
        game.roll_and_save(6)
"""

__version__ = "0.1.0"
__author__ = "Dice Roller Contributors"

from diceroller.errors import (
    ConfigError,
    DiceRollerError,
    InvalidInputError,
    SidesOutOfRangeError,
    StorageConnectionError,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from diceroller.game import DiceGame
from diceroller.roller import DiceRoller, Roller
from diceroller.schema import MAX_SIDES, MIN_SIDES, Roll, Settings
from diceroller.store import RollDB, RollStore

__all__ = [
    "__version__",
    "__author__",
    "DiceGame",
    "DiceRoller",
    "Roller",
    "RollDB",
    "RollStore",
    "Roll",
    "Settings",
    "MIN_SIDES",
    "MAX_SIDES",
    "DiceRollerError",
    "InvalidInputError",
    "SidesOutOfRangeError",
    "StorageError",
    "StorageConnectionError",
    "StorageReadError",
    "StorageWriteError",
    "ConfigError",
]
