"""
Game service for Dice Roller.

DiceGame is the orchestration layer client code talks to. It coordinates:
- Roller: Validates the die size and produces the result
- Store: Records every roll

Roll Flow:
    1. Roller validates sides and rolls (invalid sides raise here,
       before anything is written)
    2. A Roll is built with the current UTC time
    3. The store persists it and assigns an id
    4. The saved Roll, carrying its id, is returned

DiceGame holds no state of its own beyond its collaborators; errors from
either one reach the caller unchanged.
"""

import logging
from pathlib import Path
from typing import Any

from diceroller.roller import DiceRoller, Roller
from diceroller.schema import Roll, utc_now
from diceroller.store import RollDB, RollStore

logger = logging.getLogger(__name__)


class DiceGame:
    """
    Rolls dice and keeps their history.

    Usage:
        with DiceGame.open("dice.db") as game:
            roll = game.roll_and_save(20)
            print(f"d{roll.sides}: {roll.result}")
            print(game.get_total())
    """

    def __init__(self, roller: Roller, store: RollStore) -> None:
        """
        Initialize the game.

        Args:
            roller: Produces roll results
            store: Persists roll history
        """
        self.roller = roller
        self.store = store

    @classmethod
    def open(cls, db_path: str | Path, seed: int | None = None) -> "DiceGame":
        """
        Create a game backed by a SQLite file.

        Args:
            db_path: Path to the history database (created if missing)
            seed: Optional seed for reproducible rolls
        """
        return cls(roller=DiceRoller(seed=seed), store=RollDB(db_path))

    def close(self) -> None:
        """Close the underlying store."""
        self.store.close()

    def __enter__(self) -> "DiceGame":
        """Enter context manager."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Exit context manager."""
        self.close()

    @property
    def min_sides(self) -> int:
        """Smallest supported die."""
        return self.roller.min_sides

    @property
    def max_sides(self) -> int:
        """Largest supported die."""
        return self.roller.max_sides

    def roll_and_save(self, sides: int) -> Roll:
        """
        Roll a die and record the result.

        Args:
            sides: Number of sides on the die

        Returns:
            The saved Roll, including its store-assigned id

        Raises:
            SidesOutOfRangeError: If sides is unsupported (nothing is saved)
            StorageError: If the roll couldn't be persisted
        """
        result = self.roller.roll(sides)
        roll = Roll(sides=sides, result=result, timestamp=utc_now())
        roll_id = self.store.save(roll)
        logger.debug("Rolled d%d: %d (id=%d)", sides, result, roll_id)
        return roll.model_copy(update={"id": roll_id})

    def get_history(self) -> list[Roll]:
        """All rolls, most recent first."""
        return self.store.get_all()

    def get_recent(self, count: int) -> list[Roll]:
        """The `count` most recent rolls, most recent first."""
        return self.store.get_recent(count)

    def clear_history(self) -> None:
        """Delete all recorded rolls."""
        self.store.clear_all()

    def get_total(self) -> int:
        """Number of recorded rolls."""
        return self.store.count()
