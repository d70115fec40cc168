"""
Base class for roll history storage.

RollStore is the contract the game relies on. RollDB (SQLite) is the only
implementation; tests may substitute their own.
"""

from abc import ABC, abstractmethod
from typing import Any

from diceroller.schema import Roll


class RollStore(ABC):
    """
    Abstract base class for roll history stores.

    Every read returns rolls most recent first.
    """

    @abstractmethod
    def save(self, roll: Roll) -> int:
        """Persist a roll and return its assigned id."""
        ...

    @abstractmethod
    def get_all(self) -> list[Roll]:
        """Return every stored roll, most recent first."""
        ...

    @abstractmethod
    def get_recent(self, count: int) -> list[Roll]:
        """Return at most `count` rolls, most recent first."""
        ...

    @abstractmethod
    def clear_all(self) -> int:
        """Delete every roll and return how many were removed."""
        ...

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored rolls."""
        ...

    def close(self) -> None:
        """Release any resources held by the store."""

    def __enter__(self) -> "RollStore":
        """Enter context manager."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Exit context manager."""
        self.close()
