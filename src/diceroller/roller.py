"""
Dice rolling for Dice Roller.

This module defines the roller interface and its single implementation:
- Roller: Abstract base class for anything that can roll a die
- DiceRoller: Uniform rolls over [1, sides] from an owned random source

DiceRoller never touches the module-level `random` state. Each instance holds
its own random.Random, so tests can pass a seed and get a fixed sequence.
"""

import random
from abc import ABC, abstractmethod

from diceroller.errors import SidesOutOfRangeError
from diceroller.schema import MAX_SIDES, MIN_SIDES


class Roller(ABC):
    """
    Abstract base class for die rollers.

    Subclasses must define the supported range and implement roll().
    """

    @property
    @abstractmethod
    def min_sides(self) -> int:
        """Smallest supported die."""
        ...

    @property
    @abstractmethod
    def max_sides(self) -> int:
        """Largest supported die."""
        ...

    @abstractmethod
    def roll(self, sides: int) -> int:
        """
        Roll a die with the given number of sides.

        Args:
            sides: Number of sides on the die

        Returns:
            The face that came up, between 1 and sides inclusive

        Raises:
            SidesOutOfRangeError: If sides is outside [min_sides, max_sides]
        """
        ...


class DiceRoller(Roller):
    """
    Rolls a fair die with 1 to 100 sides.

    Usage:
        roller = DiceRoller()
        roller.roll(20)

        # Reproducible
        roller = DiceRoller(seed=42)
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        seed: int | None = None,
    ) -> None:
        """
        Initialize the roller.

        Args:
            rng: Random source to draw from. Takes precedence over seed.
            seed: Seed for a new random source. If neither rng nor seed is
                  given, the source is seeded from OS entropy.
        """
        if rng is None:
            rng = random.Random(seed)
        self._rng = rng

    @property
    def min_sides(self) -> int:
        return MIN_SIDES

    @property
    def max_sides(self) -> int:
        return MAX_SIDES

    def roll(self, sides: int) -> int:
        # bool is an int subclass but never a die size
        if (
            not isinstance(sides, int)
            or isinstance(sides, bool)
            or sides < self.min_sides
            or sides > self.max_sides
        ):
            raise SidesOutOfRangeError(
                sides=sides,
                min_sides=self.min_sides,
                max_sides=self.max_sides,
            )
        return self._rng.randint(1, sides)
