"""
Unit tests for the DiceGame service.

Tests cover:
- Roll-and-save flow and returned record
- Validation happening before persistence
- Delegation of reads, clears and counts to the store
- Errors passing through untranslated
"""

import random
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

import pytest

from diceroller.errors import SidesOutOfRangeError, StorageWriteError
from diceroller.game import DiceGame
from diceroller.roller import DiceRoller
from diceroller.schema import Roll
from diceroller.store import RollDB, RollStore


@pytest.fixture
def store() -> RollDB:
    """An in-memory store."""
    database = RollDB(":memory:")
    yield database
    database.close()


@pytest.fixture
def game(store: RollDB) -> DiceGame:
    """A seeded game over an in-memory store."""
    return DiceGame(roller=DiceRoller(seed=2024), store=store)


class TestBounds:
    """Tests for the pass-through range."""

    def test_min_max_from_roller(self, game: DiceGame) -> None:
        """Bounds come from the roller."""
        assert game.min_sides == 1
        assert game.max_sides == 100

    def test_bounds_follow_custom_roller(self) -> None:
        """Bounds reflect whatever roller is plugged in."""
        roller = MagicMock()
        roller.min_sides = 2
        roller.max_sides = 12
        game = DiceGame(roller=roller, store=MagicMock(spec=RollStore))
        assert (game.min_sides, game.max_sides) == (2, 12)


class TestRollAndSave:
    """Tests for roll_and_save()."""

    def test_returns_saved_roll(self, game: DiceGame) -> None:
        """The returned roll carries id, sides, result and timestamp."""
        before = datetime.now(UTC)
        roll = game.roll_and_save(20)
        after = datetime.now(UTC)

        assert roll.id is not None
        assert roll.sides == 20
        assert 1 <= roll.result <= 20
        assert before <= roll.timestamp <= after

    def test_persisted(self, game: DiceGame) -> None:
        """The roll is in the history afterwards."""
        roll = game.roll_and_save(6)
        assert game.get_history() == [roll]

    def test_result_comes_from_roller(self, store: RollDB) -> None:
        """The game stores exactly what the roller produced."""
        expected = random.Random(5).randint(1, 12)
        game = DiceGame(roller=DiceRoller(seed=5), store=store)
        assert game.roll_and_save(12).result == expected

    def test_timestamp_is_utc(self, store: RollDB) -> None:
        """Roll timestamps are aware UTC."""
        game = DiceGame(roller=DiceRoller(), store=store)
        roll = game.roll_and_save(6)
        assert roll.timestamp.utcoffset() == timedelta(0)

    @pytest.mark.parametrize("sides", [0, -1, 101, 1000])
    def test_invalid_sides_not_saved(self, game: DiceGame, sides: int) -> None:
        """Validation errors propagate and nothing is written."""
        with pytest.raises(SidesOutOfRangeError) as exc_info:
            game.roll_and_save(sides)

        assert exc_info.value.context["sides"] == sides
        assert game.get_total() == 0

    def test_storage_error_passes_through(self) -> None:
        """Store errors reach the caller unchanged."""
        error = StorageWriteError(operation="save", underlying_error="disk full")
        store = MagicMock(spec=RollStore)
        store.save.side_effect = error
        game = DiceGame(roller=DiceRoller(seed=1), store=store)

        with pytest.raises(StorageWriteError) as exc_info:
            game.roll_and_save(6)
        assert exc_info.value is error

    def test_d1(self, game: DiceGame) -> None:
        """A d1 is saved as a 1."""
        assert game.roll_and_save(1).result == 1


class TestHistory:
    """Tests for history reads."""

    def test_history_most_recent_first(self, game: DiceGame) -> None:
        """get_history() returns newest first."""
        for sides in (6, 20, 8):
            game.roll_and_save(sides)

        assert [r.sides for r in game.get_history()] == [8, 20, 6]

    def test_get_recent(self, game: DiceGame) -> None:
        """get_recent(k) returns the k newest."""
        for sides in (4, 6, 8, 10, 12):
            game.roll_and_save(sides)

        assert [r.sides for r in game.get_recent(2)] == [12, 10]
        assert len(game.get_recent(10)) == 5

    def test_get_recent_negative(self, game: DiceGame) -> None:
        """A negative count returns an empty list."""
        game.roll_and_save(6)
        assert game.get_recent(-1) == []

    def test_total(self, game: DiceGame) -> None:
        """get_total() counts saved rolls."""
        assert game.get_total() == 0
        for _ in range(3):
            game.roll_and_save(6)
        assert game.get_total() == 3

    def test_clear_history(self, game: DiceGame) -> None:
        """clear_history() empties the store and returns nothing."""
        game.roll_and_save(6)
        game.roll_and_save(6)

        assert game.clear_history() is None
        assert game.get_history() == []
        assert game.get_total() == 0


class TestDelegation:
    """Tests that reads go straight to the store."""

    @pytest.fixture
    def mock_store(self) -> MagicMock:
        return MagicMock(spec=RollStore)

    def test_get_history_delegates(self, mock_store: MagicMock) -> None:
        rolls = [Roll(sides=6, result=2)]
        mock_store.get_all.return_value = rolls
        game = DiceGame(roller=DiceRoller(), store=mock_store)

        assert game.get_history() is rolls
        mock_store.get_all.assert_called_once_with()

    def test_get_recent_delegates(self, mock_store: MagicMock) -> None:
        mock_store.get_recent.return_value = []
        game = DiceGame(roller=DiceRoller(), store=mock_store)

        game.get_recent(7)
        mock_store.get_recent.assert_called_once_with(7)

    def test_clear_delegates(self, mock_store: MagicMock) -> None:
        mock_store.clear_all.return_value = 4
        game = DiceGame(roller=DiceRoller(), store=mock_store)

        game.clear_history()
        mock_store.clear_all.assert_called_once_with()

    def test_total_delegates(self, mock_store: MagicMock) -> None:
        mock_store.count.return_value = 9
        game = DiceGame(roller=DiceRoller(), store=mock_store)

        assert game.get_total() == 9

    def test_close_closes_store(self, mock_store: MagicMock) -> None:
        with DiceGame(roller=DiceRoller(), store=mock_store):
            pass
        mock_store.close.assert_called_once_with()
