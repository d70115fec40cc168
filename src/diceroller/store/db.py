"""
SQLite storage for Dice Roller.

This module persists the roll history in a single SQLite database file.

Design Principles:
    - Insert-only: A saved roll is never modified, only bulk-cleared
    - Self-initializing: Tables are created on first open
    - Self-contained: Single .db file holds the whole history

Tables:
    - schema_version: Version marker for the layout below
    - rolls: One row per roll (id, sides, result, timestamp)

Timestamps are stored as ISO-8601 UTC text, which sorts chronologically.
"""

import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Generator

from diceroller.errors import (
    StorageConnectionError,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from diceroller.schema import Roll, utc_now
from diceroller.store.base import RollStore

logger = logging.getLogger(__name__)

# Schema version for migrations
SCHEMA_VERSION = 1

# SQL for creating tables
CREATE_TABLES_SQL = """
-- Schema version tracking
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY,
    applied_at TEXT NOT NULL
);

-- Rolls table: one row per roll
CREATE TABLE IF NOT EXISTS rolls (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    sides INTEGER NOT NULL CHECK (sides BETWEEN 1 AND 100),
    result INTEGER NOT NULL CHECK (result BETWEEN 1 AND sides),
    timestamp TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_rolls_timestamp ON rolls(timestamp);
"""

# Most recent first; ties go to the later insert
SELECT_ROLLS_SQL = """
SELECT id, sides, result, timestamp FROM rolls
ORDER BY timestamp DESC, id DESC
"""


def _row_to_roll(row: sqlite3.Row) -> Roll:
    return Roll(
        id=row["id"],
        sides=row["sides"],
        result=row["result"],
        timestamp=datetime.fromisoformat(row["timestamp"]),
    )


class RollDB(RollStore):
    """
    SQLite database for roll history.

    Usage:
        db = RollDB("dice.db")
        roll_id = db.save(Roll(sides=20, result=17))
        db.get_recent(5)
        db.close()

    Or use as context manager:
        with RollDB("dice.db") as db:
            ...
    """

    def __init__(self, db_path: str | Path) -> None:
        """
        Initialize the database connection.

        Args:
            db_path: Path to the SQLite database file.
                     Will be created if it doesn't exist. ":memory:" gives
                     a throwaway in-memory database.
        """
        self.db_path = Path(db_path) if str(db_path) != ":memory:" else None
        self._path_str = str(db_path)
        self._conn: sqlite3.Connection | None = None
        self._connect()
        try:
            self._init_schema()
        except StorageError:
            self.close()
            raise

    def _connect(self) -> None:
        """Establish database connection."""
        try:
            if self.db_path is not None:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(self._path_str)
            self._conn.row_factory = sqlite3.Row
        except (sqlite3.Error, OSError) as e:
            raise StorageConnectionError(
                db_path=self._path_str,
                operation="connect",
                message=f"Failed to connect to database: {e}",
            ) from e

    def _init_schema(self) -> None:
        """Initialize database schema if needed."""
        try:
            cursor = self._conn.executescript(CREATE_TABLES_SQL)
            cursor.close()

            cursor = self._conn.execute(
                "SELECT version FROM schema_version ORDER BY version DESC LIMIT 1"
            )
            row = cursor.fetchone()
            if row is None:
                self._conn.execute(
                    "INSERT INTO schema_version (version, applied_at) VALUES (?, ?)",
                    (SCHEMA_VERSION, utc_now().isoformat()),
                )
                logger.info("Initialized roll database at %s", self._path_str)
            self._conn.commit()
        except sqlite3.Error as e:
            raise StorageWriteError(
                operation="init_schema",
                underlying_error=str(e),
            ) from e

    @contextmanager
    def transaction(self) -> Generator[None, None, None]:
        """Context manager for database transactions."""
        try:
            yield
            self._conn.commit()
        except Exception:
            self._conn.rollback()
            raise

    def close(self) -> None:
        """Close the database connection."""
        if self._conn:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> "RollDB":
        """Enter context manager."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Exit context manager."""
        self.close()

    # =========================================================================
    # Write Operations
    # =========================================================================

    def save(self, roll: Roll) -> int:
        """
        Insert a roll.

        The roll's own id, if any, is ignored; the database assigns a new one.

        Args:
            roll: The roll to persist

        Returns:
            The assigned id
        """
        # Fixed width so text order matches time order
        timestamp = roll.timestamp.isoformat(timespec="microseconds")

        try:
            with self.transaction():
                cursor = self._conn.execute(
                    "INSERT INTO rolls (sides, result, timestamp) VALUES (?, ?, ?)",
                    (roll.sides, roll.result, timestamp),
                )
            roll_id = cursor.lastrowid
            logger.debug("Saved d%d -> %d as roll %d", roll.sides, roll.result, roll_id)
            return roll_id
        except sqlite3.Error as e:
            raise StorageWriteError(
                operation="save",
                underlying_error=str(e),
            ) from e

    def clear_all(self) -> int:
        """
        Delete every roll.

        Returns:
            Number of rolls removed (0 if already empty)
        """
        try:
            with self.transaction():
                cursor = self._conn.execute("DELETE FROM rolls")
            removed = cursor.rowcount
            logger.info("Cleared %d roll(s)", removed)
            return removed
        except sqlite3.Error as e:
            raise StorageWriteError(
                operation="clear_all",
                underlying_error=str(e),
            ) from e

    # =========================================================================
    # Read Operations
    # =========================================================================

    def get_all(self) -> list[Roll]:
        """
        Get every roll.

        Returns:
            List of Roll objects, most recent first
        """
        try:
            cursor = self._conn.execute(SELECT_ROLLS_SQL)
            return [_row_to_roll(row) for row in cursor]
        except sqlite3.Error as e:
            raise StorageReadError(
                operation="get_all",
                underlying_error=str(e),
            ) from e

    def get_recent(self, count: int) -> list[Roll]:
        """
        Get the most recent rolls.

        Args:
            count: Maximum number of rolls to return

        Returns:
            Up to `count` Roll objects, most recent first. A count of zero
            or less gives an empty list.
        """
        # SQLite treats a negative LIMIT as no limit
        limit = max(count, 0)
        try:
            cursor = self._conn.execute(SELECT_ROLLS_SQL + "LIMIT ?", (limit,))
            return [_row_to_roll(row) for row in cursor]
        except sqlite3.Error as e:
            raise StorageReadError(
                operation="get_recent",
                underlying_error=str(e),
            ) from e

    def count(self) -> int:
        """Get the number of stored rolls."""
        try:
            cursor = self._conn.execute("SELECT COUNT(*) FROM rolls")
            return cursor.fetchone()[0]
        except sqlite3.Error as e:
            raise StorageReadError(
                operation="count",
                underlying_error=str(e),
            ) from e
