"""
Pytest configuration and fixtures for Dice Roller tests.

This module provides shared fixtures used across unit and integration tests.
"""

import tempfile
from datetime import UTC, datetime
from pathlib import Path
from typing import Generator

import pytest

from diceroller.store import RollDB


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_db_path(temp_dir: Path) -> Path:
    """Path for a database file that doesn't exist yet."""
    return temp_dir / "dice.db"


@pytest.fixture
def db(temp_db_path: Path) -> Generator[RollDB, None, None]:
    """Create a database instance."""
    database = RollDB(temp_db_path)
    yield database
    database.close()


@pytest.fixture
def base_time() -> datetime:
    """A fixed point in time for building ordered rolls."""
    return datetime(2024, 5, 1, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def sample_settings_yaml() -> str:
    """Return a settings YAML for testing."""
    return """
db_path: history.db
default_sides: 20
recent_limit: 3
seed: 42
"""
