"""
Storage module for Dice Roller.

This module provides SQLite-based persistence for the roll history.

Tables:
    - rolls: One row per roll (id, sides, result, timestamp)
    - schema_version: Layout version marker

Why SQLite?
    - Zero configuration (no server needed)
    - ACID transactions built-in
    - Portable single-file format
"""

from diceroller.store.base import RollStore
from diceroller.store.db import SCHEMA_VERSION, RollDB

__all__ = [
    "RollDB",
    "RollStore",
    "SCHEMA_VERSION",
]
