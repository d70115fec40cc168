"""
Schema definitions for Dice Roller.

This module defines the Pydantic models used throughout Dice Roller:
- Roll: One recorded outcome of rolling a die
- Settings: User configuration loaded from YAML

Design Decisions:
    - Models are immutable (frozen=True); a roll is never updated
    - The roll invariant (1 <= result <= sides <= 100) is enforced on
      construction, so an invalid record can't reach the store
    - Timestamps are always timezone-aware UTC
"""

from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from diceroller.errors import ConfigError

# Supported die sizes
MIN_SIDES = 1
MAX_SIDES = 100


def utc_now() -> datetime:
    """Get the current time as an aware UTC datetime."""
    return datetime.now(UTC)


# =============================================================================
# Roll Model
# =============================================================================


class Roll(BaseModel):
    """
    A single dice roll with its result and timestamp.

    Attributes:
        id: Identifier assigned by the store on insert (None until saved)
        sides: Number of sides on the die (1-100)
        result: The outcome of the roll (1 to sides)
        timestamp: When the roll occurred (UTC)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: int | None = Field(
        default=None,
        description="Store-assigned identifier",
    )
    sides: int = Field(
        ...,
        description="Number of sides on the die",
        ge=MIN_SIDES,
        le=MAX_SIDES,
    )
    result: int = Field(
        ...,
        description="Outcome of the roll",
        ge=1,
    )
    timestamp: datetime = Field(
        default_factory=utc_now,
        description="When the roll occurred (UTC)",
    )

    @field_validator("timestamp")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        """Treat naive timestamps as UTC and normalize aware ones to UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v.astimezone(UTC)

    @model_validator(mode="after")
    def check_result_within_sides(self) -> "Roll":
        """A die can't land above its own number of sides."""
        if self.result > self.sides:
            msg = f"Result {self.result} exceeds die size {self.sides}"
            raise ValueError(msg)
        return self

    @property
    def is_max(self) -> bool:
        """Whether the roll landed on the die's highest face."""
        return self.sides > 1 and self.result == self.sides

    @property
    def is_min(self) -> bool:
        """Whether the roll landed on a one."""
        return self.sides > 1 and self.result == 1


# =============================================================================
# Settings Model
# =============================================================================


class Settings(BaseModel):
    """
    User configuration for the command-line interface.

    Example YAML:
        db_path: ~/.dice/history.db
        default_sides: 20
        recent_limit: 15
        seed: 1234

    Attributes:
        db_path: Path to the SQLite history database
        default_sides: Die size used when none is given on the command line
        recent_limit: How many rolls `history` shows by default
        seed: Optional seed for reproducible sequences
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    db_path: str = Field(
        default="dice.db",
        description="Path to the SQLite history database",
        min_length=1,
    )
    default_sides: int = Field(
        default=6,
        description="Die size used when none is given",
        ge=MIN_SIDES,
        le=MAX_SIDES,
    )
    recent_limit: int = Field(
        default=10,
        description="Number of rolls shown by default",
        ge=1,
    )
    seed: int | None = Field(
        default=None,
        description="Seed for reproducible rolls",
    )

    @property
    def resolved_db_path(self) -> Path:
        """The database path with ~ expanded."""
        return Path(self.db_path).expanduser()


# =============================================================================
# YAML Loading Helpers
# =============================================================================


def _settings_from_data(data: Any, source: str) -> Settings:
    if data is None:
        return Settings()
    if not isinstance(data, dict):
        raise ConfigError(
            path=source,
            underlying_error=f"expected a mapping, got {type(data).__name__}",
        )
    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(path=source, underlying_error=str(e)) from e


def load_settings(path: Path | str) -> Settings:
    """
    Load settings from a YAML file.

    Args:
        path: Path to the YAML file

    Returns:
        Validated Settings object (defaults for an empty file)

    Raises:
        ConfigError: If the file is missing, not valid YAML, or
            doesn't match the schema
    """
    path = Path(path)
    try:
        with path.open() as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(path=str(path), underlying_error=str(e)) from e
    except yaml.YAMLError as e:
        raise ConfigError(path=str(path), underlying_error=str(e)) from e

    return _settings_from_data(data, str(path))


def load_settings_from_string(content: str) -> Settings:
    """Load settings from a YAML string."""
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(underlying_error=str(e)) from e
    return _settings_from_data(data, "")
