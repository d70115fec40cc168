"""
Exception hierarchy for Dice Roller.

All Dice Roller exceptions inherit from DiceRollerError, allowing callers to
catch every project-specific exception with a single except clause.

Exception Categories:
    - InvalidInputError: Bad input rejected before anything is persisted
    - StorageError: Database operation failed
    - ConfigError: Configuration file could not be loaded

All errors carry an error code for programmatic handling and a context dict
with the values that caused them.
"""

from dataclasses import dataclass, field
from typing import Any


# =============================================================================
# Error Codes
# =============================================================================

# Validation errors: 1xxx
ERROR_SIDES_OUT_OF_RANGE = 1001

# Storage errors: 2xxx
ERROR_STORAGE_CONNECTION = 2001
ERROR_STORAGE_WRITE = 2002
ERROR_STORAGE_READ = 2003

# Config errors: 3xxx
ERROR_CONFIG_INVALID = 3001


# =============================================================================
# Base Exception
# =============================================================================


@dataclass
class DiceRollerError(Exception):
    """
    Base exception for all Dice Roller errors.

    Attributes:
        message: Human-readable error description
        code: Numeric error code for programmatic handling
        suggestion: Optional hint for how to resolve the error
        context: Optional dict with additional debugging info
    """

    message: str = ""
    code: int = 0
    suggestion: str | None = None
    context: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        """Format error for display."""
        parts = [f"[E{self.code}] {self.message}"]
        if self.suggestion:
            parts.append(f"\nSuggestion: {self.suggestion}")
        return "".join(parts)

    def __repr__(self) -> str:
        """Format error for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code}, "
            f"context={self.context!r})"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "code": self.code,
            "suggestion": self.suggestion,
            "context": self.context,
        }


# =============================================================================
# Validation Errors
# =============================================================================


@dataclass
class InvalidInputError(DiceRollerError):
    """
    Base class for input validation errors.

    Raised synchronously, before any roll is generated or persisted.
    """


@dataclass
class SidesOutOfRangeError(InvalidInputError):
    """
    Raised when a die size falls outside the supported range.

    Attributes:
        sides: The die size that was requested
        min_sides: Smallest supported die
        max_sides: Largest supported die
    """

    sides: Any = None
    min_sides: int = 1
    max_sides: int = 100

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if not self.message:
            self.message = (
                f"Sides must be between {self.min_sides} and {self.max_sides}, "
                f"got {self.sides}"
            )
        if self.code == 0:
            self.code = ERROR_SIDES_OUT_OF_RANGE
        if not self.suggestion:
            self.suggestion = (
                f"Pick a die with {self.min_sides} to {self.max_sides} sides"
            )
        self.context.update({
            "sides": self.sides,
            "min_sides": self.min_sides,
            "max_sides": self.max_sides,
        })


# =============================================================================
# Storage Errors
# =============================================================================


@dataclass
class StorageError(DiceRollerError):
    """
    Base class for storage/database errors.

    Attributes:
        operation: The operation that failed (e.g., "save", "get_all")
    """

    operation: str = ""

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        self.context["operation"] = self.operation


@dataclass
class StorageConnectionError(StorageError):
    """Raised when the database file cannot be opened."""

    db_path: str = ""

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if not self.message:
            self.message = f"Failed to connect to database: {self.db_path}"
        if self.code == 0:
            self.code = ERROR_STORAGE_CONNECTION
        if not self.suggestion:
            self.suggestion = "Check that the database path is valid and writable"
        super().__post_init__()
        self.context["db_path"] = self.db_path


@dataclass
class StorageWriteError(StorageError):
    """Raised when a write operation fails."""

    underlying_error: str = ""

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if not self.message:
            self.message = f"Database write failed: {self.underlying_error}"
        if self.code == 0:
            self.code = ERROR_STORAGE_WRITE
        super().__post_init__()
        self.context["underlying_error"] = self.underlying_error


@dataclass
class StorageReadError(StorageError):
    """Raised when a read operation fails."""

    underlying_error: str = ""

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if not self.message:
            self.message = f"Database read failed: {self.underlying_error}"
        if self.code == 0:
            self.code = ERROR_STORAGE_READ
        super().__post_init__()
        self.context["underlying_error"] = self.underlying_error


# =============================================================================
# Config Errors
# =============================================================================


@dataclass
class ConfigError(DiceRollerError):
    """Raised when a settings file is missing, unparsable, or invalid."""

    path: str = ""
    underlying_error: str = ""

    def __post_init__(self) -> None:
        """Set defaults after dataclass init."""
        if not self.message:
            source = self.path or "<string>"
            self.message = f"Invalid configuration in {source}: {self.underlying_error}"
        if self.code == 0:
            self.code = ERROR_CONFIG_INVALID
        self.context.update({
            "path": self.path,
            "underlying_error": self.underlying_error,
        })
