"""covpaint error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Snapshot / source input

The printer itself never raises: a line without coverage data is an expected
condition. These errors belong to the layers around it (settings, snapshot
loading, reading source files).
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Snapshot / source (3xxx)
    SNAPSHOT_PARSE_ERROR = 3001
    SNAPSHOT_INVALID = 3002
    SOURCE_READ_ERROR = 3101


@dataclass(frozen=True, slots=True)
class CovPaintError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CONFIG_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(CovPaintError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class SnapshotError(CovPaintError):
    """Malformed coverage snapshot handed over by the upstream producer."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "SnapshotError":
        return cls(
            code=ErrorCode.SNAPSHOT_PARSE_ERROR,
            message=f"Failed to parse coverage snapshot at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid(cls, reason: str, **details: Any) -> "SnapshotError":
        return cls(
            code=ErrorCode.SNAPSHOT_INVALID,
            message=f"Invalid coverage snapshot: {reason}",
            details=details,
        )


class SourceError(CovPaintError):
    """Errors reading the source file to render."""

    @classmethod
    def read_error(cls, path: str, reason: str) -> "SourceError":
        return cls(
            code=ErrorCode.SOURCE_READ_ERROR,
            message=f"Failed to read source file {path}: {reason}",
            details={"path": path, "reason": reason},
        )

