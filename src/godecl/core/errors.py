"""godecl error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Source / Extraction
- 9xxx: Internal
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

    # Source (30xx-31xx)
    SOURCE_UNREADABLE = 3001
    SOURCE_TOO_LARGE = 3002
    SOURCE_SYNTAX_ERROR = 3101

    # Extraction (32xx)
    SPAN_READ_ERROR = 3201

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class GodeclError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'SOURCE_SYNTAX_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(GodeclError):
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


class SourceUnreadableError(GodeclError):
    """The source file cannot be opened or read. Always fatal."""

    @classmethod
    def unreadable(cls, path: str, reason: str) -> "SourceUnreadableError":
        return cls(
            code=ErrorCode.SOURCE_UNREADABLE,
            message=f"Cannot read source {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def too_large(cls, path: str, size: int, limit: int) -> "SourceUnreadableError":
        return cls(
            code=ErrorCode.SOURCE_TOO_LARGE,
            message=f"Source {path} is {size} bytes, limit is {limit}",
            details={"path": path, "size": size, "limit": limit},
        )


class SourceSyntaxError(GodeclError):
    """The grammar parser rejected the input. Always fatal."""

    @property
    def line(self) -> int:
        return int(self.details.get("line", 0))

    @property
    def column(self) -> int:
        return int(self.details.get("column", 0))

    @classmethod
    def at(
        cls, path: str, *, line: int, column: int, offset: int, reason: str
    ) -> "SourceSyntaxError":
        return cls(
            code=ErrorCode.SOURCE_SYNTAX_ERROR,
            message=f"{path}:{line}:{column}: {reason}",
            details={
                "path": path,
                "line": line,
                "column": column,
                "offset": offset,
                "reason": reason,
            },
        )


class SpanReadError(GodeclError):
    """A byte range could not be read back from the source."""

    @classmethod
    def out_of_range(cls, start: int, end: int, size: int) -> "SpanReadError":
        return cls(
            code=ErrorCode.SPAN_READ_ERROR,
            message=f"Span [{start}, {end}) is outside source of {size} bytes",
            details={"start": start, "end": end, "size": size},
        )

    @classmethod
    def short_read(cls, start: int, end: int, got: int) -> "SpanReadError":
        return cls(
            code=ErrorCode.SPAN_READ_ERROR,
            message=f"Short read for span [{start}, {end}): got {got} of {end - start} bytes",
            details={"start": start, "end": end, "got": got},
        )

    @classmethod
    def undecodable(cls, start: int, end: int, reason: str) -> "SpanReadError":
        return cls(
            code=ErrorCode.SPAN_READ_ERROR,
            message=f"Span [{start}, {end}) is not valid UTF-8: {reason}",
            details={"start": start, "end": end, "reason": reason},
        )


class InternalError(GodeclError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
