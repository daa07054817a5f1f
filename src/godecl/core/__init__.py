"""Core module exports."""

from godecl.core.errors import (
    ConfigError,
    ErrorCode,
    GodeclError,
    InternalError,
    SourceSyntaxError,
    SourceUnreadableError,
    SpanReadError,
)
from godecl.core.logging import (
    clear_parse_id,
    configure_logging,
    get_logger,
    get_parse_id,
    set_parse_id,
)
from godecl.core.progress import progress, status

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "GodeclError",
    "InternalError",
    "SourceSyntaxError",
    "SourceUnreadableError",
    "SpanReadError",
    # Logging
    "clear_parse_id",
    "configure_logging",
    "get_logger",
    "get_parse_id",
    "set_parse_id",
    # Progress
    "progress",
    "status",
]
