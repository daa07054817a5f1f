"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (GODECL__SECTION__KEY)
3. Project YAML (.godecl.yaml)
4. Global YAML (~/.config/godecl/config.yaml)
5. Built-in defaults (this file)

Examples:
    GODECL__LOGGING__LEVEL=DEBUG
    GODECL__EXTRACT__NESTED_DECLARATIONS=true
    GODECL__OUTPUT__DIRECTORY=build/api
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
ReceiverResolution = Literal["two_pass", "single_pass"]
DuplicatePolicy = Literal["reject", "last_wins"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        GODECL__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. DEBUG logs every skipped declaration.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ExtractConfig(BaseModel):
    """Declaration extraction behaviour.

    Env vars:
        GODECL__EXTRACT__NESTED_DECLARATIONS: Also capture types declared in function bodies
        GODECL__EXTRACT__RECEIVER_RESOLUTION: two_pass or single_pass
        GODECL__EXTRACT__DUPLICATE_POLICY: reject or last_wins
        GODECL__EXTRACT__MAX_FILE_SIZE_MB: Refuse larger sources
        GODECL__EXTRACT__IN_MEMORY_LIMIT_MB: Read larger sources through a file handle
    """

    nested_declarations: bool = Field(
        default=False,
        description="Capture type declarations nested inside function bodies as "
        "top-level entries. Off by default: only direct children of the file count.",
    )
    receiver_resolution: ReceiverResolution = Field(
        default="two_pass",
        description="two_pass registers all types before any method, so declaration "
        "order never matters. single_pass reports methods declared before their type.",
    )
    duplicate_policy: DuplicatePolicy = Field(
        default="reject",
        description="reject keeps the first declaration of a name; last_wins replaces it. "
        "Both record a diagnostic.",
    )
    max_file_size_mb: int = Field(
        default=64,
        description="Sources larger than this are refused.",
    )
    in_memory_limit_mb: int = Field(
        default=16,
        description="Sources up to this size are loaded into memory; larger ones are "
        "read through an open file handle for the whole parse.",
    )

    @field_validator("max_file_size_mb", "in_memory_limit_mb")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"Must be positive, got {v}")
        return v


class OutputConfig(BaseModel):
    """Document output configuration.

    Env vars:
        GODECL__OUTPUT__DIRECTORY: Where <package>.json files are written
        GODECL__OUTPUT__INDENT: JSON indent (unset for compact output)
    """

    directory: str = Field(
        default=".",
        description="Directory for <packageName>.json. Existing files are overwritten.",
    )
    indent: int | None = Field(
        default=None,
        description="JSON indentation. None writes one compact line.",
    )


class GodeclConfig(BaseModel):
    """Root configuration for godecl."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    extract: ExtractConfig = Field(default_factory=ExtractConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
