"""Config module exports."""

from godecl.config.loader import load_config
from godecl.config.models import (
    ExtractConfig,
    GodeclConfig,
    LoggingConfig,
    LogOutputConfig,
    OutputConfig,
)

__all__ = [
    "load_config",
    "ExtractConfig",
    "GodeclConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "OutputConfig",
]
