"""CLI utilities."""

from pathlib import Path
from typing import Any

import click

from godecl.config import GodeclConfig, load_config
from godecl.core.errors import ConfigError
from godecl.core.logging import configure_logging


def resolve_config(ctx: click.Context, **overrides: dict[str, Any]) -> GodeclConfig:
    """Load config for a command, applying per-section overrides from flags.

    Reconfigures logging from the loaded config unless --verbose was given.

    Raises:
        click.ClickException: The configuration is invalid.
    """
    obj = ctx.find_root().obj or {}
    sections = {name: values for name, values in overrides.items() if values}
    try:
        config = load_config(config_file=obj.get("config_file"), **sections)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    if not obj.get("verbose"):
        configure_logging(config=config.logging)
    return config


def display_path(path: Path) -> str:
    """Path relative to the working directory when possible."""
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)
