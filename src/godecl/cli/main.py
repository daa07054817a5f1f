"""godecl CLI."""

from pathlib import Path

import click

from godecl.cli.extract import extract_command
from godecl.cli.show import show_command
from godecl.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="godecl")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: .godecl.yaml in the working directory)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_file: Path | None) -> None:
    """godecl - extract types, functions and methods from Go source files."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_file"] = config_file
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(extract_command, name="extract")
cli.add_command(show_command, name="show")


if __name__ == "__main__":
    cli()
