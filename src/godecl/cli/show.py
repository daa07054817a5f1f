"""godecl show command - print the declarations of one Go file."""

from pathlib import Path

import click
from rich.table import Table

from godecl.cli.utils import display_path, resolve_config
from godecl.core.errors import GodeclError
from godecl.core.progress import get_console, status
from godecl.extract import extract_file


def _first_line(text: str) -> str:
    return text.splitlines()[0] if text else ""


@click.command()
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_context
def show_command(ctx: click.Context, path: Path) -> None:
    """Show the package, types, methods and functions found in PATH."""
    config = resolve_config(ctx)
    try:
        result = extract_file(path, config.extract)
    except GodeclError as e:
        raise click.ClickException(str(e)) from e

    doc = result.document
    console = get_console()
    console.print(f"[bold]package {doc.package_name}[/bold]  ({display_path(path)})")
    if doc.package_docs:
        console.print(doc.package_docs.rstrip("\n"), style="dim", highlight=False)

    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("Kind")
    table.add_column("Name")
    table.add_column("Doc", style="dim")
    for name, type_decl in doc.types.items():
        table.add_row("type", name, _first_line(type_decl.docs))
        for method_name, method in type_decl.methods.items():
            table.add_row("  method", f"{name}.{method_name}", _first_line(method.doc))
    for name, func in doc.top_level_funcs.items():
        table.add_row("func", name, _first_line(func.doc))
    console.print(table)

    for diag in result.diagnostics:
        status(str(diag), style="warning" if diag.severity == "warning" else "error")
