"""godecl extract command - write one JSON document per Go file."""

from pathlib import Path
from typing import Any

import click

from godecl.cli.utils import display_path, resolve_config
from godecl.core.errors import GodeclError
from godecl.core.formatting import compress_path, format_counts
from godecl.core.progress import progress, status
from godecl.extract import document_json, extract_file, write_document


@click.command()
@click.argument(
    "paths",
    nargs=-1,
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "-o",
    "--out-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for <package>.json files (default from config, else '.')",
)
@click.option("--stdout", "to_stdout", is_flag=True, help="Print JSON instead of writing files")
@click.option("--nested", is_flag=True, help="Also capture types declared inside function bodies")
@click.option(
    "--single-pass",
    is_flag=True,
    help="Resolve receivers in source order; methods before their type are reported",
)
@click.option(
    "--allow-duplicates",
    is_flag=True,
    help="Let a later declaration of a name replace the earlier one",
)
@click.option("--strict", is_flag=True, help="Exit non-zero when any declaration was omitted")
@click.pass_context
def extract_command(
    ctx: click.Context,
    paths: tuple[Path, ...],
    out_dir: Path | None,
    to_stdout: bool,
    nested: bool,
    single_pass: bool,
    allow_duplicates: bool,
    strict: bool,
) -> None:
    """Extract package docs, types, methods and functions from Go files.

    Each PATH is parsed on its own and written to <package>.json, overwriting
    any existing file of that name.
    """
    extract_overrides: dict[str, Any] = {}
    if nested:
        extract_overrides["nested_declarations"] = True
    if single_pass:
        extract_overrides["receiver_resolution"] = "single_pass"
    if allow_duplicates:
        extract_overrides["duplicate_policy"] = "last_wins"
    output_overrides: dict[str, Any] = {}
    if out_dir is not None:
        output_overrides["directory"] = str(out_dir)

    config = resolve_config(ctx, extract=extract_overrides, output=output_overrides)
    directory = Path(config.output.directory)

    failed = 0
    flagged = 0
    for path in progress(list(paths), desc="Extracting"):
        shown = compress_path(display_path(path), 40)
        try:
            result = extract_file(path, config.extract)
        except GodeclError as e:
            failed += 1
            status(f"{shown}: {e.message}", style="error")
            continue

        doc = result.document
        if to_stdout:
            click.echo(document_json(doc, indent=config.output.indent), nl=False)
        else:
            try:
                written = write_document(doc, directory, indent=config.output.indent)
            except GodeclError as e:
                failed += 1
                status(f"{shown}: {e.message}", style="error")
                continue
            counts = format_counts(
                {
                    "type": len(doc.types),
                    "method": doc.method_count,
                    "func": len(doc.top_level_funcs),
                }
            )
            status(f"{shown} -> {display_path(written)} ({counts})", style="success")

        for diag in result.diagnostics:
            style = "warning" if diag.severity == "warning" else "error"
            status(f"{shown}:{diag}", style=style, indent=2)
        if not result.ok:
            flagged += 1

    if failed:
        raise click.ClickException(f"{failed} of {len(paths)} file(s) could not be extracted")
    if strict and flagged:
        raise click.ClickException(f"{flagged} file(s) produced diagnostics")
