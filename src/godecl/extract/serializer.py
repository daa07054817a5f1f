"""JSON output for extracted Documents."""

from __future__ import annotations

import json
from pathlib import Path

from godecl.core.errors import InternalError
from godecl.core.logging import get_logger
from godecl.extract.models import Document

log = get_logger("serializer")


def document_json(document: Document, *, indent: int | None = None) -> str:
    """One JSON object, newline-terminated."""
    return json.dumps(document.to_dict(), indent=indent, ensure_ascii=False) + "\n"


def output_path(document: Document, directory: Path) -> Path:
    return directory / f"{document.package_name}.json"


def write_document(document: Document, directory: Path, *, indent: int | None = None) -> Path:
    """Write ``<packageName>.json`` into ``directory``, replacing any existing file.

    Raises:
        InternalError: The document has no package name, or the file cannot be written.
    """
    if not document.package_name:
        raise InternalError.unexpected("document has no package name")

    path = output_path(document, directory)
    try:
        directory.mkdir(parents=True, exist_ok=True)
        path.write_text(document_json(document, indent=indent), encoding="utf-8")
    except OSError as e:
        raise InternalError.unexpected(f"cannot write {path}: {e}", path=str(path)) from e
    log.debug("document_written", path=str(path), package=document.package_name)
    return path
