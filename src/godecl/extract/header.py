"""Package clause extraction: package name and package documentation."""

from __future__ import annotations

from typing import Any

from godecl.core.errors import InternalError
from godecl.extract.comments import doc_text
from godecl.extract.source import SpanSource


def package_clause(root: Any) -> Any:
    for child in root.named_children:
        if child.type == "package_clause":
            return child
    raise InternalError.unexpected("parsed tree has no package clause")


def extract_header(root: Any, source: SpanSource) -> tuple[str, str]:
    """Return ``(package_name, package_docs)``.

    The docs are the comment block directly above ``package`` with no blank
    line in between; "" when there is none.
    """
    clause = package_clause(root)
    name = ""
    for child in clause.named_children:
        if child.type == "package_identifier":
            name = source.read_span(child.start_byte, child.end_byte)
            break
    return name, doc_text(clause, source)
