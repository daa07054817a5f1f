"""Tree-sitter Go grammar adapter.

Turns a ``SpanSource`` into a syntax tree whose nodes carry byte offsets, or
raises ``SourceSyntaxError`` for the first error the grammar reports.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import tree_sitter
import tree_sitter_go

from godecl.core.errors import SourceSyntaxError
from godecl.extract.source import PARSE_CHUNK_SIZE, BufferSource, SpanSource

# Longest excerpt of offending source quoted in a syntax error
_EXCERPT_LEN = 24


@dataclass
class ParseResult:
    """Result of parsing one Go file."""

    tree: Any  # tree_sitter.Tree
    root_node: Any  # tree_sitter.Node (source_file)
    source: SpanSource
    total_nodes: int = 0


@dataclass
class GoParser:
    """Tree-sitter parser bound to the Go grammar.

    Usage::

        parser = GoParser()
        with open_source(Path("main.go")) as source:
            result = parser.parse(source)
    """

    _parser: Any = field(default=None, repr=False)
    _language: Any = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._language = tree_sitter.Language(tree_sitter_go.language())
        self._parser = tree_sitter.Parser(self._language)

    def parse(self, source: SpanSource) -> ParseResult:
        """Parse a source, raising on any syntax error.

        In-memory sources are handed to the grammar whole; file-backed sources
        are streamed through a read callback.
        """
        if isinstance(source, BufferSource):
            tree = self._parser.parse(source.data)
        else:

            def read(byte_offset: int, _point: Any) -> bytes:
                return source.read_chunk(byte_offset, PARSE_CHUNK_SIZE)

            tree = self._parser.parse(read)

        root = tree.root_node
        if root.has_error:
            raise _syntax_error(root, source)
        if not any(child.type == "package_clause" for child in root.named_children):
            raise SourceSyntaxError.at(
                source.path, line=1, column=1, offset=0, reason="expected 'package' clause"
            )

        return ParseResult(
            tree=tree,
            root_node=root,
            source=source,
            total_nodes=_count_nodes(root),
        )


def _first_error(root: Any) -> Any:
    """First ERROR or missing node in source order."""
    node = root
    while True:
        if node.type == "ERROR" or node.is_missing:
            return node
        for child in node.children:
            if child.has_error or child.is_missing:
                node = child
                break
        else:
            return node


def _syntax_error(root: Any, source: SpanSource) -> SourceSyntaxError:
    node = _first_error(root)
    row, col = node.start_point
    if node.is_missing:
        reason = f"missing {node.type}"
    else:
        end = min(node.end_byte, node.start_byte + _EXCERPT_LEN)
        excerpt = source.read_bytes(node.start_byte, end).decode("utf-8", errors="replace")
        first_line = next((ln.strip() for ln in excerpt.splitlines() if ln.strip()), "")
        reason = f"unexpected {first_line!r}" if first_line else "unexpected input"
    return SourceSyntaxError.at(
        source.path,
        line=row + 1,
        column=col + 1,
        offset=node.start_byte,
        reason=reason,
    )


def _count_nodes(root: Any) -> int:
    total = 0
    stack = [root]
    while stack:
        node = stack.pop()
        total += 1
        stack.extend(node.children)
    return total
