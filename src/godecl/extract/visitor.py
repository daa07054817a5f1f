"""Declaration visitor.

Walks the syntax tree once, in source order, and classifies each node as a
type spec, a function/method declaration, or something to ignore. By default
only direct children of the file are considered; with ``nested=True`` every
node is visited, so type declarations inside function bodies are found too.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any

_TYPE_SPECS = frozenset({"type_spec", "type_alias"})
_FUNC_DECLS = frozenset({"function_declaration", "method_declaration"})


class DeclKind(str, Enum):
    TYPE = "type"
    FUNC = "func"


@dataclass(frozen=True, slots=True)
class DeclNode:
    """One classified declaration.

    For types ``node`` is the spec and ``parent`` the enclosing
    ``type_declaration``; for functions both are the declaration itself.
    """

    kind: DeclKind
    node: Any
    parent: Any
    top_level: bool


class DeclarationVisitor:
    def __init__(self, *, nested: bool = False) -> None:
        self.nested = nested

    def visit(self, root: Any) -> Iterator[DeclNode]:
        """Yield declarations in source order."""
        if not self.nested:
            for child in root.named_children:
                yield from self._classify(child, top_level=True)
            return

        # Depth-first, children pushed in reverse to keep source order
        stack: list[tuple[Any, bool]] = [(c, True) for c in reversed(root.named_children)]
        while stack:
            node, top_level = stack.pop()
            yield from self._classify(node, top_level=top_level)
            stack.extend((c, False) for c in reversed(node.named_children))

    @staticmethod
    def _classify(node: Any, *, top_level: bool) -> Iterator[DeclNode]:
        if node.type == "type_declaration":
            for spec in node.named_children:
                if spec.type in _TYPE_SPECS:
                    yield DeclNode(DeclKind.TYPE, spec, node, top_level)
        elif node.type in _FUNC_DECLS:
            yield DeclNode(DeclKind.FUNC, node, node, top_level)
