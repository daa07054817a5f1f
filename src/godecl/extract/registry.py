"""Type and function/method registries.

Both registries are keyed by declared name and apply the configured
duplicate policy. Methods are stored on the entry of their receiver type, so
a method can only be registered once that type exists.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from godecl.config.models import DuplicatePolicy
from godecl.core.errors import SpanReadError
from godecl.core.logging import get_logger
from godecl.extract.comments import doc_text
from godecl.extract.models import (
    Diagnostic,
    DiagnosticKind,
    FuncDecl,
    Severity,
    TypeDecl,
    freeze_mapping,
)
from godecl.extract.source import SpanSource

log = get_logger("registry")


class DiagnosticLog:
    """Non-fatal diagnostics in the order they were found."""

    def __init__(self) -> None:
        self._items: list[Diagnostic] = []

    def add(
        self,
        kind: DiagnosticKind,
        node: Any,
        name: str,
        message: str,
        *,
        severity: Severity = "error",
    ) -> Diagnostic:
        row, col = node.start_point
        diag = Diagnostic(
            kind=kind,
            name=name,
            message=message,
            line=row + 1,
            column=col + 1,
            severity=severity,
        )
        self._items.append(diag)
        log.info(kind.value, name=name, line=diag.line, detail=message)
        return diag

    def span_error(self, node: Any, name: str, err: SpanReadError) -> Diagnostic:
        return self.add(DiagnosticKind.SPAN_READ_ERROR, node, name, err.message)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def freeze(self) -> tuple[Diagnostic, ...]:
        return tuple(self._items)


@dataclass
class _TypeEntry:
    name: str
    docs: str
    body: str
    methods: dict[str, FuncDecl] = field(default_factory=dict)

    def freeze(self) -> TypeDecl:
        return TypeDecl(
            name=self.name,
            docs=self.docs,
            body=self.body,
            methods=freeze_mapping(self.methods),
        )


def _text(node: Any, source: SpanSource) -> str:
    return source.read_span(node.start_byte, node.end_byte)


def receiver_base_name(type_text: str) -> str:
    """Bare type name of a receiver: ``*Buz`` -> ``Buz``, ``*List[T]`` -> ``List``."""
    text = type_text.strip()
    while text.startswith("(") and text.endswith(")"):
        text = text[1:-1].strip()
    if text.startswith("*"):
        text = text[1:].strip()
    while text.startswith("(") and text.endswith(")"):
        text = text[1:-1].strip()
    bracket = text.find("[")
    if bracket != -1:
        text = text[:bracket]
    return text.strip()


class TypeRegistry:
    """Type declarations keyed by name."""

    def __init__(self, policy: DuplicatePolicy, diagnostics: DiagnosticLog) -> None:
        self._policy = policy
        self._diagnostics = diagnostics
        self._entries: dict[str, _TypeEntry] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, name: str) -> _TypeEntry | None:
        return self._entries.get(name)

    def add_spec(self, spec: Any, decl: Any, source: SpanSource) -> str | None:
        """Register one ``type_spec`` / ``type_alias`` of a ``type_declaration``.

        ``body`` is ``"type "`` plus the verbatim text from the type's name to
        the end of its definition. ``docs`` is the spec's own doc comment, or
        the declaration's when the spec has none.

        Returns the registered name, or None when the spec was omitted.
        """
        name_node = spec.child_by_field_name("name")
        if name_node is None:
            return None
        type_node = spec.child_by_field_name("type")
        end = type_node.end_byte if type_node is not None else spec.end_byte

        name = ""
        try:
            name = _text(name_node, source)
            body = "type " + source.read_span(spec.start_byte, end)
            docs = doc_text(spec, source) or doc_text(decl, source)
        except SpanReadError as e:
            self._diagnostics.span_error(spec, name, e)
            return None

        existing = self._entries.get(name)
        if existing is not None:
            if self._policy == "reject":
                self._diagnostics.add(
                    DiagnosticKind.DUPLICATE_DECLARATION,
                    spec,
                    name,
                    f"type {name} already declared; later declaration omitted",
                )
                return None
            self._diagnostics.add(
                DiagnosticKind.DUPLICATE_DECLARATION,
                spec,
                name,
                f"type {name} redeclared; later declaration replaces it",
                severity="warning",
            )
            # Methods already bound to the name stay bound to it
            existing.docs = docs
            existing.body = body
            return name

        self._entries[name] = _TypeEntry(name=name, docs=docs, body=body)
        return name

    def freeze(self) -> dict[str, TypeDecl]:
        return {name: entry.freeze() for name, entry in self._entries.items()}


class FuncRegistry:
    """Top-level functions, plus methods routed to their receiver's type entry."""

    def __init__(
        self,
        types: TypeRegistry,
        policy: DuplicatePolicy,
        diagnostics: DiagnosticLog,
    ) -> None:
        self._types = types
        self._policy = policy
        self._diagnostics = diagnostics
        self._funcs: dict[str, FuncDecl] = {}

    def __len__(self) -> int:
        return len(self._funcs)

    def _insert(
        self,
        target: dict[str, FuncDecl],
        name: str,
        func: FuncDecl,
        node: Any,
        label: str,
    ) -> bool:
        if name in target:
            if self._policy == "reject":
                self._diagnostics.add(
                    DiagnosticKind.DUPLICATE_DECLARATION,
                    node,
                    name,
                    f"{label} already declared; later declaration omitted",
                )
                return False
            self._diagnostics.add(
                DiagnosticKind.DUPLICATE_DECLARATION,
                node,
                name,
                f"{label} redeclared; later declaration replaces it",
                severity="warning",
            )
        target[name] = func
        return True

    def add_declaration(self, node: Any, source: SpanSource) -> bool:
        """Register a ``function_declaration`` or ``method_declaration``.

        ``body`` spans from the ``func`` keyword through the closing brace.
        Methods go to ``types[R].methods`` where R is the receiver's type name
        with one leading ``*`` removed.

        Returns True when the declaration was registered.
        """
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return False
        body_node = node.child_by_field_name("body")
        end = body_node.end_byte if body_node is not None else node.end_byte

        name = ""
        receiver_text: str | None = None
        try:
            name = _text(name_node, source)
            func = FuncDecl(doc=doc_text(node, source), body=source.read_span(node.start_byte, end))
            if node.type == "method_declaration":
                receiver_text = self._receiver_type_text(node, source)
        except SpanReadError as e:
            self._diagnostics.span_error(node, name, e)
            return False

        if node.type != "method_declaration":
            return self._insert(self._funcs, name, func, node, f"func {name}")

        receiver = receiver_base_name(receiver_text or "")
        entry = self._types.get(receiver)
        if entry is None:
            self._diagnostics.add(
                DiagnosticKind.UNRESOLVED_RECEIVER,
                node,
                name,
                f"method {name} has receiver {receiver or '?'} with no type declaration "
                "in this file",
            )
            return False
        return self._insert(entry.methods, name, func, node, f"method {receiver}.{name}")

    @staticmethod
    def _receiver_type_text(node: Any, source: SpanSource) -> str:
        receiver = node.child_by_field_name("receiver")
        if receiver is None:
            return ""
        text = ""
        for param in receiver.named_children:
            type_node = param.child_by_field_name("type")
            if type_node is not None:
                text = _text(type_node, source)
        return text

    def freeze(self) -> dict[str, FuncDecl]:
        return dict(self._funcs)
