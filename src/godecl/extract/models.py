"""Extraction result types.

A Document is assembled once per parsed file and never mutated afterwards:
every model here is a frozen dataclass, and the name-keyed mappings are
read-only views. ``to_dict`` produces the camelCase JSON shape consumed by
documentation generators and indexers.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Literal, TypeVar

Severity = Literal["error", "warning"]


def _frozen(mapping: Mapping[str, Any] | None = None) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True, slots=True)
class FuncDecl:
    """A top-level function or a method."""

    doc: str
    body: str

    def to_dict(self) -> dict[str, Any]:
        return {"doc": self.doc, "body": self.body}


@dataclass(frozen=True, slots=True)
class TypeDecl:
    """A type declaration and the methods whose receiver resolved to it."""

    name: str
    docs: str
    body: str  # "type " + verbatim spec text
    methods: Mapping[str, FuncDecl] = field(default_factory=_frozen)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "docs": self.docs,
            "body": self.body,
            "methods": {name: m.to_dict() for name, m in self.methods.items()},
        }


@dataclass(frozen=True, slots=True)
class Document:
    """Structural metadata for one Go source file."""

    package_name: str
    package_docs: str
    types: Mapping[str, TypeDecl] = field(default_factory=_frozen)
    top_level_funcs: Mapping[str, FuncDecl] = field(default_factory=_frozen)

    def to_dict(self) -> dict[str, Any]:
        return {
            "packageName": self.package_name,
            "packageDocs": self.package_docs,
            "types": {name: t.to_dict() for name, t in self.types.items()},
            "topLevelFuncs": {name: f.to_dict() for name, f in self.top_level_funcs.items()},
        }

    @property
    def method_count(self) -> int:
        return sum(len(t.methods) for t in self.types.values())


class DiagnosticKind(str, Enum):
    """Non-fatal conditions that omit or replace a single declaration."""

    SPAN_READ_ERROR = "span_read_error"
    UNRESOLVED_RECEIVER = "unresolved_receiver"
    DUPLICATE_DECLARATION = "duplicate_declaration"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """One declaration that was omitted, or replaced another."""

    kind: DiagnosticKind
    name: str
    message: str
    line: int  # 1-based
    column: int  # 1-based byte column
    severity: Severity = "error"

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "name": self.name,
            "message": self.message,
            "line": self.line,
            "column": self.column,
            "severity": self.severity,
        }

    def __str__(self) -> str:
        return f"{self.line}:{self.column}: {self.kind.value}: {self.message}"


@dataclass(frozen=True, slots=True)
class ExtractionResult:
    """A complete Document plus the diagnostics collected while building it."""

    document: Document
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def ok(self) -> bool:
        """True when nothing was omitted or replaced."""
        return not self.diagnostics

    def to_dict(self) -> dict[str, Any]:
        return {
            "document": self.document.to_dict(),
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }


V = TypeVar("V")


def freeze_mapping(mapping: Mapping[str, V]) -> Mapping[str, V]:
    """Read-only snapshot of a registry mapping."""
    return MappingProxyType(dict(mapping))
