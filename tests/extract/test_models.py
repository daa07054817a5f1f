"""Tests for Document value types."""

from __future__ import annotations

import dataclasses

import pytest

from godecl.extract.models import (
    Diagnostic,
    DiagnosticKind,
    Document,
    ExtractionResult,
    FuncDecl,
    TypeDecl,
    freeze_mapping,
)


def _document() -> Document:
    meth = FuncDecl(doc="m\n", body="func (b *Buz) meth() {}")
    buz = TypeDecl(
        name="Buz",
        docs="Buz.\n",
        body="type Buz struct{}",
        methods=freeze_mapping({"meth": meth}),
    )
    return Document(
        package_name="demo",
        package_docs="",
        types=freeze_mapping({"Buz": buz}),
        top_level_funcs=freeze_mapping({"foo": FuncDecl(doc="", body="func foo() {}")}),
    )


class TestDocument:
    """Shape and immutability."""

    def test_to_dict_uses_wire_names(self) -> None:
        """Serialised keys follow the documented camelCase shape."""
        assert _document().to_dict() == {
            "packageName": "demo",
            "packageDocs": "",
            "types": {
                "Buz": {
                    "name": "Buz",
                    "docs": "Buz.\n",
                    "body": "type Buz struct{}",
                    "methods": {"meth": {"doc": "m\n", "body": "func (b *Buz) meth() {}"}},
                }
            },
            "topLevelFuncs": {"foo": {"doc": "", "body": "func foo() {}"}},
        }

    def test_fields_are_frozen(self) -> None:
        """Fields cannot be reassigned after assembly."""
        doc = _document()
        with pytest.raises(dataclasses.FrozenInstanceError):
            doc.package_name = "other"  # type: ignore[misc]

    def test_mappings_are_read_only(self) -> None:
        """Name-keyed mappings reject mutation."""
        doc = _document()
        with pytest.raises(TypeError):
            doc.types["New"] = doc.types["Buz"]  # type: ignore[index]
        with pytest.raises(TypeError):
            doc.types["Buz"].methods["x"] = FuncDecl("", "")  # type: ignore[index]

    def test_method_count(self) -> None:
        assert _document().method_count == 1

    def test_equality(self) -> None:
        """Independently built documents with the same content are equal."""
        assert _document() == _document()


class TestExtractionResult:
    """Result wrapper."""

    def test_ok_without_diagnostics(self) -> None:
        assert ExtractionResult(document=_document()).ok

    def test_to_dict_includes_diagnostics(self) -> None:
        """Diagnostics serialise alongside the document."""
        diag = Diagnostic(
            kind=DiagnosticKind.UNRESOLVED_RECEIVER,
            name="meth",
            message="no type",
            line=3,
            column=1,
        )
        result = ExtractionResult(document=_document(), diagnostics=(diag,))
        assert not result.ok
        assert result.to_dict()["diagnostics"] == [
            {
                "kind": "unresolved_receiver",
                "name": "meth",
                "message": "no type",
                "line": 3,
                "column": 1,
                "severity": "error",
            }
        ]
        assert str(diag) == "3:1: unresolved_receiver: no type"
