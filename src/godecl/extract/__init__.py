"""Structural metadata extraction for Go source files."""

from godecl.extract.models import (
    Diagnostic,
    DiagnosticKind,
    Document,
    ExtractionResult,
    FuncDecl,
    TypeDecl,
)
from godecl.extract.serializer import document_json, write_document
from godecl.extract.service import extract_file, extract_source

__all__ = [
    "extract_file",
    "extract_source",
    "document_json",
    "write_document",
    "Document",
    "TypeDecl",
    "FuncDecl",
    "Diagnostic",
    "DiagnosticKind",
    "ExtractionResult",
]
