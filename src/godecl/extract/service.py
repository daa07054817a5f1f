"""Extraction pipeline: parse, visit, register, assemble.

Usage::

    result = extract_file(Path("server.go"))
    result.document.types["Server"].methods["Serve"].body
    for diag in result.diagnostics:
        print(diag)
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from godecl.config.models import ExtractConfig
from godecl.core.logging import clear_parse_id, get_logger, set_parse_id
from godecl.extract.grammar import GoParser, ParseResult
from godecl.extract.header import extract_header
from godecl.extract.models import Document, ExtractionResult, FuncDecl, TypeDecl, freeze_mapping
from godecl.extract.registry import DiagnosticLog, FuncRegistry, TypeRegistry
from godecl.extract.source import BufferSource, open_source
from godecl.extract.visitor import DeclarationVisitor, DeclKind

log = get_logger("extract")

_parser: GoParser | None = None


def _get_parser() -> GoParser:
    global _parser
    if _parser is None:
        _parser = GoParser()
    return _parser


def extract_file(path: Path, config: ExtractConfig | None = None) -> ExtractionResult:
    """Extract the Document for one Go file.

    The file stays open (or loaded) for the whole parse and is released on
    every exit path.

    Raises:
        SourceUnreadableError: The file cannot be read or is too large.
        SourceSyntaxError: The file is not valid Go.
    """
    config = config or ExtractConfig()
    set_parse_id()
    try:
        log.debug("extract_start", path=str(path))
        with open_source(
            path,
            max_file_size_mb=config.max_file_size_mb,
            in_memory_limit_mb=config.in_memory_limit_mb,
        ) as source:
            parsed = _get_parser().parse(source)
            return build_document(parsed, config)
    finally:
        clear_parse_id()


def extract_source(
    content: bytes,
    *,
    path: str = "<memory>",
    config: ExtractConfig | None = None,
) -> ExtractionResult:
    """Extract the Document for Go source already in memory."""
    config = config or ExtractConfig()
    set_parse_id()
    try:
        log.debug("extract_start", path=path)
        parsed = _get_parser().parse(BufferSource(content, path))
        return build_document(parsed, config)
    finally:
        clear_parse_id()


def build_document(parsed: ParseResult, config: ExtractConfig) -> ExtractionResult:
    """Run the declaration visitor over a parsed file and assemble the Document.

    With ``two_pass`` resolution every type is registered before any function,
    so a method may precede its receiver's declaration. With ``single_pass``
    declarations register in source order and such methods are reported as
    unresolved.
    """
    source = parsed.source
    root = parsed.root_node
    package_name, package_docs = extract_header(root, source)

    diagnostics = DiagnosticLog()
    types = TypeRegistry(config.duplicate_policy, diagnostics)
    funcs = FuncRegistry(types, config.duplicate_policy, diagnostics)
    visitor = DeclarationVisitor(nested=config.nested_declarations)

    decls = list(visitor.visit(root))
    if config.receiver_resolution == "two_pass":
        ordered = [d for d in decls if d.kind is DeclKind.TYPE]
        ordered += [d for d in decls if d.kind is DeclKind.FUNC]
    else:
        ordered = decls

    for decl in ordered:
        if decl.kind is DeclKind.TYPE:
            types.add_spec(decl.node, decl.parent, source)
        else:
            funcs.add_declaration(decl.node, source)

    document = assemble_document(package_name, package_docs, types.freeze(), funcs.freeze())
    log.info(
        "extract_done",
        path=source.path,
        package=package_name,
        types=len(document.types),
        methods=document.method_count,
        funcs=len(document.top_level_funcs),
        diagnostics=len(diagnostics),
        nodes=parsed.total_nodes,
    )
    return ExtractionResult(document=document, diagnostics=diagnostics.freeze())


def assemble_document(
    package_name: str,
    package_docs: str,
    types: Mapping[str, TypeDecl],
    top_level_funcs: Mapping[str, FuncDecl],
) -> Document:
    return Document(
        package_name=package_name,
        package_docs=package_docs,
        types=freeze_mapping(types),
        top_level_funcs=freeze_mapping(top_level_funcs),
    )
