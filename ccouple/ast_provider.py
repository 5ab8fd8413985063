#!/usr/bin/env python3

"""
AST access for the analysis stages.

The classifiers work against the small ``AstNode`` protocol below. ``ClangNode``
implements it on top of libclang cursors; ``ccouple.fake_ast`` provides an
in-memory implementation for tests.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

import clang.cindex as clang

from ccouple.errors import ParseError
from ccouple.models import SourceLocation
from ccouple.reporting import Reporter, default_reporter


class NodeKind(Enum):
    """Node kinds the classifiers distinguish. Everything else is OTHER."""

    TRANSLATION_UNIT = "translation_unit"
    UNEXPOSED_DECL = "unexposed_decl"
    LINKAGE_SPEC = "linkage_spec"
    NAMESPACE = "namespace"
    STRUCT_DECL = "struct_decl"
    CLASS_DECL = "class_decl"
    CLASS_TEMPLATE = "class_template"
    CLASS_TEMPLATE_PARTIAL_SPECIALIZATION = "class_template_partial_specialization"
    ENUM_DECL = "enum_decl"
    FUNCTION_DECL = "function_decl"
    FUNCTION_TEMPLATE = "function_template"
    CONSTRUCTOR = "constructor"
    DESTRUCTOR = "destructor"
    CXX_METHOD = "cxx_method"
    CONVERSION_FUNCTION = "conversion_function"
    VAR_DECL = "var_decl"
    DECL_REF_EXPR = "decl_ref_expr"
    COMPOUND_STMT = "compound_stmt"
    OTHER = "other"


class AstNode(Protocol):
    @property
    def kind(self) -> NodeKind: ...

    @property
    def kind_name(self) -> str: ...

    @property
    def spelling(self) -> str: ...

    @property
    def location(self) -> SourceLocation | None: ...

    @property
    def semantic_parent(self) -> "AstNode | None": ...

    def children(self) -> list["AstNode"]: ...

    def definition(self) -> "AstNode | None": ...


def walk(node: AstNode) -> Iterator[AstNode]:
    """Yield node and all of its descendants in pre-order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children()))


def contains_kind(node: AstNode, kind: NodeKind) -> bool:
    return any(n.kind is kind for n in walk(node))


_CLANG_KINDS = {
    clang.CursorKind.TRANSLATION_UNIT: NodeKind.TRANSLATION_UNIT,  # type: ignore
    clang.CursorKind.UNEXPOSED_DECL: NodeKind.UNEXPOSED_DECL,  # type: ignore
    clang.CursorKind.LINKAGE_SPEC: NodeKind.LINKAGE_SPEC,  # type: ignore
    clang.CursorKind.NAMESPACE: NodeKind.NAMESPACE,  # type: ignore
    clang.CursorKind.STRUCT_DECL: NodeKind.STRUCT_DECL,  # type: ignore
    clang.CursorKind.CLASS_DECL: NodeKind.CLASS_DECL,  # type: ignore
    clang.CursorKind.CLASS_TEMPLATE: NodeKind.CLASS_TEMPLATE,  # type: ignore
    clang.CursorKind.CLASS_TEMPLATE_PARTIAL_SPECIALIZATION: NodeKind.CLASS_TEMPLATE_PARTIAL_SPECIALIZATION,  # type: ignore
    clang.CursorKind.ENUM_DECL: NodeKind.ENUM_DECL,  # type: ignore
    clang.CursorKind.FUNCTION_DECL: NodeKind.FUNCTION_DECL,  # type: ignore
    clang.CursorKind.FUNCTION_TEMPLATE: NodeKind.FUNCTION_TEMPLATE,  # type: ignore
    clang.CursorKind.CONSTRUCTOR: NodeKind.CONSTRUCTOR,  # type: ignore
    clang.CursorKind.DESTRUCTOR: NodeKind.DESTRUCTOR,  # type: ignore
    clang.CursorKind.CXX_METHOD: NodeKind.CXX_METHOD,  # type: ignore
    clang.CursorKind.CONVERSION_FUNCTION: NodeKind.CONVERSION_FUNCTION,  # type: ignore
    clang.CursorKind.VAR_DECL: NodeKind.VAR_DECL,  # type: ignore
    clang.CursorKind.DECL_REF_EXPR: NodeKind.DECL_REF_EXPR,  # type: ignore
    clang.CursorKind.COMPOUND_STMT: NodeKind.COMPOUND_STMT,  # type: ignore
}


class ClangNode:
    """AstNode backed by a libclang cursor."""

    def __init__(self, cursor: clang.Cursor):
        self.cursor = cursor

    @property
    def kind(self) -> NodeKind:
        return _CLANG_KINDS.get(self.cursor.kind, NodeKind.OTHER)

    @property
    def kind_name(self) -> str:
        return self.cursor.kind.name

    @property
    def spelling(self) -> str:
        return self.cursor.spelling

    @property
    def location(self) -> SourceLocation | None:
        loc = self.cursor.location
        if loc.file is None:
            return None
        return SourceLocation(file=loc.file.name, line=loc.line, column=loc.column)

    @property
    def semantic_parent(self) -> "ClangNode | None":
        parent = self.cursor.semantic_parent
        return ClangNode(parent) if parent is not None else None

    def children(self) -> list["ClangNode"]:
        return [ClangNode(child) for child in self.cursor.get_children()]

    def definition(self) -> "ClangNode | None":
        cursor = self.cursor.get_definition()
        return ClangNode(cursor) if cursor is not None else None

    def __repr__(self):
        return f"ClangNode({self.kind_name} {self.spelling!r} at {self.location})"


@dataclass
class ParseResult:
    root: ClangNode
    errors: list[str] = field(default_factory=list)


def configure_libclang(library_file: str | None, reporter: Reporter | None = None) -> None:
    """Point clang.cindex at a specific libclang shared library.

    Once a library is loaded it cannot be swapped, so a different request is
    reported and ignored.
    """
    if not library_file:
        return
    if not clang.Config.loaded:
        clang.Config.set_library_file(library_file)
    elif clang.Config.library_file != library_file:
        default_reporter(reporter).warning(
            f"libclang is already loaded; ignoring requested library {library_file!r}"
        )


def parse_file(path: str, args: list[str], index: clang.Index | None = None) -> ParseResult:
    """Parse a source file into an AST.

    Diagnostics of error severity are returned alongside the (possibly partial)
    tree. ParseError is raised only when no translation unit could be built.
    """
    index = index or clang.Index.create()
    try:
        tu = index.parse(path, args=args)
    except clang.TranslationUnitLoadError as e:
        raise ParseError(path, str(e)) from e

    errors = [
        f"{diag.location.file}:{diag.location.line}:{diag.location.column}: {diag.spelling}"
        for diag in tu.diagnostics
        if diag.severity >= clang.Diagnostic.Error
    ]
    return ParseResult(root=ClangNode(tu.cursor), errors=errors)
