#!/usr/bin/env python3

"""Scope, definition and file classification for declarations."""

from enum import Enum
from pathlib import PurePosixPath

from ccouple.ast_provider import AstNode, NodeKind, contains_kind
from ccouple.errors import UnsupportedConstructError

# Containers that do not introduce a local scope; the walk continues past them.
TRANSPARENT_SCOPE_KINDS = {
    NodeKind.UNEXPOSED_DECL,
    NodeKind.LINKAGE_SPEC,
    NodeKind.NAMESPACE,
    NodeKind.STRUCT_DECL,
    NodeKind.CLASS_DECL,
    NodeKind.CLASS_TEMPLATE,
    NodeKind.CLASS_TEMPLATE_PARTIAL_SPECIALIZATION,
    NodeKind.ENUM_DECL,
}

FUNCTION_SCOPE_KINDS = {
    NodeKind.FUNCTION_DECL,
    NodeKind.FUNCTION_TEMPLATE,
    NodeKind.CONSTRUCTOR,
    NodeKind.DESTRUCTOR,
    NodeKind.CXX_METHOD,
    NodeKind.CONVERSION_FUNCTION,
}

HEADER_SUFFIXES = {".h", ".hpp"}
SOURCE_SUFFIXES = {".c", ".cpp", ".cxx"}


class FileKind(Enum):
    HEADER = "header"
    SOURCE = "source"


def is_global_scope(node: AstNode) -> bool:
    """Check whether a declaration lives at translation-unit scope.

    Locals and parameters have a function-like semantic parent somewhere up the
    chain; globals reach the translation unit first.
    """
    parent = node.semantic_parent
    while True:
        if parent is None:
            raise UnsupportedConstructError(
                f"declaration {node.spelling!r} has no enclosing translation unit"
            )
        kind = parent.kind
        if kind in TRANSPARENT_SCOPE_KINDS:
            parent = parent.semantic_parent
        elif kind is NodeKind.TRANSLATION_UNIT:
            return True
        elif kind in FUNCTION_SCOPE_KINDS:
            return False
        else:
            raise UnsupportedConstructError(
                f"scope of {node.spelling!r}: support for parent kind {parent.kind_name} "
                "not yet implemented"
            )


def is_definition(node: AstNode) -> bool:
    """Check whether a variable or function declaration is a definition.

    Variables count as definitions when they have any child node. This is a
    heuristic: an initializer is a child, but so is an attribute or a type
    reference, and a tentative definition such as ``int x;`` has none.
    """
    if node.kind is NodeKind.VAR_DECL:
        return len(node.children()) > 0
    if node.kind is NodeKind.FUNCTION_DECL:
        return contains_kind(node, NodeKind.COMPOUND_STMT)
    raise UnsupportedConstructError(
        f"definition check for {node.spelling!r}: support for node kind {node.kind_name} "
        "not yet implemented"
    )


def classify_file(path: str) -> FileKind:
    suffix = PurePosixPath(path).suffix
    if suffix in HEADER_SUFFIXES:
        return FileKind.HEADER
    if suffix in SOURCE_SUFFIXES:
        return FileKind.SOURCE
    if "/include/" in path:
        return FileKind.HEADER
    raise UnsupportedConstructError(
        f"support for extension {suffix!r} of file {path!r} not yet implemented"
    )


def is_definition_or_in_source(node: AstNode) -> bool:
    """Check whether a candidate may replace a non-definition entry in the definition map."""
    if is_definition(node):
        return True
    location = node.location
    if location is None:
        return False
    return classify_file(location.file) is FileKind.SOURCE
