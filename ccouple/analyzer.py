#!/usr/bin/env python3

"""Per translation unit analysis: function-use records with resolved definitions."""

import os

from ccouple.ast_provider import AstNode, NodeKind, walk
from ccouple.config import BUILTIN_PREFIXES
from ccouple.definitions import DefinitionMap, build_definition_map
from ccouple.models import FunctionUse
from ccouple.reporting import Reporter, default_reporter
from ccouple.scope import is_definition, is_global_scope
from ccouple.uses import find_uses


def collect_globals(root: AstNode) -> tuple[list[AstNode], list[AstNode]]:
    """Return global-scope variable and function declarations in pre-order."""
    variables = []
    functions = []
    for node in walk(root):
        if node.kind is NodeKind.VAR_DECL:
            if is_global_scope(node):
                variables.append(node)
        elif node.kind is NodeKind.FUNCTION_DECL:
            if is_global_scope(node):
                functions.append(node)
    return variables, functions


def resolve_external_uses(
    record: FunctionUse,
    defs: DefinitionMap,
    reporter: Reporter | None = None,
    builtin_prefixes: tuple[str, ...] = BUILTIN_PREFIXES,
) -> None:
    """Fill in definition locations of external uses from the whole-unit map."""
    reporter = default_reporter(reporter)
    for use in record.uses:
        if use.definition_location is not None:
            continue
        node = defs.get(use.name)
        location = node.location if node is not None else None
        if location is None:
            if not use.name.startswith(builtin_prefixes):
                reporter.warning(
                    f"unable to resolve use of external global {use.name!r}, "
                    f"as used in function {record.function_name!r} (at {record.function_location})"
                )
            continue
        use.definition_location = location


def analyze(
    root: AstNode,
    reporter: Reporter | None = None,
    builtin_prefixes: tuple[str, ...] = BUILTIN_PREFIXES,
) -> list[FunctionUse]:
    """Build function-use records for every function definition in a translation unit."""
    reporter = default_reporter(reporter)
    variables, functions = collect_globals(root)

    records = []
    for function in functions:
        if not is_definition(function):
            continue
        records.append(
            FunctionUse(
                function_name=function.spelling,
                function_location=function.location,
                uses=find_uses(function),
            )
        )

    # Forward references are only visible once the whole unit has been seen.
    defs = build_definition_map(variables, functions, reporter)
    for record in records:
        resolve_external_uses(record, defs, reporter, builtin_prefixes)
    return records


def _strip_ext(path: str) -> str:
    return os.path.splitext(os.path.normpath(path))[0]


def restrict_to_own_file(records: list[FunctionUse], target_file: str) -> list[FunctionUse]:
    """Keep only functions defined in the file under analysis, not in included headers."""
    target = _strip_ext(target_file)
    return [r for r in records if _strip_ext(r.function_location.file) == target]
