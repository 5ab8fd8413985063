#!/usr/bin/env python3

"""Selection of the authoritative declaration for each global name."""

from collections.abc import Iterable

from ccouple.ast_provider import AstNode
from ccouple.reporting import Reporter, default_reporter
from ccouple.scope import is_definition, is_definition_or_in_source

DefinitionMap = dict[str, AstNode]


def select_definition(
    existing: AstNode | None,
    candidate: AstNode,
    reporter: Reporter | None = None,
    label: str = "global",
) -> AstNode:
    """Pick which of two same-named declarations represents the definition.

    Precedence:
      1. nothing recorded yet -> candidate
      2. existing is a definition -> existing
      3. candidate is a definition or lives in a source file -> candidate
      4. otherwise existing, with a warning naming both locations
    """
    if existing is None:
        return candidate
    if is_definition(existing):
        return existing
    if is_definition_or_in_source(candidate):
        return candidate
    default_reporter(reporter).warning(
        f"{label} {candidate.spelling!r} already present; "
        f"old {existing.location}, new {candidate.location}"
    )
    return existing


def build_definition_map(
    variables: Iterable[AstNode],
    functions: Iterable[AstNode],
    reporter: Reporter | None = None,
) -> DefinitionMap:
    """Fold global variables, then global functions, into a name -> declaration map."""
    reporter = default_reporter(reporter)
    defs: DefinitionMap = {}
    for label, nodes in (("global variable", variables), ("function", functions)):
        for node in nodes:
            name = node.spelling
            defs[name] = select_definition(defs.get(name), node, reporter, label)
    return defs
