#!/usr/bin/env python3

"""Extraction of non-local identifier uses from a function body."""

from ccouple.ast_provider import AstNode, NodeKind, walk
from ccouple.models import Use
from ccouple.scope import is_global_scope


def find_uses(function: AstNode) -> list[Use]:
    """Record every reference in the function that is not to a local or parameter.

    References without a visible definition are recorded as external (no
    definition location); builtins are kept here and filtered by the graph
    builder.
    """
    uses = []
    for node in walk(function):
        if node.kind is not NodeKind.DECL_REF_EXPR:
            continue
        definition = node.definition()
        if definition is None or definition.location is None:
            uses.append(Use(name=node.spelling, use_location=node.location))
        elif is_global_scope(definition):
            uses.append(
                Use(
                    name=node.spelling,
                    use_location=node.location,
                    definition_location=definition.location,
                )
            )
    return uses
