#!/usr/bin/env python3

"""File interaction graph built from function-use records."""

import json
from collections.abc import Iterable
from pathlib import PurePosixPath
from typing import NamedTuple

from ccouple.config import GraphConfig
from ccouple.errors import UnresolvedBuiltinError
from ccouple.models import FunctionUse


class Edge(NamedTuple):
    """A function in ``source`` references a global defined in ``target``."""

    source: str
    target: str


def short_file_name(path: str, project_dir: str) -> str:
    """Name a file relative to the project directory, or by its full path outside it."""
    try:
        return PurePosixPath(path).relative_to(project_dir).as_posix()
    except ValueError:
        return path


def collect_edges(records: Iterable[FunctionUse], config: GraphConfig | None = None) -> set[Edge]:
    config = config or GraphConfig()
    edges: set[Edge] = set()
    for record in records:
        source = short_file_name(record.function_location.file, config.project_dir)
        for use in record.uses:
            definition = use.definition_location
            if definition is not None and config.is_system_path(definition.file):
                continue
            if config.is_builtin_name(use.name):
                continue
            if definition is None:
                raise UnresolvedBuiltinError(use.name, str(use.use_location))
            edges.add(Edge(source, short_file_name(definition.file, config.project_dir)))
    return edges


def order_edges(edges: Iterable[Edge]) -> list[Edge]:
    """Sort by source descending, then target ascending."""
    ordered = sorted(edges, key=lambda edge: edge.target)
    ordered.sort(key=lambda edge: edge.source, reverse=True)
    return ordered


def _quote(name: str) -> str:
    return json.dumps(name, ensure_ascii=False)


def render_dot(edges: Iterable[Edge]) -> str:
    lines = ["digraph {"]
    for edge in edges:
        lines.append(f"\t{_quote(edge.source)} -> {_quote(edge.target)}")
    lines.append("}")
    return "\n".join(lines) + "\n"


def build_graph(records: Iterable[FunctionUse], config: GraphConfig | None = None) -> str:
    """Render the deduplicated, ordered file interaction graph as DOT text."""
    return render_dot(order_edges(collect_edges(records, config)))
