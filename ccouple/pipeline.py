#!/usr/bin/env python3

"""Drivers tying the AST provider, analyzer and graph builder to files on disk."""

from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

import clang.cindex as clang
from tqdm import tqdm

from ccouple.analyzer import analyze, restrict_to_own_file
from ccouple.ast_provider import configure_libclang, parse_file
from ccouple.config import AnalysisConfig, GraphConfig
from ccouple.errors import CcoupleError, ParseError
from ccouple.graph import Edge, collect_edges, order_edges, render_dot
from ccouple.models import FunctionUse, load_records, save_records
from ccouple.reporting import Reporter, default_reporter


def analyze_source(
    path: str, config: AnalysisConfig, reporter: Reporter | None = None
) -> list[FunctionUse]:
    """Parse one source file and return the records of functions it defines."""
    reporter = default_reporter(reporter)
    reporter.debug(f"parsing {path!r}")
    # One index per file so workers never share libclang state.
    result = parse_file(path, config.clang_args(), clang.Index.create())
    for error in result.errors:
        reporter.warning(f"{path}: {error}")
    records = analyze(result.root, reporter, tuple(config.graph.builtin_prefixes))
    return restrict_to_own_file(records, path)


def analyze_sources(
    paths: list[str],
    config: AnalysisConfig,
    reporter: Reporter | None = None,
    jobs: int = 1,
    progress: bool = False,
) -> dict[str, list[FunctionUse]]:
    """Analyze files in parallel. Files that fail to load are reported and left out."""
    reporter = default_reporter(reporter)
    configure_libclang(config.resolved_libclang_file(), reporter)

    results: dict[str, list[FunctionUse]] = {}
    with ThreadPoolExecutor(max_workers=max(1, jobs)) as executor:
        futures = {executor.submit(analyze_source, path, config, reporter): path for path in paths}
        with tqdm(total=len(futures), desc="Analyzing", disable=not progress) as pbar:
            for future in as_completed(futures):
                path = futures[future]
                try:
                    results[path] = future.result()
                except ParseError as e:
                    reporter.warning(str(e))
                pbar.update(1)

    # Keep input order regardless of completion order.
    return {path: results[path] for path in paths if path in results}


def records_path_for(source: str, output_dir: Path) -> Path:
    return output_dir / f"{Path(source).stem}.json"


def write_records(
    results: dict[str, list[FunctionUse]], output_dir: Path, reporter: Reporter | None = None
) -> list[Path]:
    """Save each file's records as <stem>.json under output_dir.

    Two sources with the same stem would overwrite each other, so that is an
    error and nothing is written.
    """
    reporter = default_reporter(reporter)
    claimed: dict[Path, str] = {}
    for source in results:
        json_path = records_path_for(source, output_dir)
        if json_path in claimed:
            raise CcoupleError(
                f"Sources {claimed[json_path]!r} and {source!r} would both be recorded in {json_path}"
            )
        claimed[json_path] = source

    output_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for source, records in results.items():
        json_path = records_path_for(source, output_dir)
        reporter.debug(f"creating {str(json_path)!r}")
        save_records(json_path, records)
        written.append(json_path)
    return written


def graph_records_file(
    json_path: Path, config: GraphConfig, reporter: Reporter | None = None
) -> Path:
    """Write the graph for one records file next to it, with a .dot extension."""
    reporter = default_reporter(reporter)
    reporter.debug(f"parsing {str(json_path)!r}")
    records = load_records(json_path)
    edges = order_edges(collect_edges(records, config))
    dot_path = json_path.with_suffix(".dot")
    reporter.debug(f"creating {str(dot_path)!r}")
    dot_path.write_text(render_dot(edges), encoding="utf-8")
    return dot_path


def graph_merged(
    json_paths: list[Path],
    output: Path,
    config: GraphConfig,
    reporter: Reporter | None = None,
) -> list[Edge]:
    """Write one graph covering the union of several records files."""
    reporter = default_reporter(reporter)
    records: list[FunctionUse] = []
    for json_path in json_paths:
        reporter.debug(f"parsing {str(json_path)!r}")
        records.extend(load_records(json_path))
    edges = order_edges(collect_edges(records, config))
    reporter.debug(f"creating {str(output)!r}")
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(render_dot(edges), encoding="utf-8")
    return edges
