#!/usr/bin/env python3
"""
Command line interface for ccouple.

Usage:
    ccouple analyze -I Source -D STUB Source/*.c --output-dir _dump_
    ccouple graph _dump_/*.json
    ccouple graph _dump_/*.json --output coupling.dot
"""

import json
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from ccouple.config import AnalysisConfig
from ccouple.console import Console
from ccouple.errors import CcoupleError
from ccouple.pipeline import analyze_sources, graph_merged, graph_records_file, write_records
from ccouple.reporting import LoggingReporter


def load_config(config_path: Path | None) -> AnalysisConfig:
    if config_path is not None:
        return AnalysisConfig.load_from_file(config_path)
    return AnalysisConfig.find_project_config(Path.cwd()) or AnalysisConfig()


@click.group()
def cli():
    """Map file-to-file coupling through global symbols in C/C++ code."""


@cli.command()
@click.argument("sources", nargs=-1, type=click.Path(exists=True, dir_okay=False))
@click.option("-D", "defines", multiple=True, help="Preprocessor definition NAME[=VALUE]")
@click.option("-I", "include_dirs", multiple=True, help="Include directory")
@click.option("--std", default=None, help="Language standard passed to clang, e.g. c99")
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for the per-file JSON records",
)
@click.option("--jobs", "-j", default=1, show_default=True, help="Files analyzed in parallel")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to ccouple.json",
)
@click.option("--verbose", "-v", is_flag=True, help="Log debug messages")
def analyze(
    sources: tuple[str, ...],
    defines: tuple[str, ...],
    include_dirs: tuple[str, ...],
    std: str | None,
    output_dir: Path | None,
    jobs: int,
    config_path: Path | None,
    verbose: bool,
):
    """Record global identifier uses of every function defined in SOURCES."""
    console = Console(stderr=True)
    reporter = LoggingReporter(console.setup_logging(verbose))

    try:
        config = load_config(config_path)
        config.defines.extend(defines)
        config.include_dirs.extend(include_dirs)
        if std:
            config.std = std
        if output_dir is not None:
            config.output_dir = output_dir

        results = analyze_sources(list(sources), config, reporter, jobs=jobs, progress=len(sources) > 1)
        written = write_records(results, config.output_dir, reporter)
    except (CcoupleError, ValidationError, json.JSONDecodeError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    function_count = sum(len(records) for records in results.values())
    console.print(
        f"[green]Recorded {function_count} functions from {len(written)} files in {config.output_dir}[/green]"
    )


@cli.command()
@click.argument("records", nargs=-1, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--project-dir", default=None, help="Directory whose files are named relative to it")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write one merged graph here instead of one graph per records file",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to ccouple.json",
)
@click.option("--verbose", "-v", is_flag=True, help="Log debug messages")
def graph(
    records: tuple[Path, ...],
    project_dir: str | None,
    output: Path | None,
    config_path: Path | None,
    verbose: bool,
):
    """Write Graphviz file interaction graphs for RECORDS."""
    console = Console(stderr=True)
    reporter = LoggingReporter(console.setup_logging(verbose))

    try:
        graph_config = load_config(config_path).graph
        if project_dir is not None:
            graph_config.project_dir = project_dir

        if output is not None:
            edges = graph_merged(list(records), output, graph_config, reporter)
            console.print(f"[green]Wrote {len(edges)} edges to {output}[/green]")
        else:
            for json_path in records:
                graph_records_file(json_path, graph_config, reporter)
    except (CcoupleError, ValidationError, json.JSONDecodeError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    cli()
