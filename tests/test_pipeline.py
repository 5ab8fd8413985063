#!/usr/bin/env python3
"""
Test cases for the file-level drivers.
"""

import pytest

from ccouple import pipeline
from ccouple.config import AnalysisConfig, GraphConfig
from ccouple.errors import CcoupleError, ParseError
from ccouple.graph import Edge
from ccouple.models import FunctionUse, SourceLocation, Use, load_records, save_records
from ccouple.reporting import CollectingReporter


def at(file: str, line: int = 1) -> SourceLocation:
    return SourceLocation(file=file, line=line, column=1)


@pytest.fixture
def reporter():
    return CollectingReporter()


def test_parse_failure_is_reported_and_skipped(tmp_path, reporter, monkeypatch):
    good = tmp_path / "good.c"
    good.write_text("int f(void) { return 0; }\n")
    bad = tmp_path / "bad.c"
    bad.write_text("")

    real_parse = pipeline.parse_file

    def fake_parse(path, args, index=None):
        if path == str(bad):
            raise ParseError(path, "Error parsing translation unit.")
        return real_parse(path, args, index)

    monkeypatch.setattr(pipeline, "parse_file", fake_parse)

    results = pipeline.analyze_sources([str(bad), str(good)], AnalysisConfig(), reporter, jobs=2)

    assert list(results) == [str(good)]
    assert [r.function_name for r in results[str(good)]] == ["f"]
    assert len(reporter.warnings) == 1
    assert "bad.c" in reporter.warnings[0]


def test_write_records_names_files_by_stem(tmp_path, reporter):
    record = FunctionUse(function_name="f", function_location=at("Source/engine.c"))
    results = {"Source/engine.c": [record], "Source/gfx.cpp": []}

    written = pipeline.write_records(results, tmp_path / "_dump_", reporter)

    assert [p.name for p in written] == ["engine.json", "gfx.json"]
    assert load_records(written[0]) == [record]
    assert load_records(written[1]) == []


def test_graph_records_file_writes_dot_next_to_json(tmp_path, reporter):
    json_path = tmp_path / "x.json"
    save_records(
        json_path,
        [
            FunctionUse(
                function_name="a",
                function_location=at("Source/x.c"),
                uses=[Use(name="g", use_location=at("Source/x.c", 2), definition_location=at("Source/y.c"))],
            )
        ],
    )

    dot_path = pipeline.graph_records_file(json_path, GraphConfig(), reporter)

    assert dot_path == tmp_path / "x.dot"
    assert dot_path.read_text() == 'digraph {\n\t"x.c" -> "y.c"\n}\n'


def test_graph_merged_unions_records(tmp_path, reporter):
    x_json = tmp_path / "x.json"
    y_json = tmp_path / "y.json"
    save_records(
        x_json,
        [
            FunctionUse(
                function_name="a",
                function_location=at("Source/x.c"),
                uses=[Use(name="g", use_location=at("Source/x.c", 2), definition_location=at("Source/y.c"))],
            )
        ],
    )
    save_records(
        y_json,
        [
            FunctionUse(
                function_name="b",
                function_location=at("Source/y.c"),
                uses=[Use(name="a", use_location=at("Source/y.c", 2), definition_location=at("Source/x.c"))],
            )
        ],
    )
    output = tmp_path / "out" / "all.dot"

    edges = pipeline.graph_merged([x_json, y_json], output, GraphConfig(), reporter)

    assert edges == [Edge("y.c", "x.c"), Edge("x.c", "y.c")]
    assert output.read_text() == 'digraph {\n\t"y.c" -> "x.c"\n\t"x.c" -> "y.c"\n}\n'


def test_write_records_rejects_shared_stem(tmp_path, reporter):
    results = {
        "Source/a.c": [FunctionUse(function_name="one", function_location=at("Source/a.c"))],
        "Lib/a.c": [FunctionUse(function_name="two", function_location=at("Lib/a.c"))],
    }
    output_dir = tmp_path / "_dump_"

    with pytest.raises(CcoupleError, match="Lib/a.c"):
        pipeline.write_records(results, output_dir, reporter)

    assert not output_dir.exists()
