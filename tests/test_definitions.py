#!/usr/bin/env python3
"""
Test cases for choosing the authoritative declaration of a global name.
"""

import pytest

from ccouple.definitions import build_definition_map, select_definition
from ccouple.errors import UnsupportedConstructError
from ccouple.fake_ast import body, function, loc, other, translation_unit, var
from ccouple.reporting import CollectingReporter


@pytest.fixture
def reporter():
    return CollectingReporter()


def header_decl(name="g"):
    # extern int g;  in a header
    return var(name, loc("Source/globals.h", 3))


def source_decl(name="g"):
    # int g;  in a source file (tentative, no children)
    return var(name, loc("Source/globals.c", 7))


def source_def(name="g"):
    return var(name, loc("Source/globals.c", 7), other("INTEGER_LITERAL"))


def test_first_candidate_is_inserted(reporter):
    candidate = header_decl()
    assert select_definition(None, candidate, reporter) is candidate
    assert reporter.warnings == []


def test_existing_definition_wins(reporter):
    existing = source_def()
    candidate = var("g", loc("Source/other.c", 2), other("INTEGER_LITERAL"))
    assert select_definition(existing, candidate, reporter) is existing
    assert reporter.warnings == []


def test_definition_replaces_declaration(reporter):
    existing = header_decl()
    candidate = source_def()
    assert select_definition(existing, candidate, reporter) is candidate


def test_source_declaration_replaces_header_declaration(reporter):
    existing = header_decl()
    candidate = source_decl()
    assert select_definition(existing, candidate, reporter) is candidate
    assert reporter.warnings == []


def test_second_header_declaration_warns(reporter):
    existing = header_decl()
    candidate = var("g", loc("Source/other.h", 9))
    assert select_definition(existing, candidate, reporter) is existing
    assert len(reporter.warnings) == 1
    warning = reporter.warnings[0]
    assert "'g'" in warning
    assert "Source/globals.h:3" in warning
    assert "Source/other.h:9" in warning


def test_unknown_extension_is_fatal(reporter):
    existing = header_decl()
    candidate = var("g", loc("Source/tables.inc", 1))
    with pytest.raises(UnsupportedConstructError):
        select_definition(existing, candidate, reporter)


@pytest.mark.parametrize("source_first", [True, False])
def test_header_and_source_resolve_to_source_in_any_order(reporter, source_first):
    header = header_decl()
    source = source_decl()
    variables = [source, header] if source_first else [header, source]

    defs = build_definition_map(variables, [], reporter)

    assert defs["g"] is source


def test_header_after_source_declaration_is_reported(reporter):
    source = source_decl()
    header = header_decl()

    defs = build_definition_map([source, header], [], reporter)

    assert defs["g"] is source
    assert len(reporter.warnings) == 1
    assert reporter.warnings[0].startswith("global variable 'g' already present")


def test_functions_follow_variables(reporter):
    prototype = function("tick", loc("Source/engine.h", 4))
    definition = function("tick", loc("Source/engine.c", 10), body())
    counter = source_def("counter")

    defs = build_definition_map([counter], [prototype, definition], reporter)

    assert defs["counter"] is counter
    assert defs["tick"] is definition


def test_function_prototype_after_definition_is_ignored(reporter):
    definition = function("tick", loc("Source/engine.c", 10), body())
    prototype = function("tick", loc("Source/engine.h", 4))

    defs = build_definition_map([], [definition, prototype], reporter)

    assert defs["tick"] is definition
    assert reporter.warnings == []


def test_variable_function_name_collision(reporter):
    # A defined variable keeps the name even when a function with that name follows.
    g = source_def("shared")
    f = function("shared", loc("Source/engine.c", 20), body())
    translation_unit(g, f)

    defs = build_definition_map([g], [f], reporter)

    assert defs["shared"] is g
