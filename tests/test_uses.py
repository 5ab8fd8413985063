#!/usr/bin/env python3
"""
Test cases for extracting identifier uses from function bodies.
"""

from ccouple.fake_ast import body, function, loc, other, ref, translation_unit, var
from ccouple.uses import find_uses


def build_unit():
    """
    int g = 1;
    int helper(void);
    int f(int p) {
        int local = p;
        return g + local + helper() + p + ext + __builtin_expect(local, 0);
    }
    """
    g = var("g", loc("main.c", 1, 5), other("INTEGER_LITERAL"))
    helper = function("helper", loc("main.c", 2, 5))
    param = other("PARM_DECL", spelling="p", location=loc("main.c", 3, 11))
    local = var("local", loc("main.c", 4, 9), ref("p", loc("main.c", 4, 17), param))
    f = function(
        "f",
        loc("main.c", 3, 5),
        param,
        body(
            local,
            other(
                "RETURN_STMT",
                ref("g", loc("main.c", 5, 12), g),
                ref("local", loc("main.c", 5, 16), local),
                other("CALL_EXPR", ref("helper", loc("main.c", 5, 24), helper)),
                ref("p", loc("main.c", 5, 35), param),
                ref("ext", loc("main.c", 5, 39)),
                other(
                    "CALL_EXPR",
                    ref("__builtin_expect", loc("main.c", 5, 45)),
                    ref("local", loc("main.c", 5, 62), local),
                ),
            ),
        ),
    )
    translation_unit(g, helper, f)
    return f


def test_locals_and_parameters_are_skipped():
    uses = find_uses(build_unit())
    names = [use.name for use in uses]
    assert "local" not in names
    assert "p" not in names


def test_uses_are_in_body_order():
    uses = find_uses(build_unit())
    assert [use.name for use in uses] == ["g", "helper", "ext", "__builtin_expect"]


def test_global_uses_carry_definition_location():
    uses = {use.name: use for use in find_uses(build_unit())}
    assert uses["g"].definition_location == loc("main.c", 1, 5)
    assert uses["g"].use_location == loc("main.c", 5, 12)
    assert uses["helper"].definition_location == loc("main.c", 2, 5)


def test_external_and_builtin_uses_have_no_definition():
    uses = {use.name: use for use in find_uses(build_unit())}
    assert uses["ext"].is_external
    assert uses["__builtin_expect"].is_external


def test_definition_without_location_is_external():
    implicit = var("__func__", None)
    f = function("f", loc("main.c", 1), body(ref("__func__", loc("main.c", 2, 10), implicit)))
    translation_unit(f)

    uses = find_uses(f)

    assert len(uses) == 1
    assert uses[0].definition_location is None


def test_repeated_references_are_all_recorded():
    g = var("g", loc("main.c", 1), other("INTEGER_LITERAL"))
    f = function(
        "f",
        loc("main.c", 2),
        body(ref("g", loc("main.c", 3, 5), g), ref("g", loc("main.c", 4, 5), g)),
    )
    translation_unit(g, f)

    uses = find_uses(f)

    assert [use.use_location.line for use in uses] == [3, 4]
