"""Tests for the source pruner's individual passes."""

from pathlib import Path

from custom_build.pruner import (
    add_commands_to_header,
    cleanup_source,
    find_dangling_references,
    set_use_strict,
    validate,
    wrap_iife,
)
from custom_build.pruner.exports import _quote_command
from custom_build.pruner.functions import remove_method_assignments, remove_pseudo_privates

FIXTURES = Path(__file__).parent / "fixtures"
SOURCE = (FIXTURES / "mini_lodash.js").read_text()

SMALL = "/**\n * @license x\n */\n;(function(window) {\n  var a = 1;\n}(this));\n"


def test_set_use_strict_toggles():
    source = ";(function(window) {\n  var a;\n"
    strict = set_use_strict(source, True)
    assert strict == ";(function(window) {\n  'use strict';\n  var a;\n"
    assert set_use_strict(strict, True) == strict
    assert set_use_strict(strict, False) == source


def test_wrap_iife_replaces_closure():
    wrapped = wrap_iife(SMALL, "!function(window) {%output%}(this);")
    assert wrapped == "/**\n * @license x\n */\n!function(window) {\n  var a = 1;\n}(this);"


def test_wrap_iife_without_token_drops_body():
    wrapped = wrap_iife(SMALL, "console.log(1);")
    assert wrapped == "/**\n * @license x\n */\nconsole.log(1);"


def test_quote_command():
    assert _quote_command("modern") == "modern"
    assert _quote_command("include=map,filter") == 'include="map,filter"'
    assert _quote_command("iife=/* x */") == 'iife="/* x *\\/"'


def test_add_commands_to_header():
    source = add_commands_to_header(SOURCE, ["modern", "include=map"])
    assert (
        " * Lo-Dash 2.4.1 (Custom Build) <http://lodash.com/>\n"
        " * Build: `lodash modern include=\"map\"`\n"
        " * Copyright"
    ) in source


def test_remove_pseudo_privates():
    source = "  lodash._baseEach = baseEach;\n  lodash.map = map;\n"
    assert remove_pseudo_privates(source) == "  lodash.map = map;\n"


def test_remove_method_assignments():
    source = "  lodash.compact = compact;\n  lodash.prototype.value = wrapperValueOf;\n"
    assert remove_method_assignments(source, "wrapperValueOf") == "  lodash.compact = compact;\n"


def test_validate_balanced():
    assert validate("function a() { return /[)]/.test(x); }") == (True, None)
    assert validate("var s = ')'; // )\n/* ( */") == (True, None)
    assert validate(SOURCE) == (True, None)


def test_validate_reports_problems():
    valid, error = validate("function a() { return b(; }")
    assert not valid
    assert error == "Unexpected '}' on line 1"
    assert validate("a(")[0] is False
    assert validate("'abc") == (False, "Unterminated string")


def test_cleanup_collapses_blank_lines_and_separators():
    source = "a;   \n\n\n\n  /*----*/\n\n  /*----*/\n\nb;\n\n"
    cleaned = cleanup_source(source)
    assert cleaned.count("/*----*/") == 1
    assert "\n\n\n" not in cleaned
    assert cleaned.startswith("a;\n")
    assert cleaned.endswith("b;\n")


def test_cleanup_drops_comment_before_closing_brace():
    source = "  function a() {\n    b();\n    // trailing note\n  }\n"
    assert cleanup_source(source) == "function a() {\n    b();\n  }\n"


def test_find_dangling_references():
    source = "function a() { return baseEach(x); }"
    assert find_dangling_references(source, ["baseEach", "map"]) == ["baseEach"]
    # declared names and property calls are not dangling
    assert find_dangling_references("function map() {}\nmap(1);", ["map"]) == []
    assert find_dangling_references("lodash.map(1);", ["map"]) == []


def test_pruned_function_passed_as_argument_is_still_dangling():
    source = "function a(collection) {\n  baseEach(collection, map);\n  return map(collection);\n}\n"
    assert find_dangling_references(source, ["map"]) == ["map"]
    # an entry of a declaration list declares the name
    declared = "  var a = 1,\n      map = function() {};\n\n  map(a);\n"
    assert find_dangling_references(declared, ["map"]) == []
