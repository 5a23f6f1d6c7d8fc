"""Tests for the full pipeline."""

from pathlib import Path

import pytest

from custom_build.config import parse_commands
from custom_build.errors import DeadVariableLoopError, PruneError
from custom_build.minify import WhitespaceMinifier
from custom_build.pipeline import run_build

FIXTURES = Path(__file__).parent / "fixtures"
SOURCE = (FIXTURES / "mini_lodash.js").read_text()


def _build(*commands, **kwargs):
    return run_build(SOURCE, parse_commands(commands), **kwargs)


def test_single_function_build():
    result = _build("include=isArray")
    output = result.source
    assert result.build_funcs == ["isArray"]

    assert "var isArray = nativeIsArray || function(value)" in output
    assert "var reNative = /\\[native code\\]/;" in output
    assert "lodash.isArray = isArray;" in output

    for removed in ("function compact", "function isFunction", "function isArguments",
                    "templateSettings", "largeArraySize", "reEscape", "funcClass",
                    "nativeBind", "support"):
        assert removed not in output
    assert "return value instanceof lodash" not in output


def test_build_header_records_commands():
    output = _build("include=isArray").source
    assert output.startswith("/**\n * @license\n * Lo-Dash 2.4.1 (Custom Build) <http://lodash.com/>\n")
    assert ' * Build: `lodash include="isArray"`\n' in output


def test_dead_vars_cascade():
    output = _build("include=identity").source
    assert "function identity(value)" in output
    for name in ("objectProto", "reNative", "toString", "nativeIsArray"):
        assert name not in output


def test_exports_amd_only():
    output = _build("include=isArray", "exports=amd").source
    assert "define(function" in output
    for name in ("freeExports", "freeModule", "window._"):
        assert name not in output


def test_exports_node_and_commonjs():
    output = _build("include=isArray", "exports=node,commonjs").source
    assert "define(" not in output
    assert "window._" not in output


def test_strict_build():
    output = _build("strict", "include=isArray").source
    assert ";(function(window) {\n  'use strict';" in output


def test_custom_iife():
    output = _build("include=isArray", "iife=!function(window) {%output%}(this);").source
    assert output.startswith("/**\n * @license")
    assert "!function(window) {" in output
    assert ";(function(window)" not in output
    assert output.endswith("}(this);\n")


def test_modern_drops_arguments_fallback():
    output = _build("modern", "include=isArguments").source
    assert "function isArguments(value)" in output
    assert "hasOwnProperty.call(value, 'callee')" not in output
    assert "support.argsClass" not in output


def test_legacy_drops_native_detection():
    output = _build("legacy", "include=isArray").source
    assert "nativeIsArray" not in output


def test_malformed_output_raises():
    source = ";(function(window) {\n  function identity(value) {\n    return value;\n  }\n"
    with pytest.raises(PruneError) as excinfo:
        run_build(source, parse_commands(["include=identity"]))
    assert excinfo.value.kind == "prune"
    assert excinfo.value.identifiers == ["identity"]


def test_progress_callback():
    stages = []
    _build("include=isArray", progress=lambda stage, current, total: stages.append((stage, current, total)))
    assert stages == [("Resolving", 0, 2), ("Pruning", 1, 2), ("Done", 2, 2)]


def test_minified_output():
    stages = []
    result = _build(
        "include=isArray",
        minifier=WhitespaceMinifier(),
        progress=lambda stage, current, total: stages.append(stage),
    )
    assert stages == ["Resolving", "Pruning", "Minifying", "Done"]
    assert result.minified.startswith("/**\n * @license")
    assert "\n  " not in result.minified.split("*/\n", 1)[1]
    assert result.source_map is None


def test_whitespace_minifier():
    source = "/**\n * @license x\n */\n;(function() {\n  /** doc */\n  // note\n  var a = 1;\n\n}());\n"
    minified = WhitespaceMinifier().minify(source)
    assert minified.source == "/**\n * @license x\n */\n;(function() {\nvar a = 1;\n}());\n"


def test_dead_variable_error_is_a_build_error():
    from custom_build.errors import BuildError

    assert issubclass(DeadVariableLoopError, BuildError)
    assert DeadVariableLoopError("x", ["a"]).to_dict() == {
        "kind": "dead_variable_loop",
        "message": "x",
        "identifiers": ["a"],
    }


def test_mobile_keeps_function_fork():
    result = _build("mobile", "include=isFunction")
    assert "function isFunction(value)" in result.source
    assert "if (isFunction(/x/))" in result.source
    assert "mobile" in result.rules_fired


def test_csp_drops_function_fork():
    result = _build("csp", "include=isFunction")
    assert "function isFunction(value)" in result.source
    assert "if (isFunction(/x/))" not in result.source


def test_underscore_build():
    result = _build("underscore", "include=compact")
    assert "function compact(array)" in result.source
    assert "underscore-lodash" in result.rules_fired
    # no amd export unless asked for
    assert "define(function" not in result.source


def test_backbone_build():
    result = _build("backbone", "include=compact")
    assert "function compact(array)" in result.source
    assert "underscore-lodash" in result.rules_fired


def test_modularize_build():
    result = _build("modularize", "include=compact")
    assert "function compact(array)" in result.source
    assert "modularize" in result.rules_fired
    assert "runInContext" not in result.build_funcs
