"""Tests for the source locator."""

from pathlib import Path

from custom_build.graph import LODASH_TABLES
from custom_build.locator import (
    FORKS,
    indent_of,
    is_var_used,
    locate,
    locate_fork,
    locate_function,
    locate_prop,
    locate_var,
    reindent,
    remove_fork,
    remove_var,
    scan_vars,
    strip_comments,
    strip_strings,
)
from custom_build.locator.base import block_end
from custom_build.models import IdentifierKind, SpanKind

FIXTURES = Path(__file__).parent / "fixtures"
SOURCE = (FIXTURES / "mini_lodash.js").read_text()
COMPLEX = LODASH_TABLES.complex_vars


def test_locate_function_declaration():
    span = locate_function(SOURCE, "compact")
    assert span.kind is SpanKind.FUNCTION
    assert span.text.startswith("  function compact(array) {")
    assert span.text.endswith("    return result;\n  }\n")
    assert SOURCE[span.start:span.end] == span.text


def test_locate_function_with_doc_comment():
    span = locate_function(SOURCE, "compact", leading_comments=True)
    assert "Creates an array with all falsey values removed." in span.text
    assert span.text.rstrip().endswith("return result;\n  }")


def test_locate_function_expression():
    span = locate_function(SOURCE, "isArray")
    assert span.text.startswith("  var isArray = nativeIsArray || function(value) {")
    assert span.text.endswith("  };\n")


def test_locate_function_missing():
    assert locate_function(SOURCE, "debounce") is None
    # a plain variable is not a function
    assert locate_function(SOURCE, "largeArraySize") is None


def test_locate_function_does_not_match_prefix():
    span = locate_function(SOURCE, "lodash")
    assert span.text.startswith("  function lodash(value) {")


def test_locate_prop():
    span = locate_prop(SOURCE, "templateSettings")
    assert "'interpolate': reInterpolate" in span.text
    assert span.text.rstrip().endswith("};")


def test_locate_support_prop_spans_setup_closure():
    span = locate_prop(SOURCE, "support")
    assert "support.argsClass" in span.text
    assert span.text.rstrip().endswith("}(1));")


def test_locate_var_shapes():
    first = locate_var(SOURCE, "reEscape", shallow=True)
    assert first.text.startswith("  var reEscape =")
    later = locate_var(SOURCE, "reEvaluate", shallow=True)
    assert later.text.startswith("      reEvaluate =")
    block = locate_var(SOURCE, "objectTypes", shallow=True)
    assert block.text.endswith("  };\n")
    assert locate_var(SOURCE, "missing", shallow=True) is None


def test_locate_dispatch():
    assert locate(SOURCE, "compact", IdentifierKind.FUNCTION).name == "compact"
    assert locate(SOURCE, "templateSettings", IdentifierKind.PROPERTY).kind is SpanKind.PROPERTY
    assert locate(SOURCE, "isFunction", SpanKind.FORK).kind is SpanKind.FORK


def test_scan_vars():
    names = scan_vars(strip_strings(strip_comments(SOURCE)), shallow=True)
    for name in ("largeArraySize", "reEscape", "reEvaluate", "reInterpolate", "objectTypes",
                 "freeGlobal", "toString", "nativeIsArray", "support"):
        assert name in names
    assert "isArray" not in names
    assert names == sorted(names)


def test_is_var_used():
    snippet = strip_strings(strip_comments(SOURCE))
    assert is_var_used(snippet, "objectTypes", shallow=True)
    assert is_var_used(snippet, "reEscape", shallow=True)
    assert not is_var_used(snippet, "largeArraySize", shallow=True)
    assert is_var_used(snippet, "support", shallow=True, complex_vars=COMPLEX)


def test_remove_var_keeps_list_valid():
    source = remove_var(SOURCE, "reEscape")
    assert "  var reEvaluate = /<%([\\s\\S]+?)%>/g,\n      reInterpolate" in source
    source = remove_var(source, "reInterpolate")
    assert "  var reEvaluate = /<%([\\s\\S]+?)%>/g;\n" in source
    source = remove_var(source, "reEvaluate")
    assert "var reEvaluate" not in source
    assert "Used to match template delimiters" not in source


def test_remove_complex_var():
    source = remove_var(SOURCE, "freeGlobal", COMPLEX)
    assert "freeGlobal" not in source
    assert "window = freeGlobal" not in source


def test_locate_fork():
    span = locate_fork(SOURCE, "isFunction")
    assert span.text.lstrip().startswith("// fallback for older versions of Chrome and Safari")
    assert span.text.endswith("  }")
    assert "isFunction = function(value)" in span.text


def test_locate_fork_within_owner():
    span = locate_fork(SOURCE, FORKS["isArray"])
    assert span.text.startswith(" || function(value) {")


def test_remove_fork():
    source = remove_fork(SOURCE, "isArguments")
    assert "hasOwnProperty.call(value, 'callee')" not in source
    assert "function isArguments(value)" in source
    assert remove_fork(source, "isArguments") == source


def test_block_end():
    text = "if (a) { b = { c: '}' }; /* } */ } tail"
    assert text[block_end(text, 0):] == " tail"
    assert block_end("{ unclosed", 0) == len("{ unclosed")


def test_strip_helpers():
    assert strip_strings("a('x', \"y\") + 'it\\'s'") == "a(, ) + "
    assert strip_comments("  // note\n  /** doc */\n  code();\n") == "  code();\n"


def test_indent_helpers():
    assert indent_of("\n    var a;\n  b") == "    "
    assert reindent("function a() {\n  return 1;\n}\n", "  ") == "  function a() {\n    return 1;\n  }\n"
