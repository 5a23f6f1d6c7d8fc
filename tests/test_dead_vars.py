"""Tests for dead-variable elimination."""

from pathlib import Path

import pytest

from custom_build.config import parse_commands
from custom_build.errors import DeadVariableLoopError
from custom_build.pipeline import prepare_state, run_build
from custom_build.pruner import remove_dead_vars

FIXTURES = Path(__file__).parent / "fixtures"

SOURCE = """;(function(window) {

  /** Used for native method references */
  var objectProto = Object.prototype;

  /** Native method shortcuts */
  var toString = objectProto.toString;

  /** Used to detect if a method is native */
  var reNative = RegExp('^' + String(toString) + '$');

  function identity(value) {
    return value;
  }

  window._ = identity;
}(this));
"""


def _state():
    return prepare_state(parse_commands(["include=identity"]))


def test_chain_of_unused_vars_removed():
    result = remove_dead_vars(SOURCE, _state())
    for name in ("objectProto", "toString", "reNative"):
        assert name not in result
    assert "Used to detect if a method is native" not in result
    assert "function identity(value)" in result
    assert "window._ = identity;" in result


def test_included_vars_are_kept():
    state = _state()
    state.include_vars.append("reNative")
    result = remove_dead_vars(SOURCE, state)
    # reNative keeps the variables it is built from alive
    assert "var reNative" in result
    assert "var toString = objectProto.toString;" in result
    assert "var objectProto = Object.prototype;" in result


def test_string_mentions_do_not_keep_vars():
    source = SOURCE.replace("window._ = identity;", "window._ = 'objectProto';")
    result = remove_dead_vars(source, _state())
    assert "var objectProto" not in result


def test_pass_cap():
    with pytest.raises(DeadVariableLoopError) as excinfo:
        remove_dead_vars(SOURCE, _state(), max_passes=1)
    assert excinfo.value.identifiers == ["toString"]
    assert excinfo.value.kind == "dead_variable_loop"


def test_nothing_to_remove():
    source = ";(function(window) {\n\n  var a = 1;\n\n  window._ = a;\n}(this));\n"
    assert remove_dead_vars(source, _state()) == source


def test_removal_is_settled_on_its_own_output():
    library = (FIXTURES / "mini_lodash.js").read_text()
    for commands in (
        ["include=isArray"],
        ["include=identity"],
        ["include=compact,isFunction"],
        ["modern", "include=isArguments"],
        ["legacy", "include=isArray", "exports=amd"],
    ):
        output = run_build(library, parse_commands(commands)).source
        state = prepare_state(parse_commands(commands))
        assert remove_dead_vars(output, state) == output
