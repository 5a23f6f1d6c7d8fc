"""Tests for applying queued source edits to library text."""

from pathlib import Path

import pytest

from custom_build.locator import locate_function
from custom_build.pruner.edits import apply_edit, apply_edits
from custom_build.rules import InsertAfter, PromoteFork, Rewrite, Substitute, Transplant
from custom_build.rules.bodies import FIND_WHERE, UNDERSCORE_BODIES

FIXTURES = Path(__file__).parent / "fixtures"
LIBRARY = (FIXTURES / "mini_lodash.js").read_text()

CREATE_OBJECT = """;(function(window) {

  function createObject(prototype) {
    return isObject(prototype) ? nativeCreate(prototype) : {};
  }
  // fallback for browsers without `Object.create`
  if (!nativeCreate) {
    createObject = function(prototype) {
      if (isObject(prototype)) {
        noop.prototype = prototype;
        var result = new noop;
        noop.prototype = null;
      }
      return result || {};
    };
  }

}(this));
"""

KEYS = """;(function(window) {

  var shimKeys = function(object) {
    var index, iterable = object, result = [];
    for (index in iterable) {
      if (hasOwnProperty.call(iterable, index)) {
        result.push(index);
      }
    }
    return result;
  };

  var keys = !nativeKeys ? shimKeys : function(object) {
    if (!isObject(object)) {
      return [];
    }
    return nativeKeys(object);
  };

}(this));
"""

COLLECTIONS = """;(function(window) {

  function clone(value, isDeep, callback, thisArg) {
    if (typeof isDeep != 'boolean' && isDeep != null) {
      thisArg = callback;
      callback = isDeep;
      isDeep = false;
    }
    return baseClone(value, isDeep, typeof callback == 'function' && baseCreateCallback(callback, thisArg, 1));
  }

  function find(collection, callback, thisArg) {
    callback = lodash.createCallback(callback, thisArg, 3);
    return baseFind(collection, callback);
  }

}(this));
"""


def test_promote_fork_replaces_body():
    source = apply_edit(CREATE_OBJECT, PromoteFork("createObject"))
    assert "  function createObject(prototype) {\n    if (isObject(prototype)) {\n" in source
    assert "      noop.prototype = prototype;\n" in source
    assert "nativeCreate" not in source
    assert "createObject = function" not in source


def test_promote_arguments_fallback():
    source = apply_edit(LIBRARY, PromoteFork("isArguments"))
    assert (
        "  function isArguments(value) {\n"
        "    return value && typeof value == 'object' && typeof value.length == 'number' &&\n"
        "      hasOwnProperty.call(value, 'callee') || false;\n"
        "  }\n"
    ) in source
    assert "toString.call(value) == argsClass" not in source
    assert "if (!support.argsClass)" not in source


def test_promote_missing_fork_is_a_no_op():
    assert apply_edit(KEYS, PromoteFork("createObject")) == KEYS


def test_transplant_uses_donor_implementation():
    source = apply_edit(KEYS, Transplant("keys", "shimKeys"))
    assert "  var keys = function(object) {\n    var index, iterable = object, result = [];\n" in source
    assert "nativeKeys" not in source
    assert "  var shimKeys = function(object) {\n" in source


def test_substitute_reindents_body():
    source = apply_edit(COLLECTIONS, Substitute("clone", UNDERSCORE_BODIES["clone"]))
    assert (
        "  function clone(value) {\n"
        "    return isObject(value)\n"
        "      ? (isArray(value) ? slice(value) : assign({}, value))\n"
        "      : value;\n"
        "  }\n"
    ) in source
    assert "baseClone" not in source
    assert "function find(collection, callback, thisArg)" in source


def test_insert_after_anchor():
    source = apply_edit(COLLECTIONS, InsertAfter("find", FIND_WHERE))
    assert "    return baseFind(collection, callback);\n  }\n\n  /**\n   * Examines each element" in source
    assert (
        "  function findWhere(object, properties) {\n"
        "    return where(object, properties, true);\n"
        "  }\n"
    ) in source
    assert locate_function(source, "findWhere").start > locate_function(source, "find").start


def test_rewrite_within_function():
    edit = Rewrite(r"\bbaseFind\(", "baseEach(", within="find", count=1)
    source = apply_edit(COLLECTIONS, edit)
    assert "return baseEach(collection, callback);" in source
    assert apply_edit(COLLECTIONS, Rewrite("x", "y", within="missing")) == COLLECTIONS


def test_edits_apply_in_order():
    source = apply_edits(COLLECTIONS, [
        Substitute("clone", UNDERSCORE_BODIES["clone"]),
        InsertAfter("find", FIND_WHERE),
        Rewrite(r"\bwhere\(", "filterWhere(", within="findWhere"),
    ])
    assert "return filterWhere(object, properties, true);" in source
    assert "baseClone" not in source


def test_unknown_edit_rejected():
    with pytest.raises(TypeError):
        apply_edit(COLLECTIONS, object())
