"""Tests for directive normalization and closure resolution."""

import pytest

from custom_build.config import parse_commands
from custom_build.errors import InvalidDirectiveError
from custom_build.graph import LODASH_TABLES
from custom_build.models import BuildDirectives
from custom_build.pipeline import prepare_state
from custom_build.resolver import category_label


def _resolve(*commands):
    return prepare_state(parse_commands(commands))


def test_single_function():
    state = _resolve("include=isArray")
    assert state.build_funcs == ["isArray"]
    assert state.include_props == []
    assert state.include_vars == ["reNative"]


def test_difference_closure():
    state = _resolve("include=difference")
    expected = {
        "difference", "baseFlatten", "cacheIndexOf", "createCache", "getIndexOf",
        "releaseObject", "baseIndexOf", "indexOf", "isArguments", "isArray",
        "cachePush", "getObject",
    }
    assert expected <= set(state.build_funcs)
    assert {"largeArraySize", "keyPrefix", "objectPool", "maxPoolSize"} <= set(state.include_vars)
    assert "support" in state.include_props


def test_build_set_is_closed():
    state = _resolve("include=difference,template,clone")
    build = set(state.build_funcs)
    for name in build:
        assert set(state.graph.funcs.get(name, ())) <= build


def test_vars_pull_in_their_function_dependencies():
    state = _resolve("include=escape")
    assert "reUnescapedHtml" in state.include_vars
    assert "keys" in state.build_funcs


def test_alias_resolution():
    state = _resolve("include=collect,each")
    assert "map" in state.build_funcs
    assert "forEach" in state.build_funcs
    assert "collect" not in state.build_funcs


def test_alias_and_real_name_resolve_alike():
    assert _resolve("include=collect").build_funcs == _resolve("include=map").build_funcs


def test_find_where_is_find_outside_underscore():
    state = _resolve("include=findWhere")
    assert "find" in state.include_funcs
    assert "findWhere" not in state.build_funcs


def test_default_build():
    state = _resolve()
    assert set(LODASH_TABLES.lodash_funcs) <= set(state.build_funcs)
    assert "assign" in state.build_funcs
    assert "wrapperValueOf" in state.build_funcs
    assert "runInContext" in state.build_funcs


def test_default_build_resolves_backbone_aliases():
    state = _resolve("backbone")
    assert "assign" in state.build_funcs
    assert "wrapperValueOf" in state.build_funcs
    assert "extend" not in state.build_funcs
    assert "value" not in state.build_funcs


def test_minus_removes_dependants():
    state = _resolve("minus=forEach")
    assert "forEach" not in state.build_funcs
    assert "shuffle" not in state.build_funcs
    assert "invoke" not in state.build_funcs
    assert "compact" in state.build_funcs
    for name in state.build_funcs:
        assert "forEach" not in state.graph.dependencies_of(name)


def test_minus_keeps_unrelated_functions():
    state = _resolve("minus=clone")
    assert "clone" not in state.build_funcs
    assert "cloneDeep" in state.build_funcs
    assert "baseClone" in state.build_funcs


def test_plus_adds_to_include():
    state = _resolve("include=compact", "plus=identity")
    assert set(state.build_funcs) == {"compact", "identity"}


def test_none_sentinel():
    assert _resolve("include=none").build_funcs == []
    assert _resolve("include=none", "plus=isArray").build_funcs == ["isArray"]


def test_category_expansion():
    state = _resolve("category=arrays")
    assert set(state.include_funcs) == set(LODASH_TABLES.categories["Arrays"])


def test_category_skips_properties():
    state = _resolve("category=utilities")
    assert "templateSettings" not in state.include_funcs
    assert "identity" in state.include_funcs


def test_category_limited_to_backbone_dependencies():
    state = _resolve("backbone", "category=arrays")
    assert set(state.include_funcs) == {
        "first", "indexOf", "initial", "last", "lastIndexOf", "rest", "sortedIndex", "without",
    }


def test_include_property_only():
    state = _resolve("include=templateSettings")
    assert state.include_props[0] == "templateSettings"
    assert "escape" in state.build_funcs
    assert "template" not in state.build_funcs


def test_include_variable_only():
    state = _resolve("include=htmlUnescapes")
    assert "htmlUnescapes" in state.include_vars
    assert "htmlEscapes" in state.include_vars


def test_modularize_drops_run_in_context():
    state = _resolve("modularize", "include=runInContext,compact")
    assert "runInContext" not in state.build_funcs
    assert "compact" in state.build_funcs


def test_invalid_entry_raises():
    with pytest.raises(InvalidDirectiveError) as excinfo:
        _resolve("include=fooBar")
    assert excinfo.value.warnings == ["Invalid `include` entry passed: fooBar"]


def test_exclusive_flags_raise():
    with pytest.raises(InvalidDirectiveError):
        prepare_state(BuildDirectives(legacy=True, modern=True))


def test_graph_not_shared_between_builds():
    _resolve("legacy", "include=keys")
    state = _resolve("include=keys")
    assert "shimKeys" in state.build_funcs
    assert state.graph.funcs["keys"] == ["isArguments", "isObject", "shimKeys"]


def test_minus_drops_private_dependencies_of_excluded_function():
    state = _resolve("include=clone,compact", "minus=clone")
    assert state.build_funcs == ["compact"]
    assert "baseClone" not in state.build_funcs


def test_category_label():
    assert category_label("arrays") == "Arrays"
    assert category_label("OBJECTS") == "Objects"
    assert category_label("") == ""
