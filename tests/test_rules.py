"""Tests for the environment rule engine."""

import pytest

from custom_build.models import BuildDirectives
from custom_build.resolver import normalize_directives
from custom_build.rules import (
    GRAPH_RULES,
    PRE_RESOLUTION_RULES,
    PromoteFork,
    RuleSet,
    Substitute,
    SupportFlag,
    Transplant,
    apply_environment,
    apply_pre_resolution,
)
from custom_build.state import BuildState


def _state(**flags) -> BuildState:
    state = BuildState.create(BuildDirectives(**flags))
    apply_pre_resolution(state)
    normalize_directives(state)
    apply_environment(state)
    return state


def test_rule_order_is_registration_order():
    names = GRAPH_RULES.names()
    assert names[0] == "legacy"
    assert names.index("chaining") < names.index("underscore-lodash")
    assert names.index("inline-iterators") < names.index("support-props")
    assert names[-1] == "template-iterator-checks"
    assert len(names) == len(set(names))


def test_duplicate_rule_rejected():
    rules = RuleSet("scratch")

    @rules.rule("one")
    def first(state):
        pass

    with pytest.raises(ValueError):
        @rules.rule("one")
        def second(state):
            pass


def test_rule_guard_and_record():
    rules = RuleSet("scratch")
    calls = []

    @rules.rule("always")
    def always(state):
        calls.append("always")

    @rules.rule("never", when=lambda state: False)
    def never(state):
        calls.append("never")

    state = BuildState.create(BuildDirectives())
    assert rules.apply(state) == ["always"]
    assert calls == ["always"]
    assert state.rules_fired == ["always"]
    assert len(rules) == 2


def test_default_build_rules():
    state = _state()
    assert "chaining" in state.rules_fired
    assert "legacy" not in state.rules_fired
    assert "support-props" not in state.rules_fired
    assert "wrapperValueOf" in state.graph.funcs["lodashWrapper"]


def test_rules_do_not_touch_tables():
    from custom_build.graph import LODASH_TABLES

    _state(legacy=True)
    assert LODASH_TABLES.func_deps["keys"] == ("isArguments", "isObject", "shimKeys")


def test_find_where_dropped_outside_underscore():
    state = BuildState.create(BuildDirectives())
    assert apply_pre_resolution(state) == ["find-where-alias"]
    assert "findWhere" not in state.graph.funcs
    assert state.graph.resolve_real_name("findWhere") == "find"


def test_find_where_kept_for_underscore():
    state = BuildState.create(BuildDirectives(underscore=True))
    assert apply_pre_resolution(state) == []
    assert "findWhere" in state.graph.funcs


def test_legacy_uses_shims():
    state = _state(legacy=True)
    assert "legacy" in state.rules_fired
    assert state.graph.funcs["keys"] == state.graph.funcs["shimKeys"]
    assert "reNative" not in state.graph.vars["isArray"]
    assert Transplant("keys", "shimKeys") in state.edits
    assert PromoteFork("isArguments") in state.edits
    assert SupportFlag("argsClass", "false") in state.edits


def test_modern_inlines_iterators_and_support():
    state = _state(modern=True)
    for name in ("inline-iterators", "support-props", "modern-source", "desktop-collections"):
        assert name in state.rules_fired
    assert "createIterator" not in state.graph.funcs["forOwn"]
    assert "support" not in state.graph.props["isArguments"]
    assert any(isinstance(edit, Substitute) and edit.name == "forOwn" for edit in state.edits)
    assert SupportFlag("argsClass", "true", inline=True) in state.edits


def test_mobile_keeps_keys_support():
    state = _state(mobile=True)
    assert "desktop-collections" not in state.rules_fired
    assert state.graph.props["keys"] == ["support"]
    assert "mobile" in state.rules_fired


def test_underscore_clone():
    state = _state(underscore=True)
    deps = state.graph.funcs["clone"]
    assert "baseClone" not in deps
    assert {"assign", "isArray", "isObject"} <= set(deps)
    assert any(isinstance(edit, Substitute) and edit.name == "clone" for edit in state.edits)


def test_underscore_lodash_clone_keeps_deep_clone():
    state = _state(underscore=True, plus=["clone"])
    assert "baseClone" in state.graph.funcs["clone"]


def test_first_substitute_wins():
    state = _state(modern=True)
    names = [edit.name for edit in state.edits if isinstance(edit, Substitute)]
    assert len(names) == len(set(names))


def test_pre_resolution_rules_registered():
    assert PRE_RESOLUTION_RULES.names() == ["find-where-alias"]
