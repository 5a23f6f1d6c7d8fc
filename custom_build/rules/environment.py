"""Environment rules, in the order they must run.

Each rule rewrites the build's dependency graph for one environment flag
(or combination) and queues the source edits that keep the emitted code in
step with the rewritten graph. Later rules see the graph as earlier rules
left it, so registration order is part of the contract.
"""

from __future__ import annotations

import re

from custom_build.rules.base import RuleSet
from custom_build.rules.bodies import (
    FIND_WHERE,
    INLINED_ITERATORS,
    MODERN_BODIES,
    UNDERSCORE_BODIES,
)
from custom_build.rules.edits import (
    InsertAfter,
    PromoteFork,
    Rewrite,
    Substitute,
    SupportFlag,
    Transplant,
)
from custom_build.state import BuildState

PRE_RESOLUTION_RULES = RuleSet("pre-resolution")
GRAPH_RULES = RuleSet("graph")

ITERATOR_OPTIONS = ("defaultsIteratorOptions", "eachIteratorOptions", "forOwnIteratorOptions")

# Values `support` flags take in every environment a modern or Underscore build targets
MODERN_SUPPORT = (
    ("argsClass", "true"),
    ("argsObject", "true"),
    ("nonEnumShadows", "false"),
    ("ownLast", "false"),
    ("unindexedChars", "false"),
    ("nodeClass", "true"),
)
DESKTOP_SUPPORT = (
    ("enumErrorProps", "false"),
    ("enumPrototypes", "false"),
    ("nonEnumArgs", "false"),
)

EXIT_EARLY_FUNCS = ("forEach", "forEachRight", "forIn", "forInRight", "forOwn", "forOwnRight")


def _pull(state: BuildState, name: str, *deps: str, table: str = "funcs") -> None:
    for dep in deps:
        state.graph.remove_edge(name, dep, table)


def _push(state: BuildState, name: str, *deps: str, table: str = "funcs") -> None:
    for dep in deps:
        state.graph.add_edge(name, dep, table)


def _substitute(state: BuildState, name: str, body: str) -> None:
    """Queue a body substitution unless an earlier rule already replaced name."""
    if any(isinstance(edit, Substitute) and edit.name == name for edit in state.edits):
        return
    state.queue(Substitute(name, body))


def _none_lodash(state: BuildState, *names: str) -> bool:
    return not any(state.is_lodash(name) for name in names)


def _unexposed(state: BuildState, name: str) -> bool:
    """Neither name nor anything depending on it was asked for with Lo-Dash semantics."""
    related = state.graph.dependants_of(name) + [name]
    return _none_lodash(state, *related)


def _modern_or_underscore(state: BuildState) -> bool:
    return state.env.modern or state.env.underscore


def _desktop(state: BuildState) -> bool:
    return _modern_or_underscore(state) and not state.env.mobile


# ── Pre-resolution ───────────────────────────────────────────


@PRE_RESOLUTION_RULES.rule(
    "find-where-alias",
    when=lambda s: not s.env.underscore or s.is_lodash("findWhere"),
)
def drop_find_where(state: BuildState) -> None:
    """Untrack `findWhere` so it resolves as an alias of `find`."""
    state.graph.remove_identifier("findWhere")


# ── Graph rules ──────────────────────────────────────────────


@GRAPH_RULES.rule("legacy", when=lambda s: s.env.legacy)
def legacy(state: BuildState) -> None:
    """Target pre-ES5 environments: shims replace native-backed implementations."""
    graph = state.graph
    _pull(state, "createBound", "support", table="props")
    graph.replace_dependencies("isPlainObject", graph.funcs["shimIsPlainObject"])
    graph.replace_dependencies("keys", graph.funcs["shimKeys"])
    for name in list(graph.vars):
        _pull(state, name, "reNative", table="vars")

    state.queue(SupportFlag("fastBind"))
    state.queue(SupportFlag("argsClass", "false"))

    def keep_fallback(match: re.Match) -> str:
        snippet = re.sub(r"^  ", "", match.group(2), flags=re.M)
        return re.sub(r"^( *)bound(?= *=)", r"\1var bound", snippet, count=1, flags=re.M)

    state.queue(Rewrite(
        r"(?:\s*//.*)*\n( *)if *\([^{]+?nativeBind[\s\S]+?\n\1else *\{([\s\S]+?)\n\1\}",
        keep_fallback, within="createBound", count=1,
    ))
    state.queue(Rewrite(r"\bnativeIsArray\s*\|\|\s*", "", within="isArray", count=1))
    state.queue(PromoteFork("createObject"))
    state.queue(PromoteFork("isArguments"))
    state.queue(Transplant("isPlainObject", "shimIsPlainObject"))
    state.queue(Transplant("keys", "shimKeys"))


@GRAPH_RULES.rule("modularize", when=lambda s: s.env.modularize)
def modularize(state: BuildState) -> None:
    _push(state, "lodash", "support", "baseEach", "forOwn", "mixin")
    _pull(state, "mixin", "lodash")


@GRAPH_RULES.rule("chaining", when=lambda s: not s.env.modularize)
def chaining(state: BuildState) -> None:
    """Wire the wrapper methods together; this intentionally forms cycles."""
    _push(state, "chain", "wrapperChain")
    _push(state, "wrapperValueOf", "baseEach", "chain", "forOwn", "mixin",
          "wrapperChain", "wrapperToString")
    for name in ("lodashWrapper", "tap", "wrapperChain", "wrapperToString"):
        _push(state, name, "wrapperValueOf")


@GRAPH_RULES.rule("mobile", when=lambda s: s.env.mobile)
def mobile(state: BuildState) -> None:
    for name in ("assign", "defaults"):
        _pull(state, name, "keys")


@GRAPH_RULES.rule(
    "no-bind-data",
    when=lambda s: s.env.legacy or s.env.mobile or s.env.underscore,
)
def no_bind_data(state: BuildState) -> None:
    for name in ("baseCreateCallback", "createBound"):
        _pull(state, name, "setBindData")


@GRAPH_RULES.rule(
    "mixin-without-isFunction",
    when=lambda s: not s.env.modularize and ("chain" in s.plus_funcs) == (not s.env.underscore),
)
def mixin_without_is_function(state: BuildState) -> None:
    _pull(state, "mixin", "isFunction")


# ── Underscore compatibility ──


@GRAPH_RULES.rule(
    "underscore-clone",
    when=lambda s: s.env.underscore and _none_lodash(s, "baseClone", "clone", "cloneDeep"),
)
def underscore_clone(state: BuildState) -> None:
    _pull(state, "clone", "baseClone")
    _push(state, "clone", "assign", "isArray", "isObject")
    _substitute(state, "clone", UNDERSCORE_BODIES["clone"])


@GRAPH_RULES.rule(
    "underscore-isEqual",
    when=lambda s: s.env.underscore and _none_lodash(s, "baseIsEqual", "isEqual"),
)
def underscore_is_equal(state: BuildState) -> None:
    _pull(state, "baseIsEqual", "isArguments")
    _substitute(state, "isEqual", UNDERSCORE_BODIES["isEqual"])
    _substitute(state, "baseIsEqual", UNDERSCORE_BODIES["baseIsEqual"])


@GRAPH_RULES.rule(
    "underscore-chain",
    when=lambda s: s.env.underscore and not s.is_lodash("chain"),
)
def underscore_chain(state: BuildState) -> None:
    _pull(state, "wrapperValueOf", "wrapperToString")


@GRAPH_RULES.rule(
    "underscore-contains",
    when=lambda s: s.env.underscore and not s.is_lodash("contains"),
)
def underscore_contains(state: BuildState) -> None:
    _pull(state, "contains", "isString")
    _substitute(state, "contains", UNDERSCORE_BODIES["contains"])


@GRAPH_RULES.rule(
    "underscore-flatten",
    when=lambda s: s.env.underscore and not s.is_lodash("flatten"),
)
def underscore_flatten(state: BuildState) -> None:
    _pull(state, "flatten", "map")
    _substitute(state, "flatten", UNDERSCORE_BODIES["flatten"])


@GRAPH_RULES.rule(
    "underscore-isEmpty",
    when=lambda s: s.env.underscore and not s.is_lodash("isEmpty"),
)
def underscore_is_empty(state: BuildState) -> None:
    state.graph.replace_dependencies("isEmpty", ["isArray", "isString"])
    _substitute(state, "isEmpty", UNDERSCORE_BODIES["isEmpty"])


@GRAPH_RULES.rule("underscore-lodash", when=lambda s: s.env.underscore)
def underscore_lodash(state: BuildState) -> None:
    if not state.is_lodash("lodash"):
        _pull(state, "lodash", "isArray")
    _substitute(state, "lodash", UNDERSCORE_BODIES["lodash"])


@GRAPH_RULES.rule(
    "underscore-pick",
    when=lambda s: s.env.underscore and not s.is_lodash("pick"),
)
def underscore_pick(state: BuildState) -> None:
    _pull(state, "pick", "forIn", "isObject")
    _substitute(state, "pick", UNDERSCORE_BODIES["pick"])


@GRAPH_RULES.rule(
    "underscore-template",
    when=lambda s: s.env.underscore and not s.is_lodash("template"),
)
def underscore_template(state: BuildState) -> None:
    _pull(state, "template", "keys", "values")
    _substitute(state, "template", UNDERSCORE_BODIES["template"])


@GRAPH_RULES.rule(
    "underscore-toArray",
    when=lambda s: s.env.underscore and not s.is_lodash("toArray"),
)
def underscore_to_array(state: BuildState) -> None:
    _push(state, "toArray", "isArray", "map")
    _substitute(state, "toArray", UNDERSCORE_BODIES["toArray"])


@GRAPH_RULES.rule(
    "underscore-where",
    when=lambda s: s.env.underscore and not (s.is_lodash("findWhere") and s.is_lodash("where")),
)
def underscore_where(state: BuildState) -> None:
    _pull(state, "createCallback", "baseIsEqual")
    _push(state, "where", "find", "isEmpty")

    if not state.is_lodash("where"):
        _substitute(state, "where", UNDERSCORE_BODIES["where"])
        state.queue(Rewrite(r"^(( *)var props *=.+?),[\s\S]+?\n\2\}", r"\1;",
                            within="createCallback", count=1, flags=re.M))
        state.queue(Rewrite(r"=.+?\bbaseIsEqual\((.+?), *(.+?),.+?\)", r"= \1 === \2",
                            within="createCallback", count=1))
    if not state.is_lodash("findWhere") and not state.is_lodash("where"):
        state.queue(InsertAfter("find", FIND_WHERE))
        state.queue(Rewrite(r"^( *lodash\.findWhere *= *).+", r"\1findWhere;",
                            count=1, flags=re.M))


@GRAPH_RULES.rule(
    "underscore-exit-early",
    when=lambda s: s.env.underscore and _none_lodash(s, *EXIT_EARLY_FUNCS),
)
def underscore_exit_early(state: BuildState) -> None:
    """Callbacks stop iteration by returning a private marker instead of `false`."""
    users = (
        "baseEach", "forEach", "forIn", "forInRight", "forOwn", "forOwnRight",
        "findLast", "forEachRight", "transform",
        "baseIsEqual", "shimIsPlainObject",
        "contains", "every", "find", "findKey", "some",
        "findLastKey",
    )
    for name in users:
        _push(state, name, "indicatorObject", table="vars")

    for name in ("baseEach", "forEach", "forIn", "forInRight", "forOwn", "forOwnRight"):
        state.queue(Rewrite(r"=== *false\)", "=== indicatorObject)", within=name))
    for name in ("forEachRight", "transform"):
        state.queue(Rewrite(r"return callback[^)]+\)", r"\g<0> === false && indicatorObject",
                            within=name, count=1))
    for name in ("baseIsEqual", "every"):
        state.queue(Rewrite(r"\(result *= *(.+?)\);", r"!(result = \1) && indicatorObject;",
                            within=name))
    for name in ("find", "findKey", "findLast", "findLastKey", "shimIsPlainObject"):
        state.queue(Rewrite(r"return false", "return indicatorObject", within=name, count=1))
    for name in ("contains", "some"):
        state.queue(Rewrite(r"!\(result *= *(.+?)\);", r"(result = \1) && indicatorObject;",
                            within=name, count=1))


@GRAPH_RULES.rule("underscore-index-of", when=lambda s: s.env.underscore)
def underscore_index_of(state: BuildState) -> None:
    """Plain `indexOf` scans replace the large-array caches."""
    for name in ("baseUniq", "difference", "intersection"):
        exposed = (not _none_lodash(state, "baseUniq", "uniq")) if name == "baseUniq" \
            else state.is_lodash(name)
        if not exposed:
            _pull(state, name, "cacheIndexOf", "createCache")
            _push(state, name, "getIndexOf")
            _substitute(state, name, UNDERSCORE_BODIES[name])


@GRAPH_RULES.rule("underscore-callbacks", when=lambda s: s.env.underscore)
def underscore_callbacks(state: BuildState) -> None:
    for name in ("isEqual", "omit", "pick"):
        exposed = (not _none_lodash(state, "baseIsEqual", "isEqual")) if name == "isEqual" \
            else state.is_lodash(name)
        if not exposed:
            _pull(state, name, "baseCreateCallback", "createCallback")
    if not state.is_lodash("omit"):
        _substitute(state, "omit", UNDERSCORE_BODIES["omit"])


@GRAPH_RULES.rule("underscore-slice", when=lambda s: s.env.underscore)
def underscore_slice(state: BuildState) -> None:
    for name, deps in list(state.graph.funcs.items()):
        if not _unexposed(state, name):
            continue
        if "charAtCallback" in deps:
            _pull(state, name, "charAtCallback", "isArray", "isString")
        if "slice" in deps:
            _pull(state, name, "slice")

    for name in ("first", "initial", "last", "rest", "toArray"):
        if not state.is_lodash(name):
            state.queue(Rewrite(r"([^\w.])slice\(", r"\1nativeSlice.call(", within=name))
    if _none_lodash(state, "baseClone", "clone", "cloneDeep"):
        state.queue(Rewrite(r"([^\w.])slice\(", r"\1nativeSlice.call(", within="clone"))
    for name in ("max", "min"):
        if not state.is_lodash(name):
            state.queue(Rewrite(r"=.+?callback *&& *isString[^:]+:\s*", "= ", within=name))


@GRAPH_RULES.rule("underscore-pools", when=lambda s: s.env.underscore)
def underscore_pools(state: BuildState) -> None:
    for name in list(state.graph.vars):
        if not state.is_lodash(name):
            _pull(state, name, "arrayPool", "largeArraySize", "maxPoolSize", "objectPool",
                  table="vars")


@GRAPH_RULES.rule("underscore-source", when=lambda s: s.env.underscore)
def underscore_source(state: BuildState) -> None:
    """Simpler Underscore-compatible bodies for functions not requested with Lo-Dash semantics."""
    for name in ("assign", "defaults", "memoize", "result", "sortBy", "throttle",
                 "times", "uniqueId", "zip"):
        if not state.is_lodash(name):
            _substitute(state, name, UNDERSCORE_BODIES[name])

    if not state.is_lodash("createCallback"):
        state.queue(Rewrite(r"\blodash\.(createCallback\()", r"\1"))
    if not state.is_lodash("range"):
        state.queue(Rewrite(r"typeof *step[^:]+:", "", within="range", count=1))
        state.queue(Rewrite(r"\(step.*\|\|.+?\)", "step", within="range", count=1))
    if not state.env.modularize:
        state.queue(Rewrite(r",[^']*'imports':[^}]+}", "", count=1))
        state.queue(Rewrite(r"hasOwnProperty\.call\((\w+), *'__wrapped__'\)", r"\1 instanceof lodash",
                            within="baseIsEqual"))

    for name in ("baseEach", "forEach", "forEachRight"):
        if name == "baseEach" or not state.is_lodash(name):
            state.queue(Rewrite(r"\n *return .+?([}\s]+)$", r"\1", within=name, count=1))
    for name in ("forEachRight", "forIn", "forOwn"):
        if not state.is_lodash(name):
            state.queue(Rewrite(r"(callback), *thisArg", r"\1", within=name))
            state.queue(Rewrite(r"^ *callback *=.+\n", "", within=name, count=1, flags=re.M))
    for name in ("assign", "createCallback", "eachRight", "forEachRight", "forIn",
                 "forOwn", "isPlainObject", "unzip", "zipObject"):
        if not state.is_lodash(name):
            state.queue(Rewrite(r"^(?: *//.*\s*)* *lodash\." + name + r" *=[\s\S]+?;\n", "",
                                count=1, flags=re.M))


@GRAPH_RULES.rule(
    "underscore-chaining",
    when=lambda s: ("chain" in s.plus_funcs) == (not s.env.underscore),
)
def underscore_chaining(state: BuildState) -> None:
    """Underscore-style wrapper methods: every mixed-in function is chainable."""
    state.queue(Rewrite(r"^ *lodash\.prototype\.(?:toString|valueOf) *=.+\n", "", flags=re.M))
    state.queue(Rewrite(r"(?:\s*//.*)*\n( *)forOwn\(lodash,[\s\S]+?\n\1\}.+", ""))
    if state.env.modularize:
        state.queue(Substitute("mixin", _MIXIN_WITH_SOURCE))
    else:
        state.queue(Substitute("mixin", _MIXIN))
    state.queue(Rewrite(r"(?:\s*//.*)*\s*mixin\(lodash\).+", "", count=1))
    state.queue(Rewrite(
        r"(?:\n */\*[^*]*\*+(?:[^/][^*]*\*+)*/)?\n( *)lodash\.VERSION",
        lambda m: "\n" + m.group(1) + "// add functions to `lodash.prototype`\n"
        + m.group(1) + "mixin(lodash);\n" + m.group(0),
        count=1,
    ))


_MIXIN = r"""
function mixin(object) {
  forEach(functions(object), function(methodName) {
    var func = lodash[methodName] = object[methodName];

    lodash.prototype[methodName] = function() {
      var args = [this.__wrapped__];
      push.apply(args, arguments);

      var result = func.apply(lodash, args);
      if (this.__chain__) {
        result = new lodashWrapper(result);
        result.__chain__ = true;
      }
      return result;
    };
  });
}
"""

_MIXIN_WITH_SOURCE = r"""
function mixin(object, source) {
  var ctor = object,
      isFunc = !source || isFunction(ctor);

  if (!source) {
    ctor = lodashWrapper;
    source = object;
    object = lodash;
  }
  forEach(functions(source), function(methodName) {
    var func = object[methodName] = source[methodName];
    if (isFunc) {
      ctor.prototype[methodName] = function() {
        var args = [this.__wrapped__];
        push.apply(args, arguments);

        var result = func.apply(object, args);
        if (this.__chain__) {
          result = new ctor(result);
          result.__chain__ = true;
        }
        return result;
      };
    }
  });
}
"""


# ── Modern and Underscore builds ──


@GRAPH_RULES.rule("inline-iterators", when=_modern_or_underscore)
def inline_iterators(state: BuildState) -> None:
    """Iteration helpers stop going through the `createIterator` template compiler."""
    for name in ("assign", "baseEach", "defaults", "forIn", "forOwn", "shimKeys"):
        if state.env.underscore and state.is_lodash(name):
            continue
        _pull(state, name, "createIterator")
        _pull(state, name, *ITERATOR_OPTIONS, table="vars")
        _push(state, name, "objectTypes", table="vars")
        if name != "baseEach":
            _push(state, name, "isArguments")
        if name not in ("defaults", "shimKeys"):
            _push(state, name, "baseCreateCallback")
        if name not in ("forIn", "shimKeys"):
            _push(state, name, "keys")
        _substitute(state, name, INLINED_ITERATORS[name])


@GRAPH_RULES.rule("support-props", when=_modern_or_underscore)
def support_props(state: BuildState) -> None:
    """Feature detection collapses to the values every target environment has."""
    for name in list(state.graph.props):
        if name == "createBound":
            continue
        if state.env.mobile and name == "keys":
            continue
        if state.env.underscore and state.is_lodash(name):
            continue
        _pull(state, name, "support", table="props")

    state.queue(Rewrite(r"if *\(!support\.argsClass\)", "if (!isArguments(arguments))"))
    flags = MODERN_SUPPORT if state.env.mobile else MODERN_SUPPORT + DESKTOP_SUPPORT
    for flag, value in flags:
        state.queue(SupportFlag(flag, value, inline=True))


@GRAPH_RULES.rule("native-type-checks", when=_modern_or_underscore)
def native_type_checks(state: BuildState) -> None:
    for name, deps in state.graph.funcs.items():
        if "isNode" in deps:
            _pull(state, name, "isNode")
        if "toString" in deps and name not in ("contains", "parseInt"):
            _pull(state, name, "isString")


@GRAPH_RULES.rule("underscore-object-pools", when=lambda s: s.env.underscore)
def underscore_object_pools(state: BuildState) -> None:
    for name, deps in list(state.graph.funcs.items()):
        if not _unexposed(state, name):
            continue
        if "releaseArray" in deps:
            _pull(state, name, "getArray", "releaseArray")
        if "releaseObject" in deps:
            _pull(state, name, "getObject", "releaseObject")


@GRAPH_RULES.rule("desktop-collections", when=_desktop)
def desktop_collections(state: BuildState) -> None:
    """Array fast paths; objects iterate with `forOwn` instead of `baseEach`."""
    underscore = state.env.underscore
    _pull(state, "setBindData", "noop")

    for name in ("baseClone", "lodash", "transform", "wrapperValueOf"):
        _pull(state, name, "baseEach")
        _push(state, name, "forEach")
    for name in ("contains", "every", "filter", "find", "forEach", "map", "max", "min",
                 "reduce", "some"):
        _pull(state, name, "baseEach")
        _push(state, name, "forOwn")
    for name in ("every", "find", "filter", "forEach", "forIn", "forOwn", "map", "reduce",
                 "shimKeys"):
        if not (underscore and state.is_lodash(name)):
            _pull(state, name, "isArray")
    for name in ("max", "min"):
        if not (underscore and state.is_lodash(name)):
            _push(state, name, "forEach")
    for name, deps in state.graph.funcs.items():
        if name != "baseFlatten" and "isArguments" in deps \
                and not (underscore and state.is_lodash(name)):
            _pull(state, name, "isArguments")

    for name in ("forEach", "map", "pluck"):
        _substitute(state, name, MODERN_BODIES[name])
    if not underscore or state.is_lodash("isRegExp"):
        _substitute(state, "isRegExp", MODERN_BODIES["isRegExp"])

    for name in ("every", "filter", "find", "max", "min", "reduce", "some"):
        _queue_length_check(state, name)
    state.queue(Rewrite(r"^( *'array':)[^,]+", r"\1 false", within="eachIteratorOptions",
                        count=1, flags=re.M))

    state.queue(Rewrite(r"\bbaseEach(?=\(collection)", "forOwn"))
    state.queue(Rewrite(r"(\?\s*)baseEach(?=\s*:)", r"\1forEach"))
    state.queue(Rewrite(r"\bbaseEach(?=\(\[')", "forEach"))


def _queue_length_check(state: BuildState, name: str) -> None:
    """Replace an `isArray(collection)` branch with a `typeof length` check."""
    if name == "reduce":
        state.queue(Rewrite(r"^( *)var noaccum\b", r"\1if (!collection) return accumulator;\n\g<0>",
                            within=name, count=1, flags=re.M))
    elif name in ("max", "min"):
        state.queue(Rewrite(r"\bbaseEach\(", "forEach(", within=name, count=1))
        if not state.env.underscore or state.is_lodash(name):
            return

    length_source = ".length" if name == "reduce" else " ? collection.length : 0"

    def swap(match: re.Match) -> str:
        statement, indent, declarations = match.group(1), match.group(2), match.group(3)
        declarations = re.sub(r"\b(length *=)[^;=]+", lambda m: m.group(1) + " collection" + length_source,
                              declarations, count=1)
        declarations = re.sub("^  " + indent, indent, declarations, flags=re.M)
        return declarations + re.sub(r"\bisArray\([^)]+\)", "typeof length == 'number'", statement, count=1)

    state.queue(Rewrite(
        r"^(( *)if *\(.*?\bisArray\([^)]+\).*?\) *\{\n)(( *)var index[^;]+.+\n+)",
        swap, within=name, count=1, flags=re.M,
    ))


@GRAPH_RULES.rule("modern-source", when=lambda s: s.env.modern)
def modern_source(state: BuildState) -> None:
    state.queue(SupportFlag("spliceObjects"))
    if state.env.mobile:
        state.queue(SupportFlag("enumPrototypes", "true"))
        state.queue(SupportFlag("nonEnumArgs", "true"))
    else:
        state.queue(Rewrite(r"\+new Date\b", "now()", within="debounce"))
        state.queue(Rewrite(r"!getPrototypeOf[^:]+:\s*", "", within="isPlainObject", count=1))


@GRAPH_RULES.rule(
    "es5-bind-data",
    when=lambda s: not s.env.modern or s.env.mobile,
)
def es5_bind_data(state: BuildState) -> None:
    """Drop `__bindData__` bookkeeping from the bind helpers."""
    state.queue(Rewrite(r"(?:\s*//.*)*\n( *)var bindData *=[\s\S]+?\n\1\}", "",
                        within="createBound", count=1))
    state.queue(Rewrite(r"(?:\s*//.*)*\n.+bindData *= *nativeSlice.+", "",
                        within="createBound", count=1))
    state.queue(Rewrite(r"(?:\s*//.*)*\n.+?setBindData.+", "", within="createBound", count=1))
    state.queue(Rewrite(r"(?:\s*//.*)*\n( *)var bindData *=[\s\S]+?\n\1\}", "",
                        within="baseCreateCallback", count=1))
    state.queue(Rewrite(r"(?:\s*//.*)*\n( *)if *\(bindData[\s\S]+?\n\1\}", "",
                        within="baseCreateCallback", count=1))


@GRAPH_RULES.rule("modularize-index-of", when=lambda s: s.env.modularize)
def modularize_index_of(state: BuildState) -> None:
    for name, deps in state.graph.funcs.items():
        if "getIndexOf" in deps:
            _pull(state, name, "getIndexOf")
            _push(state, name, "baseIndexOf")


@GRAPH_RULES.rule("template-iterator-checks")
def template_iterator_checks(state: BuildState) -> None:
    """`template` no longer guards on the compiled iterator template existing."""
    state.queue(Rewrite(r"iteratorTemplate *&& *", "", within="template"))
    state.queue(Rewrite(r"iteratorTemplate\s*\?\s*([^:]+?)\s*:[^,;]+", r"\1", within="template"))
