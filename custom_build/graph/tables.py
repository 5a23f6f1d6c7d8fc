"""Canonical dependency, alias and category tables for the Lo-Dash source.

These tables are process-wide reference data. They are exposed through
read-only mappings of tuples; a build mutates a ``DependencyGraph`` clone,
never these objects.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


def _freeze(table: dict[str, list[str]]) -> Mapping[str, tuple[str, ...]]:
    return MappingProxyType({key: tuple(value) for key, value in table.items()})


_ALIAS_TO_REAL = {
    "all": "every",
    "any": "some",
    "collect": "map",
    "detect": "find",
    "drop": "rest",
    "each": "forEach",
    "eachRight": "forEachRight",
    "extend": "assign",
    "findWhere": "find",
    "foldl": "reduce",
    "foldr": "reduceRight",
    "head": "first",
    "include": "contains",
    "inject": "reduce",
    "methods": "functions",
    "object": "zipObject",
    "select": "filter",
    "tail": "rest",
    "take": "first",
    "unique": "uniq",
    "unzip": "zip",
    "value": "wrapperValueOf",
}

_REAL_TO_ALIAS = {
    "assign": ["extend"],
    "contains": ["include"],
    "every": ["all"],
    "filter": ["select"],
    "find": ["detect", "findWhere"],
    "first": ["head", "take"],
    "forEach": ["each"],
    "forEachRight": ["eachRight"],
    "functions": ["methods"],
    "map": ["collect"],
    "reduce": ["foldl", "inject"],
    "reduceRight": ["foldr"],
    "rest": ["drop", "tail"],
    "some": ["any"],
    "uniq": ["unique"],
    "wrapperValueOf": ["value"],
    "zip": ["unzip"],
    "zipObject": ["object"],
}

_FUNC_DEPENDENCIES = {
    # properties
    "templateSettings": ["escape"],

    # variables
    "defaultsIteratorOptions": ["keys"],
    "eachIteratorOptions": ["keys"],
    "htmlUnescapes": ["invert"],
    "reEscapedHtml": ["keys"],
    "reUnescapedHtml": ["keys"],

    # public functions
    "after": ["isFunction"],
    "assign": ["createIterator"],
    "at": ["baseFlatten", "isString"],
    "bind": ["createBound"],
    "bindAll": ["baseFlatten", "bind", "functions"],
    "bindKey": ["createBound"],
    "chain": ["lodashWrapper"],
    "clone": ["baseClone", "baseCreateCallback"],
    "cloneDeep": ["baseClone", "baseCreateCallback"],
    "compact": [],
    "compose": ["isFunction"],
    "contains": ["baseEach", "getIndexOf", "isString"],
    "countBy": ["createAggregator"],
    "createCallback": ["baseCreateCallback", "baseIsEqual", "isObject", "keys"],
    "curry": ["createBound"],
    "debounce": ["isFunction", "isObject"],
    "defaults": ["createIterator"],
    "defer": ["isFunction"],
    "delay": ["isFunction"],
    "difference": ["baseFlatten", "cacheIndexOf", "createCache", "getIndexOf", "releaseObject"],
    "escape": ["escapeHtmlChar", "keys"],
    "every": ["baseEach", "createCallback", "isArray"],
    "filter": ["baseEach", "createCallback", "isArray"],
    "find": ["baseEach", "createCallback", "isArray"],
    "findIndex": ["createCallback"],
    "findLastIndex": ["createCallback"],
    "findKey": ["createCallback", "forOwn"],
    "findLast": ["createCallback", "forEachRight"],
    "findLastKey": ["createCallback", "forOwnRight"],
    "first": ["createCallback", "slice"],
    "flatten": ["baseFlatten", "map"],
    "forEach": ["baseCreateCallback", "baseEach", "isArray"],
    "forEachRight": ["baseCreateCallback", "forEach", "isString", "keys"],
    "forIn": ["createIterator"],
    "forInRight": ["baseCreateCallback", "forIn"],
    "forOwn": ["createIterator"],
    "forOwnRight": ["baseCreateCallback", "keys"],
    "functions": ["forIn", "isFunction"],
    "groupBy": ["createAggregator"],
    "has": [],
    "identity": [],
    "indexBy": ["createAggregator"],
    "indexOf": ["baseIndexOf", "sortedIndex"],
    "initial": ["createCallback", "slice"],
    "intersection": ["cacheIndexOf", "createCache", "getArray", "getIndexOf", "releaseArray", "releaseObject"],
    "invert": ["keys"],
    "invoke": ["forEach"],
    "isArguments": [],
    "isArray": [],
    "isBoolean": [],
    "isDate": [],
    "isElement": [],
    "isEmpty": ["forOwn", "isArguments", "isFunction"],
    "isEqual": ["baseCreateCallback", "baseIsEqual"],
    "isFinite": [],
    "isFunction": [],
    "isNaN": ["isNumber"],
    "isNull": [],
    "isNumber": [],
    "isObject": [],
    "isPlainObject": ["isArguments", "shimIsPlainObject"],
    "isRegExp": [],
    "isString": [],
    "isUndefined": [],
    "keys": ["isArguments", "isObject", "shimKeys"],
    "last": ["createCallback", "slice"],
    "lastIndexOf": [],
    "lodash": ["isArray", "lodashWrapper"],
    "map": ["baseEach", "createCallback", "isArray"],
    "max": ["baseEach", "charAtCallback", "createCallback", "isArray", "isString"],
    "memoize": ["isFunction"],
    "merge": ["baseCreateCallback", "baseMerge", "getArray", "isObject", "releaseArray"],
    "min": ["baseEach", "charAtCallback", "createCallback", "isArray", "isString"],
    "mixin": ["forEach", "functions", "isFunction", "lodash"],
    "noConflict": [],
    "omit": ["baseFlatten", "createCallback", "forIn", "getIndexOf"],
    "once": ["isFunction"],
    "pairs": ["keys"],
    "parseInt": ["isString"],
    "partial": ["createBound"],
    "partialRight": ["createBound"],
    "pick": ["baseFlatten", "createCallback", "forIn", "isObject"],
    "pluck": ["map"],
    "pull": [],
    "random": [],
    "range": [],
    "reduce": ["baseCreateCallback", "baseEach", "isArray"],
    "reduceRight": ["baseCreateCallback", "forEachRight"],
    "reject": ["createCallback", "filter"],
    "remove": ["createCallback"],
    "rest": ["createCallback", "slice"],
    "result": ["isFunction"],
    "runInContext": ["defaults", "pick"],
    "sample": ["random", "shuffle", "toArray"],
    "shuffle": ["forEach", "random"],
    "size": ["keys"],
    "some": ["baseEach", "createCallback", "isArray"],
    "sortBy": ["compareAscending", "createCallback", "forEach", "getObject", "releaseObject"],
    "sortedIndex": ["createCallback", "identity"],
    "tap": [],
    "template": ["defaults", "escape", "escapeStringChar", "keys", "values"],
    "throttle": ["debounce", "getObject", "isFunction", "isObject", "releaseObject"],
    "times": ["baseCreateCallback"],
    "toArray": ["isString", "slice", "values"],
    "transform": ["baseCreateCallback", "baseEach", "createObject", "forOwn", "isArray"],
    "unescape": ["keys", "unescapeHtmlChar"],
    "union": ["baseFlatten", "baseUniq"],
    "uniq": ["baseUniq", "createCallback"],
    "uniqueId": [],
    "values": ["keys"],
    "where": ["filter"],
    "without": ["difference"],
    "wrap": ["isFunction"],
    "wrapperChain": [],
    "wrapperToString": [],
    "wrapperValueOf": [],
    "zip": ["max", "pluck"],
    "zipObject": [],

    # private functions
    "baseClone": ["assign", "baseEach", "forOwn", "getArray", "isArray", "isObject", "isNode", "releaseArray", "slice"],
    "baseCreateCallback": ["bind", "identity", "setBindData"],
    "baseEach": ["createIterator"],
    "baseFlatten": ["isArguments", "isArray"],
    "baseIndexOf": [],
    "baseIsEqual": ["forIn", "getArray", "isArguments", "isFunction", "isNode", "releaseArray"],
    "baseMerge": ["forEach", "forOwn", "isArray", "isPlainObject"],
    "baseUniq": ["cacheIndexOf", "createCache", "getArray", "getIndexOf", "releaseArray", "releaseObject"],
    "cacheIndexOf": ["baseIndexOf"],
    "cachePush": [],
    "charAtCallback": [],
    "compareAscending": [],
    "createAggregator": ["createCallback", "forEach"],
    "createBound": ["createObject", "isFunction", "isObject", "setBindData"],
    "createCache": ["cachePush", "getObject", "releaseObject"],
    "createIterator": ["baseCreateCallback", "getObject", "isArguments", "isArray", "isString", "iteratorTemplate", "releaseObject"],
    "createObject": ["isObject", "noop"],
    "escapeHtmlChar": [],
    "escapeStringChar": [],
    "getArray": [],
    "getIndexOf": ["baseIndexOf", "indexOf"],
    "getObject": [],
    "isNode": [],
    "iteratorTemplate": [],
    "lodashWrapper": [],
    "noop": [],
    "releaseArray": [],
    "releaseObject": [],
    "setBindData": ["getObject", "noop", "releaseObject"],
    "shimIsPlainObject": ["forIn", "isArguments", "isFunction", "isNode"],
    "shimKeys": ["createIterator"],
    "slice": [],
    "unescapeHtmlChar": [],

    # used by the `backbone` and `underscore` builds
    "findWhere": ["where"],
}

_PROP_DEPENDENCIES = {
    "at": ["support"],
    "baseClone": ["support"],
    "baseIsEqual": ["support"],
    "bind": ["support"],
    "createBound": ["support"],
    "forEachRight": ["support"],
    "isArguments": ["support"],
    "isEmpty": ["support"],
    "isPlainObject": ["support"],
    "iteratorTemplate": ["support"],
    "keys": ["support"],
    "shimIsPlainObject": ["support"],
    "template": ["templateSettings"],
    "toArray": ["support"],
}

_VAR_DEPENDENCIES = {
    "assign": ["defaultsIteratorOptions"],
    "baseEach": ["eachIteratorOptions"],
    "baseIsEqual": ["objectTypes"],
    "baseUniq": ["largeArraySize"],
    "bind": ["reNative"],
    "cacheIndexOf": ["keyPrefix"],
    "cachePush": ["keyPrefix"],
    "createIterator": ["indicatorObject", "objectTypes"],
    "createBound": ["reNative"],
    "createObject": ["reNative"],
    "debounce": ["reNative"],
    "defaults": ["defaultsIteratorOptions"],
    "defer": ["objectTypes", "reNative"],
    "difference": ["largeArraySize"],
    "escape": ["reUnescapedHtml"],
    "escapeHtmlChar": ["htmlEscapes"],
    "forIn": ["eachIteratorOptions", "forOwnIteratorOptions"],
    "forOwn": ["eachIteratorOptions", "forOwnIteratorOptions"],
    "forOwnIteratorOptions": ["eachIteratorOptions"],
    "getArray": ["arrayPool"],
    "getObject": ["objectPool"],
    "htmlUnescapes": ["htmlEscapes"],
    "intersection": ["largeArraySize"],
    "isArray": ["reNative"],
    "isObject": ["objectTypes"],
    "isPlainObject": ["reNative"],
    "isRegExp": ["objectTypes"],
    "keys": ["reNative"],
    "memoize": ["keyPrefix"],
    "reEscapedHtml": ["htmlUnescapes"],
    "releaseArray": ["arrayPool", "maxPoolSize"],
    "releaseObject": ["maxPoolSize", "objectPool"],
    "reUnescapedHtml": ["htmlEscapes"],
    "setBindData": ["reNative"],
    "support": ["reNative"],
    "template": ["reInterpolate"],
    "templateSettings": ["reInterpolate"],
    "unescape": ["reEscapedHtml"],
    "unescapeHtmlChar": ["htmlUnescapes"],
}

_CATEGORIES = {
    "Arrays": [
        "compact", "difference", "findIndex", "findLastIndex", "first",
        "flatten", "indexOf", "initial", "intersection", "last",
        "lastIndexOf", "pull", "range", "remove", "rest", "sortedIndex",
        "union", "uniq", "without", "zip", "zipObject",
    ],
    "Chaining": [
        "chain", "lodash", "tap", "wrapperChain", "wrapperToString",
        "wrapperValueOf",
    ],
    "Collections": [
        "at", "contains", "countBy", "every", "filter", "find", "findLast",
        "findWhere", "forEach", "forEachRight", "groupBy", "indexBy",
        "invoke", "map", "max", "min", "pluck", "reduce", "reduceRight",
        "reject", "sample", "shuffle", "size", "some", "sortBy", "toArray",
        "where",
    ],
    "Functions": [
        "after", "bind", "bindAll", "bindKey", "createCallback", "compose",
        "curry", "debounce", "defer", "delay", "memoize", "once", "partial",
        "partialRight", "throttle", "wrap",
    ],
    "Objects": [
        "assign", "clone", "cloneDeep", "defaults", "findKey",
        "findLastKey", "forIn", "forInRight", "forOwn", "forOwnRight",
        "functions", "has", "invert", "isArguments", "isArray", "isBoolean",
        "isDate", "isElement", "isEmpty", "isEqual", "isFinite",
        "isFunction", "isNaN", "isNull", "isNumber", "isObject",
        "isPlainObject", "isRegExp", "isString", "isUndefined", "keys",
        "merge", "omit", "pairs", "pick", "transform", "values",
    ],
    "Utilities": [
        "escape", "identity", "mixin", "noConflict", "parseInt", "random",
        "result", "runInContext", "template", "templateSettings", "times",
        "unescape", "uniqueId",
    ],
}

_BACKBONE_DEPENDENCIES = [
    "bind", "bindAll", "chain", "clone", "contains", "countBy", "defaults",
    "escape", "every", "extend", "filter", "find", "first", "forEach",
    "groupBy", "has", "indexOf", "initial", "invert", "invoke", "isArray",
    "isEmpty", "isEqual", "isFunction", "isObject", "isRegExp", "isString",
    "keys", "last", "lastIndexOf", "lodash", "map", "max", "min", "mixin",
    "omit", "once", "pairs", "pick", "reduce", "reduceRight", "reject",
    "rest", "result", "shuffle", "size", "some", "sortBy", "sortedIndex",
    "toArray", "uniqueId", "value", "values", "without", "wrapperChain",
    "wrapperValueOf",
]

_LODASH_ONLY_FUNCS = [
    "at", "bindKey", "cloneDeep", "createCallback", "curry", "findIndex",
    "findKey", "findLast", "findLastIndex", "findLastKey", "forEachRight",
    "forIn", "forInRight", "forOwn", "forOwnRight", "indexBy",
    "isPlainObject", "merge", "parseInt", "partialRight", "pull", "remove",
    "runInContext", "sample", "transform", "wrapperToString",
]

_PRIVATE_FUNCS = [
    "baseClone", "baseCreateCallback", "baseEach", "baseFlatten",
    "baseIndexOf", "baseIsEqual", "baseMerge", "baseUniq", "cacheIndexOf",
    "cachePush", "charAtCallback", "compareAscending", "createBound",
    "createCache", "createIterator", "escapeHtmlChar", "escapeStringChar",
    "getArray", "getObject", "isNode", "iteratorTemplate", "lodashWrapper",
    "noop", "releaseArray", "releaseObject", "setBindData",
    "shimIsPlainObject", "shimKeys", "slice", "unescapeHtmlChar",
]

# Variables whose initializers span several statements or an IIFE
_COMPLEX_VARS = [
    "cloneableClasses", "contextProps", "ctorByClass", "freeGlobal",
    "nonEnumProps", "shadowedProps", "support", "whitespace",
]


def _unique(names) -> tuple[str, ...]:
    return tuple(dict.fromkeys(names))


@dataclass(frozen=True)
class GraphTables:
    """Immutable bundle of every table the graph and rules consult."""
    func_deps: Mapping[str, tuple[str, ...]]
    prop_deps: Mapping[str, tuple[str, ...]]
    var_deps: Mapping[str, tuple[str, ...]]
    alias_to_real: Mapping[str, str]
    real_to_aliases: Mapping[str, tuple[str, ...]]
    categories: Mapping[str, tuple[str, ...]]
    backbone_dependencies: tuple[str, ...]
    lodash_only_funcs: tuple[str, ...]
    private_funcs: tuple[str, ...]
    complex_vars: tuple[str, ...]

    @property
    def prop_names(self) -> tuple[str, ...]:
        return _unique(name for deps in self.prop_deps.values() for name in deps)

    @property
    def var_names(self) -> tuple[str, ...]:
        return _unique(name for deps in self.var_deps.values() for name in deps)

    @property
    def all_funcs(self) -> tuple[str, ...]:
        excluded = set(self.prop_names) | set(self.var_names)
        return tuple(name for name in self.func_deps if name not in excluded)

    @property
    def lodash_funcs(self) -> tuple[str, ...]:
        excluded = set(self.private_funcs) | {"findWhere"}
        return tuple(name for name in self.all_funcs if name not in excluded)

    @property
    def underscore_funcs(self) -> tuple[str, ...]:
        excluded = set(self.private_funcs) | set(self.lodash_only_funcs)
        return tuple(name for name in self.all_funcs if name not in excluded)

    @property
    def all_categories(self) -> tuple[str, ...]:
        return tuple(self.categories)


LODASH_TABLES = GraphTables(
    func_deps=_freeze(_FUNC_DEPENDENCIES),
    prop_deps=_freeze(_PROP_DEPENDENCIES),
    var_deps=_freeze(_VAR_DEPENDENCIES),
    alias_to_real=MappingProxyType(dict(_ALIAS_TO_REAL)),
    real_to_aliases=_freeze(_REAL_TO_ALIAS),
    categories=_freeze(_CATEGORIES),
    backbone_dependencies=tuple(_BACKBONE_DEPENDENCIES),
    lodash_only_funcs=tuple(_LODASH_ONLY_FUNCS),
    private_funcs=tuple(_PRIVATE_FUNCS),
    complex_vars=tuple(_COMPLEX_VARS),
)
