"""Removal of function declarations and everything that refers to them."""

from __future__ import annotations

import logging
import re

from custom_build.locator import locate_function, remove_var
from custom_build.pruner.edits import replace_function
from custom_build.pruner.support import remove_from_get_object
from custom_build.rules.bodies import NOOP_LODASH
from custom_build.state import BuildState

logger = logging.getLogger(__name__)

_RUN_IN_CONTEXT_TIMERS = ("clearTimeout", "setImmediate", "setTimeout")


def remove_method_assignments(source: str, name: str) -> str:
    """Drop `lodash.x = name;` and `lodash.prototype.x = name;` lines."""
    pattern = r"^(?: *//.*\s*)* *lodash(?:\.prototype)?\.\w+ *= *" + re.escape(name) + r";\n"
    return re.sub(pattern, "", source, flags=re.M)


def remove_pseudo_privates(source: str) -> str:
    """Drop every `lodash._name = ...` assignment."""
    return re.sub(r"^(?: *//.*\s*)* *lodash\._\w+ *=[\s\S]+?;\n", "", source, flags=re.M)


def remove_run_in_context(source: str) -> str:
    """Unwrap the `runInContext` factory, leaving its body at module level."""
    source = re.sub(r"\btest\(runInContext\)", "test(function() { return this; })", source, count=1)
    source = re.sub(r"^(?: *//.*\s*)* *lodash\.runInContext *=[\s\S]+?;\n", "", source,
                    count=1, flags=re.M)

    span = locate_function(source, "runInContext", leading_comments=True)
    if span is None:
        return source
    body = re.sub(
        r"^[\s\S]+?function runInContext[\s\S]+?context *= *context.+| *return lodash[\s\S]+$",
        "", span.text,
    )
    body = re.sub(r"^ {4}", "  ", body, flags=re.M)
    source = source[:span.start] + body + source[span.end:]

    source = re.sub(r"\bcontext\b", "window", source)
    source = re.sub(r"(?:\n +/\*[^*]*\*+(?:[^/][^*]*\*+)*/)?\n *var Array *=[\s\S]+?;\n", "",
                    source, count=1)
    source = re.sub(r"(return *|= *)_([;)])", r"\1lodash\2", source)
    source = re.sub(r"^(?: *//.*\s*)* *var _ *= *runInContext\b.+\n+", "", source,
                    count=1, flags=re.M)

    for name in _RUN_IN_CONTEXT_TIMERS:
        source = remove_var(source, name)
    return source


def remove_function(source: str, name: str) -> str:
    if name == "runInContext":
        return remove_run_in_context(source)
    span = locate_function(source, name, leading_comments=True)
    if span is None:
        return source
    logger.debug("removing function %s", name)
    return source[:span.start] + source[span.end:]


def remove_from_create_iterator(source: str, identifier: str) -> str:
    """Remove every reference to identifier from the `createIterator` compiler."""
    span = locate_function(source, "createIterator")
    if span is None:
        return source
    escaped = re.escape(identifier)

    def drop_assignment(match: re.Match) -> str:
        holder, postlude = match.group(1), match.group(2)
        return postlude if re.search(r"\b" + holder + r"\.", postlude) else "\n"

    modified = re.sub(r"^(?: *//.*\n)* *(\w+)\." + escaped + r" *= *(.+\n+)", drop_assignment,
                      span.text, count=1, flags=re.M)
    source = source[:span.start] + modified + source[span.end:]

    factory = re.search(r"Function\([\s\S]+$", modified)
    if factory is not None:
        tail = factory.group(0)
        start = source.find(tail, span.start)
        if start >= 0:
            cleaned = re.sub(r"[^\n(,']*?\b" + escaped + r"\b[^\n),']*(?:, *)?", " ", tail)
            cleaned = re.sub(r", *(?=',)", "", cleaned, count=1)
            cleaned = re.sub(r",(?=\s*\))", "", cleaned, count=1)
            source = source[:start] + cleaned + source[start + len(tail):]

    return remove_from_get_object(source, identifier)


def remove_error_props(source: str) -> str:
    """Without `enumErrorProps`/`nonEnumShadows` nothing needs the Error prototype checks."""
    if re.search(r"\.(?:enumErrorProps|nonEnumShadows) *=", source):
        return source
    source = remove_from_create_iterator(source, "errorClass")
    source = remove_from_create_iterator(source, "errorProto")

    def drop_error(match: re.Match) -> str:
        text = re.sub(r"'Error',? *", "", match.group(0), count=1)
        return re.sub(r",(?=\s*])", "", text, count=1)

    return re.sub(r"^ *var contextProps *=[\s\S]+?;", drop_error, source, count=1, flags=re.M)


def remove_chaining(source: str) -> str:
    """Strip wrapper chaining: prototype wiring goes and `lodash` becomes a no-op constructor."""
    source = re.sub(r"(?:\s*//.*)*\n( *)if *\(!support\.spliceObjects[\s\S]+?(?:\{\s*}|\n\1})", "",
                    source, count=1)
    source = re.sub(r"(?:\s*//.*)*\s*mixin\(lodash\).+", "", source, count=1)
    source = re.sub(r"(?:\s*//.*)*\n( *)forOwn\(lodash,[\s\S]+?\n\1}.+", "", source)
    source = re.sub(r"(?:\s*//.*)*\n( *)(?:baseEach|forEach)\(\['[\s\S]+?\n\1}.+", "", source)
    source = re.sub(r"(?:\s*//.*)*\n *lodash\.prototype\.[\s\S]+?;", "", source)
    source = replace_function(source, "lodash", NOOP_LODASH)

    span = locate_function(source, "mixin")
    if span is not None:
        modified = re.sub(r"\blodashWrapper\b", "lodash", span.text, count=1)
        source = source[:span.start] + modified + source[span.end:]
    return source


def remove_wrapper_references(source: str, state: BuildState) -> str:
    """Drop wrapper wiring whose functions did not make it into the build."""
    if state.is_excluded("lodashWrapper"):
        source = re.sub(r"(?:\s*//.*)*\n *lodashWrapper\.prototype *=.+", "", source, count=1)
    if state.is_excluded("mixin"):
        source = re.sub(r"(?:\s*//.*)*\s*mixin\(lodash\).+", "", source, count=1)
    if state.is_excluded("wrapperValueOf") or state.is_excluded("lodashWrapper"):
        source = remove_chaining(source)
    return source


def remove_excluded_functions(source: str, state: BuildState) -> str:
    """Delete every tracked function outside the build set with its public assignments."""
    build_funcs = set(state.build_funcs)
    removed = []
    for name in state.graph.tables.all_funcs:
        if name in build_funcs or name == "lodash":
            continue
        if name == "findWhere" and not state.env.underscore:
            continue
        source = remove_function(source, name)
        source = remove_from_create_iterator(source, name)
        source = remove_method_assignments(source, name)
        removed.append(name)

    logger.debug("pruned %d functions", len(removed))
    return source
