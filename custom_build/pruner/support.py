"""Pruning of `support` feature-detection flags."""

from __future__ import annotations

import logging
import re

from custom_build.locator import locate_function, locate_prop
from custom_build.locator.base import MULTILINE_COMMENT
from custom_build.state import BuildState

logger = logging.getLogger(__name__)

_FLAG_DEFINITION_RE = re.compile(r"^ *support\.(\w+) *=", re.M)

# Object pool keys only the named function reads
_POOLED_KEYS = {
    "setBindData": ("configurable", "enumerable", "writable"),
    "sortBy": ("criteria", "index", "value"),
}


def remove_support_prop(source: str, flag: str) -> str:
    """Drop the definition of ``support.<flag>`` with its doc comment and try/catch."""
    span = locate_prop(source, "support")
    if span is None:
        return source
    pattern = (
        MULTILINE_COMMENT
        + r"(?: *try\b.+\n)?"
        + r" *support\." + re.escape(flag) + r" *=.+\n"
        + r"(?:( *).+?catch\b[\s\S]+?\n\1}\n)?"
    )
    modified = re.sub(pattern, "", span.text, count=1)
    if modified == span.text:
        logger.debug("no support.%s definition", flag)
    return source[:span.start] + modified + source[span.end:]


def replace_support_prop(source: str, flag: str, value: str) -> str:
    """Pin ``support.<flag>`` to a literal value."""
    pattern = (
        r"(?: *try\b.+\n)?"
        r"( *support\." + re.escape(flag) + r" *=).+\n"
        r"(?:( *).+?catch\b[\s\S]+?\n\2}\n)?"
    )
    return re.sub(pattern, lambda match: match.group(1) + " " + value + ";\n", source, count=1)


def inline_support_prop(source: str, flag: str, value: str) -> str:
    """Drop the definition of ``support.<flag>`` and use value wherever it was read."""
    source = remove_support_prop(source, flag)
    return re.sub(r"\bsupport\." + re.escape(flag) + r"\b", value, source)


def defined_support_flags(source: str) -> list[str]:
    span = locate_prop(source, "support")
    if span is None:
        return []
    return list(dict.fromkeys(_FLAG_DEFINITION_RE.findall(span.text)))


def remove_unused_support_flags(source: str) -> str:
    """Remove flags that nothing outside the `support` definition reads anymore."""
    for flag in defined_support_flags(source):
        span = locate_prop(source, "support")
        if span is None:
            break
        outside = source[:span.start] + source[span.end:]
        if re.search(r"\bsupport\." + flag + r"\b", outside) is None:
            logger.debug("support.%s is no longer read", flag)
            source = remove_support_prop(source, flag)
    return source


def remove_from_get_object(source: str, key: str) -> str:
    """Remove a key from the pooled object `getObject` hands out."""
    span = locate_function(source, "getObject")
    if span is None:
        return source
    modified = re.sub(r"^(?: *//.*\n)* *'" + re.escape(key) + r"':.+\n+", "", span.text,
                      count=1, flags=re.M)
    modified = re.sub(r",(?=\s*})", "", modified, count=1)
    return source[:span.start] + modified + source[span.end:]


def remove_from_release_object(source: str, key: str) -> str:
    """Remove the reset of a pooled object key from `releaseObject`."""
    span = locate_function(source, "releaseObject")
    if span is None:
        return source

    def drop(match: re.Match) -> str:
        indent, holder, postlude = match.group(1) or "", match.group(2), match.group(3)
        if re.search(r"\b" + holder + r"\.", postlude):
            return indent + postlude
        return ""

    modified = re.sub(r"(?:(^ *)| *)(\w+)\." + re.escape(key) + r" *= *(.+\n+)", drop, span.text,
                      count=1, flags=re.M)
    return source[:span.start] + modified + source[span.end:]


def prune_support(source: str, state: BuildState) -> str:
    """Drop support flags and pooled keys that only excluded functions needed."""
    if state.is_excluded("bind"):
        source = remove_support_prop(source, "fastBind")
    if state.is_excluded("isArguments"):
        source = replace_support_prop(source, "argsClass", "true")

    for name, keys in _POOLED_KEYS.items():
        if state.is_excluded(name):
            for key in keys:
                source = remove_from_get_object(source, key)
                source = remove_from_release_object(source, key)
    if state.is_excluded("throttle"):
        for key in ("leading", "maxWait", "trailing"):
            source = remove_from_get_object(source, key)

    return source
