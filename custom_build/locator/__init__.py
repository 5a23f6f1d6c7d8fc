"""Source locator: typed spans for functions, properties, variables and forks."""

from __future__ import annotations

from custom_build.graph import LODASH_TABLES
from custom_build.models import IdentifierKind, Span, SpanKind
from custom_build.locator.base import indent_of, reindent, strip_comments, strip_strings
from custom_build.locator.forks import FORKS, Fork, locate_fork, remove_fork
from custom_build.locator.patterns import (
    is_var_used,
    locate_function,
    locate_prop,
    locate_var,
    remove_var,
    scan_vars,
)


def locate(source: str, name: str, kind: IdentifierKind | SpanKind,
           leading_comments: bool = False) -> Span | None:
    """Locate the span implementing name, dispatching on its kind."""
    if kind in (IdentifierKind.FUNCTION, IdentifierKind.PRIVATE_FUNCTION, SpanKind.FUNCTION):
        return locate_function(source, name, leading_comments)
    if kind in (IdentifierKind.PROPERTY, SpanKind.PROPERTY):
        return locate_prop(source, name, leading_comments)
    if kind in (IdentifierKind.VARIABLE, SpanKind.VARIABLE):
        return locate_var(source, name, complex_vars=LODASH_TABLES.complex_vars)
    if kind is SpanKind.FORK:
        return locate_fork(source, name)
    raise ValueError(f"Cannot locate spans of kind: {kind}")


__all__ = [
    "FORKS",
    "Fork",
    "indent_of",
    "is_var_used",
    "locate",
    "locate_fork",
    "locate_function",
    "locate_prop",
    "locate_var",
    "reindent",
    "remove_fork",
    "remove_var",
    "scan_vars",
    "strip_comments",
    "strip_strings",
]
