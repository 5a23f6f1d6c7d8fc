"""Declaration matchers for functions, properties and variables.

Every matcher anchors on the indentation captured at the start of the
declaration and looks for a closing line at that same indentation, which is
how the library source lays out its top-level declarations.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable

from custom_build.locator.base import MULTILINE_COMMENT
from custom_build.models import Span, SpanKind

logger = logging.getLogger(__name__)

_FUNCTION_SHAPES = (
    # variable declared with a factory call, e.g. `createAggregator(...)`
    r"(?P<indent> *)var NAME *=.*?(?:create[A-Z][a-z]+|template)\((?:.+|[\s\S]+?\n(?P=indent)\}?)\);\n",
    # function declaration
    r"(?P<indent> *)function NAME\b[\s\S]+?\n(?P=indent)\}\n",
    # variable declared with a function expression
    r"(?P<indent> *)var NAME *=.*?function\(.+?\{\n[\s\S]+?\n(?P=indent)\}(?:\(\)\))?;\n",
    # simple variable declaration
    r" *var NAME *=.+?;\n",
)

_FUNCTION_TYPE_RE = re.compile(r"@type +Function\b")
_FUNCTION_BODY_RE = re.compile(r"(?:function(?:\s+\w+)?\b|create[A-Z][a-z]+|template)\(")

_PROP_SHAPE = (
    r"(?: {2,4}var NAME\b.+|(?: *|.*?=\s*)lodash\._?NAME\s*)=[\s\S]+?"
    r"(?:\(function[\s\S]+?\([^)]*\)\);\n(?=\n)|[;}]\n(?=\n(?!\s*\(func)))"
)

# Indentation of module-level declarations and of declaration list entries
_SHALLOW_INDENTS = (" {2}", " {6}")
_DEEP_INDENTS = (" {2,4}", " {6,8}")

_VAR_FIRST_IN_LIST = r"^INDENT_Avar NAME *=.+?,\n(?= *\w+ *=)"
_VAR_IN_LIST = r"^INDENT_BNAME *=.+?[,;]\n"
_VAR_STANDALONE = (
    r"^(?P<indent>INDENT_A)var NAME *(?:|= *(?:.+?(?:&&\n[^;]+)?|"
    r"(?:\w+\(|[{\[(]\n)[\s\S]+?\n(?P=indent)[^\n ]+?));\n"
)
_VAR_COMPLEX = (
    r"^INDENT_Avar NAME *=[\s\S]+?"
    r"(?:\(function[\s\S]+?\([^)]*\)\);\n(?=\n)|[;}]\n(?=\n(?!\s*\(func)))"
)

# Variable names captured while scanning, in place of a literal name
_ANY_NAME = r"(?P<name>\w+)"


def _fill(template: str, name: str, shallow: bool = False) -> str:
    indent_a, indent_b = _SHALLOW_INDENTS if shallow else _DEEP_INDENTS
    return (
        template
        .replace("INDENT_A", indent_a)
        .replace("INDENT_B", indent_b)
        .replace("NAME", name)
    )


def locate_function(source: str, name: str, leading_comments: bool = False) -> Span | None:
    """Find the declaration of function name.

    The span starts at the declaration (or at its doc comment when
    leading_comments is set) and ends after its closing line.
    """
    escaped = re.escape(name)
    for shape in _FUNCTION_SHAPES:
        pattern = re.compile("(" + MULTILINE_COMMENT + ")(" + _fill(shape, escaped) + ")")
        match = pattern.search(source)
        if match is None:
            continue
        comment, snippet = match.group(1), match.group(2)
        if not (_FUNCTION_TYPE_RE.search(comment) or _FUNCTION_BODY_RE.search(snippet)):
            break
        start = match.start(1) if leading_comments else match.start(2)
        return Span(SpanKind.FUNCTION, name, start, match.end(2), source[start:match.end(2)])

    logger.debug("no function span for %s", name)
    return None


def locate_prop(source: str, name: str, leading_comments: bool = False) -> Span | None:
    """Find the definition of a library property such as ``lodash.templateSettings``."""
    prefix = MULTILINE_COMMENT if leading_comments else r"\n"
    pattern = re.compile(prefix + _fill(_PROP_SHAPE, re.escape(name)))
    match = pattern.search(source)
    if match is None:
        logger.debug("no property span for %s", name)
        return None
    return Span(SpanKind.PROPERTY, name, match.start(), match.end(), match.group(0))


def var_patterns(name: str, shallow: bool = False,
                 complex_vars: Iterable[str] = ()) -> list[re.Pattern]:
    escaped = re.escape(name)
    if name != "freeGlobal" and name in set(complex_vars):
        templates = [_VAR_COMPLEX]
    else:
        templates = [_VAR_FIRST_IN_LIST, _VAR_IN_LIST, _VAR_STANDALONE]
    return [re.compile(_fill(template, escaped, shallow), re.M) for template in templates]


def locate_var(source: str, name: str, shallow: bool = False,
               complex_vars: Iterable[str] = ()) -> Span | None:
    """Find the declaration of a module-level variable.

    Handles the first entry of a ``var a = 1, b = 2;`` list, a later entry of
    such a list, a standalone declaration (one or more lines) and the
    multi-statement initializers of complex variables.
    """
    for pattern in var_patterns(name, shallow, complex_vars):
        match = pattern.search(source)
        if match is not None:
            return Span(SpanKind.VARIABLE, name, match.start(), match.end(), match.group(0))
    logger.debug("no variable span for %s", name)
    return None


def scan_vars(source: str, shallow: bool = False, exclude: Iterable[str] = ()) -> list[str]:
    """Sorted names of every variable declared at module level, minus exclude."""
    names: list[str] = []

    def collect(match: re.Match) -> str:
        names.append(match.group("name"))
        return ""

    for template in (_VAR_FIRST_IN_LIST, _VAR_IN_LIST, _VAR_STANDALONE):
        pattern = re.compile(_fill(template, _ANY_NAME, shallow), re.M)
        source = pattern.sub(collect, source)

    excluded = set(exclude)
    return sorted(set(names) - excluded)


def remove_var(source: str, name: str, complex_vars: Iterable[str] = ()) -> str:
    """Remove the declaration of variable name, keeping any list it belongs to valid."""
    escaped = re.escape(name)
    if name in set(complex_vars):
        source = re.sub(
            r"^( *var " + escaped + r") *=[\s\S]+?"
            r"(?:\(function[\s\S]+?\([^)]*\)\);(?=\n\n)|[;}](?=\n\n(?!\s*\(func)))",
            r"\1 = null;", source, count=1, flags=re.M,
        )

    span = locate_function(source, name, leading_comments=True)
    if span is not None:
        return source[:span.start] + source[span.end:]

    attempts = (
        # first entry of a declaration list
        (r"(var +)" + escaped + r" *=.+?,\n *", r"\1"),
        # later entry of a declaration list
        (r"( *(?:var +)?\w+ *=.+?),\n *" + escaped + r" *=.+?([,;])(?=\n)", r"\1\2"),
        # standalone declaration
        (MULTILINE_COMMENT + r"(?P<indent> *)var " + escaped
         + r" *(?:|= *(?:.+?(?:|&&\n[^;]+)|(?:\w+\(|[{\[(]\n)[\s\S]+?\n(?P=indent)[^\n ]+?));\n", ""),
    )
    for pattern, replacement in attempts:
        result = re.sub(pattern, replacement, source, count=1)
        if result != source:
            return result

    logger.debug("could not remove variable %s", name)
    return source


def is_var_used(source: str, name: str, shallow: bool = False,
                complex_vars: Iterable[str] = ()) -> bool:
    """Whether name is referenced anywhere other than its own declaration."""
    span = locate_var(source, name, shallow, complex_vars)
    if span is None:
        return False
    remainder = source.replace(span.text, "", 1)
    return re.search(r"[^\w\"'.]" + re.escape(name) + r"\b", remainder) is not None
