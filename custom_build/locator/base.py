"""Shared regex fragments and text helpers for locating source spans."""

from __future__ import annotations

import re

# Optional JSDoc-style block comment on the line(s) before a declaration
MULTILINE_COMMENT = r"(?:\n */\*[^*]*\*+(?:[^/][^*]*\*+)*/)?\n"

# Leading `// ...` comment lines that precede a fork or statement
LINE_COMMENTS = r"(?:\s*//.*)*"

_INDENT_RE = re.compile(r"^ *(?=\S)", re.M)
_STRING_RE = re.compile(r"""(["'])(?:(?!\1)[^\n\\]|\\.)*\1""")
_COMMENT_RE = re.compile(r"^ *(?:/\*[^*]*\*+(?:[^/][^*]*\*+)*/|//.+)\n", re.M)


def indent_of(text: str) -> str:
    """Indentation of the first non-blank line of text."""
    match = _INDENT_RE.search(text)
    return match.group(0) if match else ""


def reindent(text: str, indent: str) -> str:
    """Shift text so its first line starts at indent, keeping relative nesting."""
    text = text.lstrip("\n")
    current = indent_of(text)
    pattern = re.compile("^" + re.escape(current), re.M) if current else re.compile("^(?=.)", re.M)
    return pattern.sub(lambda _: indent, text).rstrip() + "\n"


def strip_strings(source: str) -> str:
    return _STRING_RE.sub("", source)


def strip_comments(source: str) -> str:
    """Drop whole-line comments: block comments and `//` lines."""
    return _COMMENT_RE.sub("", source)


def block_end(source: str, start: int) -> int:
    """Offset just past the brace block opening at or after start.

    Walks the text aware of strings and comments; returns ``len(source)``
    when the block never closes.
    """
    pos = source.index("{", start)
    depth = 0
    in_line_comment = False
    in_block_comment = False
    quote = ""
    length = len(source)

    while pos < length:
        ch = source[pos]
        next_ch = source[pos + 1] if pos + 1 < length else ""

        if in_line_comment:
            if ch == "\n":
                in_line_comment = False
        elif in_block_comment:
            if ch == "*" and next_ch == "/":
                in_block_comment = False
                pos += 1
        elif quote:
            if ch == "\\" and next_ch:
                pos += 1  # skip escaped char
            elif ch == quote:
                quote = ""
        else:
            if ch == "/" and next_ch == "/":
                in_line_comment = True
                pos += 1
            elif ch == "/" and next_ch == "*":
                in_block_comment = True
                pos += 1
            elif ch in ("'", '"'):
                quote = ch
            elif ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    return pos + 1

        pos += 1

    return length
