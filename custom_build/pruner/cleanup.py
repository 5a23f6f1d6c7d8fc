"""Whitespace normalization and output checks for pruned source."""

from __future__ import annotations

import re
from typing import Iterable

from custom_build.locator import strip_comments, strip_strings

_SEPARATORS_RE = re.compile(r"(?:\s*/\*-+\*/\s*){2,}")
_LONE_COMMENT_RE = re.compile(r"(\{\s*)?(\n *//.*)(\s*\})")
_EDGE_SEPARATOR_RE = re.compile(r"(\{\n)\s*/\*-+\*/\n|^ */\*-+\*/\n(\s*\})", re.M)

# Characters after which a `/` starts a regex literal rather than a division
_REGEX_PRECEDERS = set("(,=:[!&|?{};+-*%<>~^")


def _consolidate_separators(match: re.Match) -> str:
    separators = match.group(0)
    leading = re.match(r"\s*", separators).group(0)
    return leading + separators[separators.rindex("/*"):]


def _drop_lone_comment(match: re.Match) -> str:
    prelude, postlude = match.group(1), match.group(3)
    return postlude if not prelude and postlude else match.group(0)


def cleanup_source(source: str) -> str:
    """Remove comments and whitespace that pruning left without a purpose."""
    source = _SEPARATORS_RE.sub(_consolidate_separators, source)
    source = _LONE_COMMENT_RE.sub(_drop_lone_comment, source)
    source = _EDGE_SEPARATOR_RE.sub(lambda m: (m.group(1) or "") + (m.group(2) or ""), source)
    source = re.sub(r"^ *;\n", "", source, flags=re.M)
    source = re.sub(r" *$", "", source, flags=re.M)
    source = re.sub(r"\n{3,}", "\n\n", source)
    return source.strip() + "\n"


def _starts_regex(code: str, pos: int) -> bool:
    back = pos - 1
    while back >= 0 and code[back] in " \t\n":
        back -= 1
    if back < 0:
        return True
    if code[back] in _REGEX_PRECEDERS:
        return True
    word = re.search(r"(\w+)$", code[:back + 1])
    return word is not None and word.group(1) in ("return", "typeof", "case", "in", "void")


def _skip_regex(code: str, pos: int) -> int:
    """Offset of the closing slash of the regex literal opening at pos."""
    in_class = False
    pos += 1
    while pos < len(code):
        ch = code[pos]
        if ch == "\\":
            pos += 2
            continue
        if ch == "\n":
            return pos
        if in_class:
            if ch == "]":
                in_class = False
        elif ch == "[":
            in_class = True
        elif ch == "/":
            return pos
        pos += 1
    return pos


def validate(code: str) -> tuple[bool, str | None]:
    """Check that braces, brackets and parens balance outside strings, comments and regexes."""
    closers = {"}": "{", "]": "[", ")": "("}
    stack: list[str] = []
    in_line_comment = False
    in_block_comment = False
    quote = ""
    line = 1
    i = 0
    while i < len(code):
        ch = code[i]
        next_ch = code[i + 1] if i + 1 < len(code) else ""
        if ch == "\n":
            line += 1

        if in_line_comment:
            if ch == "\n":
                in_line_comment = False
        elif in_block_comment:
            if ch == "*" and next_ch == "/":
                in_block_comment = False
                i += 1
        elif quote:
            if ch == "\\" and next_ch:
                i += 1
            elif ch == quote:
                quote = ""
        else:
            if ch == "/" and next_ch == "/":
                in_line_comment = True
                i += 1
            elif ch == "/" and next_ch == "*":
                in_block_comment = True
                i += 1
            elif ch == "/" and _starts_regex(code, i):
                i = _skip_regex(code, i)
            elif ch in ("'", '"'):
                quote = ch
            elif ch in "{[(":
                stack.append(ch)
            elif ch in closers:
                if not stack or stack[-1] != closers[ch]:
                    return False, f"Unexpected {ch!r} on line {line}"
                stack.pop()

        i += 1

    if quote:
        return False, "Unterminated string"
    if stack:
        return False, f"Unbalanced brackets (unclosed {''.join(stack)!r})"
    return True, None


def find_dangling_references(source: str, removed: Iterable[str]) -> list[str]:
    """Names from removed that the output still calls without declaring them."""
    code = strip_strings(strip_comments(source))
    dangling = []
    for name in removed:
        escaped = re.escape(name)
        if re.search(r"(?:function +|var +)" + escaped + r"\b", code):
            continue
        # later entry of a multi-line `var` list
        if re.search(r"^[ \t]*,?[ \t]*" + escaped + r"[ \t]*=(?!=)", code, re.M):
            continue
        if re.search(r"(?<![\w.$])" + escaped + r"\(", code):
            dangling.append(name)
    return dangling
