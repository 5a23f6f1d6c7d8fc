"""Minifier interface consumed by the build pipeline."""

from __future__ import annotations

import abc
import re
from dataclasses import dataclass

_LICENSE_RE = re.compile(r"^/\*\*?[\s\S]+?@license[\s\S]+?\*/\n")
_BLOCK_COMMENT_RE = re.compile(r"^ */\*[^*]*\*+(?:[^/][^*]*\*+)*/\n", re.M)
_LINE_COMMENT_RE = re.compile(r"^ *//.*\n", re.M)


@dataclass
class MinifiedOutput:
    """Minified source plus an optional source map."""
    source: str
    source_map: str | None = None


class BaseMinifier(abc.ABC):
    """Turns pruned source into its minified form."""

    @abc.abstractmethod
    def minify(self, source: str, source_map_url: str | None = None) -> MinifiedOutput:
        """Minify source; produce a source map when source_map_url is given."""


class WhitespaceMinifier(BaseMinifier):
    """Drops whole-line comments, indentation and blank lines; keeps the license header."""

    def minify(self, source: str, source_map_url: str | None = None) -> MinifiedOutput:
        match = _LICENSE_RE.match(source)
        header = match.group(0) if match else ""
        body = source[len(header):]
        body = _BLOCK_COMMENT_RE.sub("", body)
        body = _LINE_COMMENT_RE.sub("", body)
        lines = [line.strip() for line in body.splitlines()]
        output = header + "\n".join(line for line in lines if line) + "\n"
        return MinifiedOutput(source=output)
