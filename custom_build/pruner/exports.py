"""Module wrapper edits: export bootstrap, custom IIFE, strict mode and build header."""

from __future__ import annotations

import logging
import re
from typing import Iterable

from custom_build.graph import LODASH_TABLES
from custom_build.locator import remove_var
from custom_build.models import Environment

logger = logging.getLogger(__name__)

IIFE_TOKEN = "%output%"

_HEADER_RE = re.compile(r"^/\**[\s\S]+?\*/\n")
_CLOSURE_RE = re.compile(r"^[\s\S]+?\(function[^{]+{\n|\s*}\(this\)\)[;\s]*$")
_LICENSE_RE = re.compile(r"(/\**\n)( \*)( *@license[\s*]+)( *Lo-Dash [\w.-]+)(.*)")
_STRICT_RE = re.compile(r"^([\s\S]*?function[^{]+{)(?:\s*'use strict';)?")


def set_use_strict(source: str, strict: bool) -> str:
    """Insert or drop the "use strict" directive of the library closure."""
    directive = "\n  'use strict';" if strict else ""
    return _STRICT_RE.sub(lambda match: match.group(1) + directive, source, count=1)


def customize_exports(source: str, env: Environment,
                      complex_vars: Iterable[str] = LODASH_TABLES.complex_vars) -> str:
    """Drop the export bootstrap branches for targets the build does not export to."""
    if not env.exports_to("amd"):
        source = re.sub(r"(?: *//.*\n)*( *)if *\(typeof +define[\s\S]+?else ", r"\1", source, count=1)
    if not env.exports_to("node"):
        source = remove_var(source, "freeGlobal", complex_vars)
        source = re.sub(r"(?: *//.*\n)*( *)if *\(freeModule[\s\S]+?else *{([\s\S]+?\n)\1}\n+",
                        r"\1\2", source, count=1)
    if not env.exports_to("commonjs"):
        source = re.sub(
            r"(?: *//.*\n)*(?:( *)(})? *else *{)?\s*freeExports\.\w+ *=[\s\S]+?(?:\n\1})?\n+",
            _keep_brace, source, count=1,
        )
    if not env.exports_to("global"):
        source = re.sub(
            r"(?: *//.*\n)*(?:( *)(})? *else(?: *if *\(_\))? *{)?(?:\s*//.*)*\s*"
            r"(?:window\._|_\.templates) *=[\s\S]+?(?:\n\1})?\n+",
            _keep_brace, source,
        )

    # an `if (freeExports ...) {}` left empty by the edits above
    if env.exports_to("amd") and env.exports_to("global"):
        source = re.sub(r"(?: *//.*\n)* *(?:else )?if *\(freeExports.*?\) *{\s*}\n+", "", source, count=1)
    else:
        source = re.sub(
            r"(?: *//.*\n)* *(?:else )?if *\(freeExports.*?\) *{\s*}(?:\s*else *{([\s\S]+?) *})?\n+",
            lambda match: (match.group(1) or "") + "\n", source, count=1,
        )
    return source


def _keep_brace(match: re.Match) -> str:
    return (match.group(1) or "") + (match.group(2) or "") + "\n"


def wrap_iife(source: str, iife: str) -> str:
    """Replace the library closure with a custom wrapper, keeping the license header.

    The wrapper's ``%output%`` token marks where the closure body goes; a
    wrapper without the token replaces the body entirely.
    """
    header_match = _HEADER_RE.search(source)
    header = header_match.group(0) if header_match else ""
    index = iife.find(IIFE_TOKEN)
    if index < 0:
        logger.debug("iife has no %s token; the library body is dropped", IIFE_TOKEN)
        return header + iife

    body = _CLOSURE_RE.sub("\n", source)
    return (
        header
        + iife[:index].rstrip("\n")
        + body
        + iife[index + len(IIFE_TOKEN):].lstrip("\n")
    )


def _quote_command(command: str) -> str:
    separator = re.search(r"[= ]", command)
    if separator:
        key, sep, value = command.partition(separator.group(0))
        command = key + sep + '"' + value + '"'
    return command.replace("\n", "\\n").replace("\r", "\\r").replace("*/", "*\\/")


def add_commands_to_header(source: str, commands: Iterable[str]) -> str:
    """Mark the license header as a custom build and record the commands used."""
    line = " ".join(_quote_command(command) for command in commands)

    def annotate(match: re.Match) -> str:
        opener, star, license_tag, title, rest = match.groups()
        return (
            opener + star + license_tag + title + " (Custom Build)" + rest + "\n"
            + star + " Build: `lodash " + line + "`"
        )

    return _LICENSE_RE.sub(annotate, source, count=1)
