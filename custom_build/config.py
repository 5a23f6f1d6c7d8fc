"""Build directives from command tokens or YAML profiles, and their validation."""

from __future__ import annotations

import logging
import re
from dataclasses import fields
from pathlib import Path
from typing import Any, Iterable

import yaml

from custom_build.errors import InvalidDirectiveError
from custom_build.graph import DependencyGraph
from custom_build.models import ALL_EXPORTS, BuildDirectives
from custom_build.resolver import category_label

logger = logging.getLogger(__name__)

FLAG_COMMANDS = ("backbone", "csp", "legacy", "mobile", "modern", "modularize", "strict", "underscore")
LIST_OPTIONS = ("category", "exports", "include", "minus", "plus")

_OPTION_RE = re.compile(r"^(category|exclude|exports|iife|include|minus|plus)=([\s\S]*)$")


def option_to_list(value: str | Iterable[str] | None) -> list[str]:
    """Split a comma separated option value, dropping empty entries."""
    if value is None:
        return []
    if isinstance(value, str):
        items = re.split(r", *", value)
    else:
        items = [str(item) for item in value]
    return [item.strip() for item in items if item and item.strip()]


def parse_commands(tokens: Iterable[str]) -> BuildDirectives:
    """Build directives from command tokens such as ``modern`` or ``include=map,filter``.

    Raises InvalidDirectiveError for tokens outside the command vocabulary.
    """
    tokens = list(tokens)
    directives = BuildDirectives(commands=tokens)
    invalid = []

    for token in tokens:
        if token in FLAG_COMMANDS:
            setattr(directives, token, True)
            continue
        match = _OPTION_RE.match(token)
        if match is None:
            invalid.append(token)
            continue
        key, value = match.groups()
        if key == "iife":
            directives.iife = value
        elif key == "exports":
            directives.exports = sorted(option_to_list(value))
        elif key == "category":
            directives.category = option_to_list(value)
        else:
            target = "minus" if key == "exclude" else key
            current = getattr(directives, target)
            setattr(directives, target, list(dict.fromkeys(current + option_to_list(value))))

    if invalid:
        noun = "arguments" if len(invalid) > 1 else "argument"
        raise InvalidDirectiveError([f"Invalid {noun} passed: {', '.join(invalid)}"], invalid)
    return directives


def directives_to_commands(directives: BuildDirectives) -> list[str]:
    """The command tokens equivalent to a set of directives."""
    commands = [name for name in FLAG_COMMANDS if getattr(directives, name)]
    for key in LIST_OPTIONS:
        value = getattr(directives, key)
        if value:
            commands.append(f"{key}={','.join(value)}")
    if directives.iife:
        commands.append(f"iife={directives.iife}")
    return commands


def directives_from_dict(data: dict[str, Any]) -> BuildDirectives:
    """Build directives from a mapping; unknown keys are rejected."""
    known = {field.name for field in fields(BuildDirectives)} - {"commands"}
    unknown = sorted(key for key in data if key not in known)
    if unknown:
        raise InvalidDirectiveError([f"Unknown profile keys: {', '.join(unknown)}"], unknown)

    values: dict[str, Any] = {}
    for key, value in data.items():
        if key in LIST_OPTIONS:
            values[key] = option_to_list(value)
        elif key == "iife":
            values[key] = None if value is None else str(value)
        else:
            values[key] = bool(value)
    if "exports" in values:
        values["exports"] = sorted(values["exports"])

    directives = BuildDirectives(**values)
    directives.commands = directives_to_commands(directives)
    return directives


def load_profile(path: str | Path) -> BuildDirectives:
    """Read build directives from a YAML profile."""
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise InvalidDirectiveError([f"Build profile {path} must be a mapping"])
    logger.debug("loaded build profile %s", path)
    return directives_from_dict(data)


def validate_directives(directives: BuildDirectives, graph: DependencyGraph) -> list[str]:
    """Warnings for unknown entries and incompatible flags; never raises."""
    warnings: list[str] = []
    tables = graph.tables

    active = directives.active_flags
    if len(active) > 1:
        names = "`, `".join(active[:-1])
        comma = "," if len(active) > 2 else ""
        warnings.append(f"The `{names}`{comma} and `{active[-1]}` commands may not be combined.")

    non_funcs = set(tables.prop_names) | set(tables.var_names)
    valid_funcs = set(tables.all_funcs) | set(tables.all_categories)

    def resolved(names: list[str]) -> list[str]:
        result = []
        for name in names:
            capitalized = category_label(name)
            result.append(capitalized if capitalized in tables.all_categories else graph.resolve_real_name(name))
        return result

    entries = {
        "category": ([category_label(name) for name in directives.category], set(tables.all_categories)),
        "exports": (list(directives.exports or ()), set(ALL_EXPORTS)),
        "include": ([name for name in resolved(directives.include) if name not in non_funcs], valid_funcs),
        "minus": (resolved(directives.minus), valid_funcs),
        "plus": (resolved(directives.plus), valid_funcs),
    }
    for command, (names, valid) in entries.items():
        invalid = [name for name in dict.fromkeys(names) if name not in valid and name != "none"]
        if invalid:
            noun = "entries" if len(invalid) > 1 else "entry"
            warnings.append(f"Invalid `{command}` {noun} passed: {', '.join(invalid)}")

    for warning in warnings:
        logger.debug("directive warning: %s", warning)
    return warnings

