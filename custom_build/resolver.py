"""Closure resolver: directive names -> the complete set of identifiers to keep."""

from __future__ import annotations

import logging

from custom_build.state import BuildState

logger = logging.getLogger(__name__)

NONE_SENTINEL = "none"


def category_label(name: str) -> str:
    """Category labels are capitalized: `arrays` -> `Arrays`."""
    return name[:1].upper() + name[1:].lower() if name else name


def _union(*lists) -> list[str]:
    return list(dict.fromkeys(name for names in lists for name in names))


def _category_members(state: BuildState, category: str) -> list[str]:
    graph = state.graph
    tables = graph.tables
    non_funcs = set(tables.prop_names) | set(tables.var_names)
    members = [name for name in graph.names_by_category(category) if name not in non_funcs]
    if state.env.backbone:
        allowed = set(tables.backbone_dependencies)
        members = [name for name in members if name in allowed]
    elif state.env.underscore:
        allowed = set(tables.underscore_funcs)
        members = [name for name in members if name in allowed]
    return members


def _expand_categories(state: BuildState, names: list[str]) -> list[str]:
    categories = set(state.graph.tables.all_categories)
    expanded = list(names)
    for name in names:
        if name in categories:
            expanded.extend(_category_members(state, name))
    return [name for name in dict.fromkeys(expanded) if name not in categories]


def normalize_directives(state: BuildState) -> None:
    """Populate the state's include/minus/plus sets from its directives.

    Aliases resolve to real names, category names expand to their members and
    requested properties or variables move to their own include lists.
    """
    graph = state.graph
    tables = graph.tables
    directives = state.directives
    categories = set(tables.all_categories)

    def resolve(names):
        result = []
        for name in names:
            name = name.strip()
            if not name:
                continue
            capitalized = category_label(name)
            result.append(capitalized if capitalized in categories else graph.resolve_real_name(name))
        return list(dict.fromkeys(result))

    include = _union([category_label(name) for name in directives.category], resolve(directives.include))
    prop_names = set(tables.prop_names)
    var_names = set(tables.var_names)

    state.include_props = [name for name in include if name in prop_names]
    state.include_vars = [name for name in include if name in var_names]
    state.include_funcs = [
        name for name in _expand_categories(state, include)
        if name not in prop_names and name not in var_names
    ]
    state.minus_funcs = _expand_categories(state, resolve(directives.minus))
    state.plus_funcs = _expand_categories(state, resolve(directives.plus))


def _default_funcs(state: BuildState) -> list[str]:
    tables = state.graph.tables
    if state.env.backbone:
        names = tables.backbone_dependencies
    elif state.env.underscore:
        names = tables.underscore_funcs
    else:
        names = tables.lodash_funcs
    return list(dict.fromkeys(state.graph.resolve_real_name(name) for name in names))


def _expand(state: BuildState, table: str, seeds: list[str]) -> list[str]:
    """Property or variable dependencies of the build set, growing it as needed."""
    graph = state.graph
    dep_map = graph.table(table)
    found = list(seeds)
    visited: set[str] = set()
    pending = list(seeds) + [name for name in dep_map if name in state.build_funcs]

    while pending:
        name = pending.pop(0)
        if name in visited:
            continue
        visited.add(name)
        identifiers = dep_map.get(name, [])
        found.extend(identifiers)

        new_funcs: list[str] = []
        for identifier in [name] + list(identifiers):
            new_funcs.extend(graph.dependencies_of(identifier))
        new_funcs = [func for func in dict.fromkeys(new_funcs) if func not in state.build_funcs]
        if new_funcs:
            logger.debug("%s expansion of %s adds %s", table, name, ", ".join(new_funcs))
            state.build_funcs.extend(new_funcs)
        pending.extend(identifiers)
        pending.extend(new_funcs)

    return list(dict.fromkeys(found))


def resolve(state: BuildState) -> list[str]:
    """Compute the build set, then the properties and variables it needs.

    Returns the build's function names; ``state.include_props`` and
    ``state.include_vars`` are expanded in place.
    """
    graph = state.graph

    if state.include_funcs:
        result = list(state.include_funcs)
    elif not state.include_props and not state.include_vars:
        result = _default_funcs(state)
    else:
        result = []

    if result == [NONE_SENTINEL]:
        result = []
    else:
        result = [name for name in result if name != NONE_SENTINEL]

    if state.plus_funcs:
        result = _union(result, state.plus_funcs)
    if state.minus_funcs:
        removed = set(state.minus_funcs) | set(graph.dependants_of(state.minus_funcs))
        result = [name for name in result if name not in removed]
    if state.env.modularize:
        result = [name for name in result if name != "runInContext"]

    unknown = [name for name in result if not graph.is_tracked(name)]
    if unknown:
        logger.debug("dropping untracked names: %s", ", ".join(unknown))
    result = [name for name in result if graph.is_tracked(name)]

    state.build_funcs = graph.dependencies_of(result) if result else []
    state.include_props = _expand(state, "props", state.include_props)
    state.include_vars = _expand(state, "vars", state.include_vars)

    logger.info(
        "resolved %d functions, %d properties, %d variables",
        len(state.build_funcs), len(state.include_props), len(state.include_vars),
    )
    return state.build_funcs
