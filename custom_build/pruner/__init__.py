"""Source pruner: cut the library source down to the resolved build set."""

from __future__ import annotations

import logging
import re

from custom_build.errors import PruneError
from custom_build.locator import FORKS, locate_prop, remove_fork, remove_var
from custom_build.pruner.cleanup import cleanup_source, find_dangling_references, validate
from custom_build.pruner.dead_vars import VarState, remove_dead_vars
from custom_build.pruner.edits import apply_edits
from custom_build.pruner.exports import (
    add_commands_to_header,
    customize_exports,
    set_use_strict,
    wrap_iife,
)
from custom_build.pruner.functions import (
    remove_error_props,
    remove_excluded_functions,
    remove_pseudo_privates,
    remove_wrapper_references,
)
from custom_build.pruner.support import prune_support, remove_unused_support_flags
from custom_build.state import BuildState

logger = logging.getLogger(__name__)

# Forks that go whenever the function owning them is not built
OWNED_FORKS = ("createObject", "defer", "isArguments", "isArray", "isFunction")


def remove_environment_forks(source: str, state: BuildState) -> str:
    """Delete forks the active environment never takes."""
    for fork in FORKS.values():
        if fork.drop_when is not None and fork.drop_when(state):
            logger.debug("dropping %s fork", fork.name)
            source = remove_fork(source, fork)
    return source


def remove_owned_forks(source: str, state: BuildState) -> str:
    for name in OWNED_FORKS:
        if state.is_excluded(name):
            source = remove_fork(source, name)
    return source


def remove_props(source: str, state: BuildState) -> str:
    """Delete property definitions the build does not need."""
    keep = set(state.include_props)
    for name in state.graph.tables.prop_names:
        if name in keep:
            continue
        span = locate_prop(source, name, leading_comments=True)
        if span is not None:
            logger.debug("removing property %s", name)
            source = source[:span.start] + source[span.end:]
    return source


def prune(source: str, state: BuildState) -> str:
    """Produce the pruned source for a resolved build state.

    Raises PruneError when the result fails the bracket balance check; no
    partial output is returned in that case.
    """
    env = state.env

    source = set_use_strict(source, env.strict)
    source = apply_edits(source, state.edits)
    source = remove_environment_forks(source, state)
    source = remove_pseudo_privates(source)
    source = customize_exports(source, env)
    if state.directives.iife:
        source = wrap_iife(source, state.directives.iife)

    source = remove_wrapper_references(source, state)
    source = prune_support(source, state)
    source = remove_excluded_functions(source, state)
    source = remove_owned_forks(source, state)
    source = remove_props(source, state)
    source = remove_unused_support_flags(source)
    source = remove_error_props(source)
    source = remove_dead_vars(source, state)

    if env.underscore and not state.is_lodash("support"):
        source = re.sub(r"\blodash\.support *= *", "", source, count=1)
    for name in ("freeModule", "freeExports"):
        if len(re.findall(r"\b" + name + r"\b", source)) < 2:
            source = remove_var(source, name)

    source = cleanup_source(source)
    if state.directives.commands:
        source = add_commands_to_header(source, state.directives.commands)

    valid, error = validate(source)
    if not valid:
        raise PruneError(f"Pruned source is malformed: {error}", state.build_funcs)

    removed = [name for name in state.graph.tables.all_funcs if name not in state.build_funcs]
    for name in find_dangling_references(source, removed):
        logger.warning("output still calls pruned function %s", name)
        state.warnings.append(f"dangling reference to pruned function {name}")

    logger.info("pruned source to %d characters", len(source))
    return source


__all__ = [
    "OWNED_FORKS",
    "VarState",
    "add_commands_to_header",
    "cleanup_source",
    "customize_exports",
    "find_dangling_references",
    "prune",
    "remove_dead_vars",
    "remove_environment_forks",
    "remove_props",
    "set_use_strict",
    "validate",
    "wrap_iife",
]
