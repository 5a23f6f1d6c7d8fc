"""Build pipeline: validate -> rules -> resolve -> prune -> minify."""

from __future__ import annotations

import logging
from typing import Callable

from custom_build.config import validate_directives
from custom_build.errors import InvalidDirectiveError
from custom_build.graph import DependencyGraph
from custom_build.minify import BaseMinifier
from custom_build.models import BuildDirectives, BuildResult
from custom_build.pruner import prune
from custom_build.resolver import normalize_directives, resolve
from custom_build.rules import apply_environment, apply_pre_resolution
from custom_build.state import BuildState

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int], None]


def prepare_state(directives: BuildDirectives, graph: DependencyGraph | None = None) -> BuildState:
    """Validate directives and resolve the build set, without touching any source.

    Raises InvalidDirectiveError when the directives name unknown entries or
    combine flavours that may not be combined.
    """
    state = BuildState.create(directives, graph)
    apply_pre_resolution(state)

    warnings = validate_directives(directives, state.graph)
    if warnings:
        raise InvalidDirectiveError(warnings)

    normalize_directives(state)
    apply_environment(state)
    resolve(state)
    return state


def run_build(
    source: str,
    directives: BuildDirectives,
    minifier: BaseMinifier | None = None,
    graph: DependencyGraph | None = None,
    progress: ProgressCallback | None = None,
) -> BuildResult:
    """Run the full build for one library source."""
    stages = 3 if minifier else 2

    if progress:
        progress("Resolving", 0, stages)
    state = prepare_state(directives, graph)
    logger.debug("rules fired: %s", ", ".join(state.rules_fired) or "none")

    if progress:
        progress("Pruning", 1, stages)
    output = prune(source, state)

    result = BuildResult(
        source=output,
        build_funcs=list(state.build_funcs),
        include_props=list(state.include_props),
        include_vars=list(state.include_vars),
        rules_fired=list(state.rules_fired),
        warnings=list(state.warnings),
    )

    if minifier:
        if progress:
            progress("Minifying", 2, stages)
        minified = minifier.minify(output)
        result.minified = minified.source
        result.source_map = minified.source_map

    if progress:
        progress("Done", stages, stages)
    return result
