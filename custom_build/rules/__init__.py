"""Environment rule engine: ordered graph rewrites plus the source edits they queue."""

from __future__ import annotations

from custom_build.rules.base import EnvironmentRule, RuleSet
from custom_build.rules.edits import (
    InsertAfter,
    PromoteFork,
    Rewrite,
    SourceEdit,
    Substitute,
    SupportFlag,
    Transplant,
)
from custom_build.rules.environment import GRAPH_RULES, PRE_RESOLUTION_RULES
from custom_build.state import BuildState


def apply_pre_resolution(state: BuildState) -> list[str]:
    """Rules that must run before directive names are resolved against the graph."""
    return PRE_RESOLUTION_RULES.apply(state)


def apply_environment(state: BuildState) -> list[str]:
    """Run every graph rule, in order, against the build's graph."""
    return GRAPH_RULES.apply(state)


__all__ = [
    "EnvironmentRule",
    "GRAPH_RULES",
    "InsertAfter",
    "PRE_RESOLUTION_RULES",
    "PromoteFork",
    "Rewrite",
    "RuleSet",
    "SourceEdit",
    "Substitute",
    "SupportFlag",
    "Transplant",
    "apply_environment",
    "apply_pre_resolution",
]
