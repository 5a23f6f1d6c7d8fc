"""Dependency graph: canonical tables and the per-build mutable graph."""

from __future__ import annotations

from custom_build.graph.dependency_graph import DependencyGraph
from custom_build.graph.tables import LODASH_TABLES, GraphTables

__all__ = [
    "DependencyGraph",
    "GraphTables",
    "LODASH_TABLES",
]
