"""Per-invocation build state shared by the rule engine, resolver and pruner."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from custom_build.graph import DependencyGraph
from custom_build.models import BuildDirectives, Environment

if TYPE_CHECKING:
    from custom_build.rules.edits import SourceEdit


@dataclass
class BuildState:
    """Everything one build reads and mutates.

    The graph is a private clone; nothing here outlives the invocation.
    """
    directives: BuildDirectives
    env: Environment
    graph: DependencyGraph
    include_funcs: list[str] = field(default_factory=list)
    minus_funcs: list[str] = field(default_factory=list)
    plus_funcs: list[str] = field(default_factory=list)
    include_props: list[str] = field(default_factory=list)
    include_vars: list[str] = field(default_factory=list)
    build_funcs: list[str] = field(default_factory=list)
    edits: list[SourceEdit] = field(default_factory=list)
    rules_fired: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @classmethod
    def create(cls, directives: BuildDirectives, graph: DependencyGraph | None = None) -> BuildState:
        graph = (graph or DependencyGraph.default()).clone()
        return cls(
            directives=directives,
            env=Environment.from_directives(directives),
            graph=graph,
        )

    def is_lodash(self, name: str) -> bool:
        """Whether the caller explicitly asked for Lo-Dash behaviour of name.

        Lo-Dash-only functions (and ``assign``/``zipObject``) count when
        requested at all; anything else only counts when added with ``plus``.
        """
        name = self.graph.resolve_real_name(name)
        minus = set(self.minus_funcs)
        if name in self.graph.tables.lodash_only_funcs or name in ("assign", "zipObject"):
            requested = set(self.include_funcs) | set(self.plus_funcs)
            return name in requested - minus
        return name in set(self.plus_funcs) - minus

    def is_excluded(self, *names: str) -> bool:
        return all(name not in self.build_funcs for name in names)

    def queue(self, edit: SourceEdit) -> None:
        self.edits.append(edit)
