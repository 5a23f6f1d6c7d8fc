"""Mutable per-build dependency graph over the canonical tables."""

from __future__ import annotations

from typing import Iterable

from custom_build.graph.tables import LODASH_TABLES, GraphTables
from custom_build.models import Identifier, IdentifierKind

TABLE_NAMES = ("funcs", "props", "vars")


def _as_list(names: str | Iterable[str]) -> list[str]:
    if isinstance(names, str):
        return [names]
    return list(names)


class DependencyGraph:
    """Function, property and variable dependency maps for one build.

    Created from immutable ``GraphTables``; the rule engine mutates the
    instance it owns while the tables stay untouched.
    """

    def __init__(self, tables: GraphTables,
                 funcs: dict[str, list[str]],
                 props: dict[str, list[str]],
                 vars: dict[str, list[str]]):
        self.tables = tables
        self.funcs = funcs
        self.props = props
        self.vars = vars

    @classmethod
    def from_tables(cls, tables: GraphTables) -> DependencyGraph:
        return cls(
            tables,
            {name: list(deps) for name, deps in tables.func_deps.items()},
            {name: list(deps) for name, deps in tables.prop_deps.items()},
            {name: list(deps) for name, deps in tables.var_deps.items()},
        )

    @classmethod
    def default(cls) -> DependencyGraph:
        return cls.from_tables(LODASH_TABLES)

    def clone(self) -> DependencyGraph:
        return DependencyGraph(
            self.tables,
            {name: list(deps) for name, deps in self.funcs.items()},
            {name: list(deps) for name, deps in self.props.items()},
            {name: list(deps) for name, deps in self.vars.items()},
        )

    def table(self, which: str = "funcs") -> dict[str, list[str]]:
        if which not in TABLE_NAMES:
            raise ValueError(f"Unknown dependency table: {which}")
        return getattr(self, which)

    # ── Queries ──────────────────────────────────────────────

    def is_tracked(self, name: str) -> bool:
        return name in self.funcs

    def resolve_real_name(self, name: str) -> str:
        """Map an alias to its implementation name.

        A name tracked in the function map is never treated as an alias, so
        rules that add an alias as its own entry promote it.
        """
        if name not in self.funcs and name in self.tables.alias_to_real:
            return self.tables.alias_to_real[name]
        return name

    def aliases_of(self, name: str) -> list[str]:
        aliases = self.tables.real_to_aliases.get(name, ())
        return [alias for alias in aliases if alias not in self.funcs]

    def category(self, name: str) -> str:
        name = self.resolve_real_name(name)
        for label, members in self.tables.categories.items():
            if name in members:
                return label
        return ""

    def names_by_category(self, category: str) -> list[str]:
        return list(self.tables.categories.get(category, ()))

    def kind_of(self, name: str) -> IdentifierKind | None:
        if name in self.tables.prop_names:
            return IdentifierKind.PROPERTY
        if name in self.tables.var_names:
            return IdentifierKind.VARIABLE
        if name in self.funcs:
            if name in self.tables.private_funcs:
                return IdentifierKind.PRIVATE_FUNCTION
            return IdentifierKind.FUNCTION
        return None

    def identifier(self, name: str) -> Identifier | None:
        kind = self.kind_of(name)
        if kind is None:
            return None
        if kind is IdentifierKind.PROPERTY:
            deps = self.props.get(name, [])
        elif kind is IdentifierKind.VARIABLE:
            deps = self.vars.get(name, [])
        else:
            deps = self.funcs.get(name, [])
        return Identifier(
            name=name,
            kind=kind,
            dependencies=list(deps),
            category=self.category(name),
            aliases=self.aliases_of(name),
        )

    def dependencies_of(self, names: str | Iterable[str], shallow: bool = False,
                        table: str = "funcs") -> list[str]:
        """Direct or transitive dependencies.

        A single name yields its dependencies; a list of names yields the
        names themselves plus everything they depend on.
        """
        dep_map = self.table(table)
        if isinstance(names, str):
            roots = list(dep_map.get(names, ()))
        else:
            roots = list(names)
        if not roots:
            return []
        if shallow:
            return roots

        result: list[str] = []
        visited: set[str] = set()

        def visit(name: str) -> None:
            visited.add(name)
            for dep in dep_map.get(name, ()):
                if dep not in visited:
                    visit(dep)
            result.append(name)

        for root in roots:
            if root not in visited:
                visit(root)
        return list(dict.fromkeys(result))

    def dependants_of(self, names: str | Iterable[str], table: str = "funcs") -> list[str]:
        """Every identifier that depends, directly or transitively, on any of names."""
        dep_map = self.table(table)
        pending = _as_list(names)
        seen: set[str] = set()
        result: list[str] = []
        while pending:
            target = pending.pop()
            for other, deps in dep_map.items():
                if other not in seen and target in deps:
                    seen.add(other)
                    result.append(other)
                    pending.append(other)
        return result

    # ── Mutation ─────────────────────────────────────────────

    def add_edge(self, name: str, dep: str, table: str = "funcs") -> None:
        deps = self.table(table).setdefault(name, [])
        if dep not in deps:
            deps.append(dep)

    def remove_edge(self, name: str, dep: str, table: str = "funcs") -> None:
        deps = self.table(table).get(name)
        if deps and dep in deps:
            deps[:] = [other for other in deps if other != dep]

    def replace_dependencies(self, name: str, deps: Iterable[str], table: str = "funcs") -> None:
        self.table(table)[name] = list(dict.fromkeys(deps))

    def remove_identifier(self, name: str, table: str = "funcs") -> None:
        self.table(table).pop(name, None)
