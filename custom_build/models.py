"""Data models for the custom-build pipeline."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class IdentifierKind(enum.Enum):
    FUNCTION = "function"
    PRIVATE_FUNCTION = "private_function"
    VARIABLE = "variable"
    PROPERTY = "property"


class SpanKind(enum.Enum):
    FUNCTION = "function"
    PROPERTY = "property"
    VARIABLE = "variable"
    FORK = "fork"
    ASSIGNMENT = "assignment"


ALL_EXPORTS = ("amd", "commonjs", "global", "node")

# Flags that select mutually exclusive flavours of the library
EXCLUSIVE_FLAGS = ("backbone", "csp", "legacy", "mobile", "modern", "underscore")


@dataclass
class Identifier:
    """A named unit of the target source tracked by the dependency graph."""
    name: str
    kind: IdentifierKind
    dependencies: list[str] = field(default_factory=list)
    category: str = ""
    aliases: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Span:
    """A located region of source text implementing one identifier or fork."""
    kind: SpanKind
    name: str
    start: int
    end: int
    text: str


@dataclass
class BuildDirectives:
    """What to build: requested names, environment flags and export style."""
    include: list[str] = field(default_factory=list)
    minus: list[str] = field(default_factory=list)
    plus: list[str] = field(default_factory=list)
    category: list[str] = field(default_factory=list)
    legacy: bool = False
    modern: bool = False
    mobile: bool = False
    csp: bool = False
    underscore: bool = False
    backbone: bool = False
    strict: bool = False
    modularize: bool = False
    exports: list[str] | None = None  # None means the flavour's default
    iife: str | None = None
    commands: list[str] = field(default_factory=list)  # recorded in the license header

    @property
    def active_flags(self) -> list[str]:
        return [name for name in EXCLUSIVE_FLAGS if getattr(self, name)]


@dataclass(frozen=True)
class Environment:
    """Resolved environment flags, with the implications between them applied."""
    legacy: bool = False
    modern: bool = False
    mobile: bool = False
    csp: bool = False
    underscore: bool = False
    backbone: bool = False
    strict: bool = False
    modularize: bool = False
    exports: tuple[str, ...] = ALL_EXPORTS

    @classmethod
    def from_directives(cls, directives: BuildDirectives) -> Environment:
        modern = directives.csp or directives.mobile or directives.modern
        underscore = directives.backbone or directives.underscore
        if directives.exports is not None:
            exports = tuple(sorted(directives.exports))
        elif underscore:
            exports = ("commonjs", "global", "node")
        else:
            exports = ALL_EXPORTS
        return cls(
            legacy=directives.legacy and not (modern or underscore),
            modern=modern,
            mobile=directives.mobile,
            csp=directives.csp,
            underscore=underscore,
            backbone=directives.backbone,
            strict=directives.strict,
            modularize=directives.modularize,
            exports=exports,
        )

    def exports_to(self, target: str) -> bool:
        return target in self.exports


@dataclass
class BuildResult:
    """Output of one build invocation."""
    source: str
    build_funcs: list[str] = field(default_factory=list)
    include_props: list[str] = field(default_factory=list)
    include_vars: list[str] = field(default_factory=list)
    rules_fired: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    minified: str | None = None
    source_map: str | None = None
