"""Structured build errors: every failure carries a kind and the offending identifiers."""

from __future__ import annotations


class BuildError(Exception):
    """Base class for errors surfaced by a build invocation."""

    kind = "build"

    def __init__(self, message: str, identifiers: list[str] | tuple[str, ...] = ()):
        super().__init__(message)
        self.identifiers = list(identifiers)

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "message": str(self),
            "identifiers": list(self.identifiers),
        }


class InvalidDirectiveError(BuildError):
    """Directives name unknown entries or combine incompatible flags."""

    kind = "invalid_directive"

    def __init__(self, warnings: list[str], identifiers: list[str] | tuple[str, ...] = ()):
        super().__init__("\n".join(warnings), identifiers)
        self.warnings = list(warnings)


class DeadVariableLoopError(BuildError):
    """The dead-variable fixed point did not converge within its pass cap."""

    kind = "dead_variable_loop"


class PruneError(BuildError):
    """Pruning produced output that failed the consistency check."""

    kind = "prune"
