"""Rule objects and the ordered rule set that runs them."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from custom_build.state import BuildState

logger = logging.getLogger(__name__)

Predicate = Callable[["BuildState"], bool]
Mutation = Callable[["BuildState"], None]


@dataclass(frozen=True)
class EnvironmentRule:
    """A guarded rewrite of the build graph, optionally queueing source edits."""
    name: str
    applies: Predicate
    mutate: Mutation
    description: str = ""

    def run(self, state: BuildState) -> bool:
        if not self.applies(state):
            return False
        self.mutate(state)
        state.rules_fired.append(self.name)
        logger.debug("rule fired: %s", self.name)
        return True


class RuleSet:
    """Rules in registration order; order is significant and never re-sorted."""

    def __init__(self, name: str):
        self.name = name
        self._rules: list[EnvironmentRule] = []

    def rule(self, name: str, when: Predicate | None = None):
        """Decorator registering the decorated function as the next rule.

        Args:
            name: Unique rule identifier, recorded when the rule fires
            when: Guard evaluated against the build state; always true if omitted
        """
        def decorator(func: Mutation) -> Mutation:
            if any(existing.name == name for existing in self._rules):
                raise ValueError(f"Rule already registered: {name}")
            self._rules.append(EnvironmentRule(
                name=name,
                applies=when or (lambda state: True),
                mutate=func,
                description=(func.__doc__ or "").strip(),
            ))
            return func
        return decorator

    def __iter__(self):
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def names(self) -> list[str]:
        return [rule.name for rule in self._rules]

    def apply(self, state: BuildState) -> list[str]:
        """Run every applicable rule in order; return the names that fired."""
        fired = [rule.name for rule in self._rules if rule.run(state)]
        logger.debug("%s: %d of %d rules fired", self.name, len(fired), len(self._rules))
        return fired
