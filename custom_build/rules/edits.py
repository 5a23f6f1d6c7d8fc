"""Source edits that rules queue for the pruner to apply."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Union

Replacement = Union[str, Callable]


@dataclass(frozen=True)
class Substitute:
    """Replace the body of function ``name`` with ``body``, reindented in place."""
    name: str
    body: str


@dataclass(frozen=True)
class Transplant:
    """Make ``name`` use the implementation of ``donor`` (``keys`` <- ``shimKeys``)."""
    name: str
    donor: str


@dataclass(frozen=True)
class Rewrite:
    """Regex substitution over the whole source or, with ``within``, one function."""
    pattern: str
    replacement: Replacement
    within: str | None = None
    count: int = 0
    flags: int = 0


@dataclass(frozen=True)
class SupportFlag:
    """Pin ``support.<flag>`` to a literal value, or drop it when value is None.

    With ``inline`` the definition is dropped and every ``support.<flag>``
    reference is replaced by the value.
    """
    flag: str
    value: str | None = None
    inline: bool = False


@dataclass(frozen=True)
class PromoteFork:
    """Replace a function's body with its fallback fork and drop the fork."""
    fork: str


@dataclass(frozen=True)
class InsertAfter:
    """Insert text after the declaration of function ``anchor``, at its indentation."""
    anchor: str
    text: str


SourceEdit = Union[Substitute, Transplant, Rewrite, SupportFlag, PromoteFork, InsertAfter]
