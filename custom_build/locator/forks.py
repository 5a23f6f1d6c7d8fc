"""Environment-specific forks: alternate implementations guarded by feature checks."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from custom_build.locator.base import LINE_COMMENTS, block_end
from custom_build.locator.patterns import locate_function
from custom_build.models import Span, SpanKind

if TYPE_CHECKING:
    from custom_build.state import BuildState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Fork:
    """A named fork.

    ``owner`` is the function whose behaviour the fork provides; module-level
    forks are searched in the whole source, the rest inside the owner's span.
    A pattern ending at an opening brace spans through the matching close
    brace; otherwise the ``fork`` group (or the whole match) is the span.
    ``drop_when`` tells whether the active environment makes the fork dead.
    """
    name: str
    owner: str | None
    pattern: re.Pattern
    module_level: bool = True
    drop_when: Callable[[BuildState], bool] | None = None


def _modern(state: BuildState) -> bool:
    return state.env.modern


def _modern_desktop(state: BuildState) -> bool:
    return state.env.modern and not state.env.mobile


def _no_native_defer(state: BuildState) -> bool:
    env = state.env
    return (env.legacy or env.mobile or env.underscore) and not state.is_lodash("defer")


FORKS: dict[str, Fork] = {
    fork.name: fork for fork in (
        Fork("createObject", "createObject",
             re.compile(LINE_COMMENTS + r"\n( *)if *\((?:!nativeCreate)[^{]*\{"),
             drop_when=_modern_desktop),
        Fork("defer", "defer",
             re.compile(LINE_COMMENTS + r"\n( *)if *\(isV8 *&& *freeModule[^{]*\{"),
             drop_when=_no_native_defer),
        Fork("isArguments", "isArguments",
             re.compile(LINE_COMMENTS + r"\n( *)if *\((?:!support\.argsClass|!isArguments)[^{]*\{"),
             drop_when=_modern),
        Fork("isFunction", "isFunction",
             re.compile(LINE_COMMENTS + r"\n( *)if *\(isFunction\(/x/[^{]*\{"),
             drop_when=_modern_desktop),
        Fork("spliceObjects", None,
             re.compile(LINE_COMMENTS + r"\n( *)if *\(!support\.spliceObjects[^{]*\{"),
             drop_when=_modern),
        Fork("isArray", "isArray",
             re.compile(r"=\s*nativeIsArray\b(?P<fork>[\s\S]*?)(?=[;\s]*$)"),
             module_level=False),
        Fork("setBindData", "setBindData",
             re.compile(r"(?P<fork>!defineProperty[^:]+:\s*)"),
             module_level=False, drop_when=_modern),
    )
}


def locate_fork(source: str, fork: Fork | str) -> Span | None:
    """Span of a fork in source, or None when it is not present."""
    if isinstance(fork, str):
        fork = FORKS[fork]

    offset = 0
    text = source
    if not fork.module_level:
        owner = locate_function(source, fork.owner)
        if owner is None:
            logger.debug("no owner span for fork %s", fork.name)
            return None
        offset, text = owner.start, owner.text

    match = fork.pattern.search(text)
    if match is None:
        logger.debug("no span for fork %s", fork.name)
        return None

    if "fork" in fork.pattern.groupindex:
        start, end = match.start("fork"), match.end("fork")
    elif match.group(0).endswith("{"):
        start, end = match.start(), block_end(text, match.end() - 1)
    else:
        start, end = match.span()
    return Span(SpanKind.FORK, fork.name, offset + start, offset + end, text[start:end])


def remove_fork(source: str, fork: Fork | str) -> str:
    span = locate_fork(source, fork)
    if span is None:
        return source
    return source[:span.start] + source[span.end:]
