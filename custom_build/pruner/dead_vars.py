"""Dead-variable elimination, iterated to a fixed point.

Removing one variable can leave others unreferenced (a regex only used to
build another regex, a cache only read by a pruned helper), so every pass
re-evaluates the variables still present until a pass finds nothing unused.
"""

from __future__ import annotations

import enum
import logging

from custom_build.errors import DeadVariableLoopError
from custom_build.locator import is_var_used, remove_var, scan_vars, strip_comments, strip_strings
from custom_build.state import BuildState

logger = logging.getLogger(__name__)

MAX_PASSES = 100


class VarState(enum.Enum):
    CANDIDATE = "candidate"
    USED = "used"
    UNUSED = "unused"
    REMOVED = "removed"


def remove_dead_vars(source: str, state: BuildState, max_passes: int = MAX_PASSES) -> str:
    """Remove module-level variables nothing references, until none are left.

    Variables the build asked for explicitly are always kept. A variable whose
    declaration cannot be removed stays in the output and is reported in
    ``state.warnings``. Raises DeadVariableLoopError if the passes exceed
    ``max_passes``.
    """
    shallow = state.is_excluded("runInContext")
    complex_vars = state.graph.tables.complex_vars
    keep = set(state.include_vars)

    # used for reference checks so names in strings and comments do not count
    snippet = strip_strings(strip_comments(source))
    states = {name: VarState.CANDIDATE for name in scan_vars(snippet, shallow)}
    stuck: set[str] = set()
    passes = 0

    while True:
        live = [
            name for name, var_state in states.items()
            if var_state is not VarState.REMOVED and name not in stuck
        ]
        for name in live:
            used = name in keep or is_var_used(snippet, name, shallow, complex_vars)
            states[name] = VarState.USED if used else VarState.UNUSED

        unused = [name for name in live if states[name] is VarState.UNUSED]
        if not unused:
            break

        passes += 1
        if passes > max_passes:
            raise DeadVariableLoopError(
                f"Dead variable removal did not settle after {max_passes} passes",
                unused,
            )
        logger.debug("dead variable pass %d: %s", passes, ", ".join(unused))

        for name in unused:
            updated = remove_var(snippet, name, complex_vars)
            if updated == snippet:
                stuck.add(name)
                logger.warning("unused variable %s could not be removed", name)
                state.warnings.append(f"unused variable {name} could not be removed")
                continue
            snippet = updated
            pruned = remove_var(source, name, complex_vars)
            if pruned == source:
                logger.debug("variable %s removed from the reference copy only", name)
            source = pruned
            states[name] = VarState.REMOVED

    removed = sorted(name for name, var_state in states.items() if var_state is VarState.REMOVED)
    if removed:
        logger.debug("removed %d dead variables: %s", len(removed), ", ".join(removed))
    return source
