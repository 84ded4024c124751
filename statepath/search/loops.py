"""Loop Detector.

For every state, look for a walk that comes back to it. Only the first
cycle found per state is reported, and the same cycle seen from different
states is reported once per state.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence, Set, Tuple

from ..config import SearchSettings
from ..core.models import Loop, State, StateGraph
from .cancel import Checkpoint, ProgressCallback, raise_if_cancelled

logger = logging.getLogger(__name__)


def first_loop_from(graph: StateGraph, origin: State) -> Optional[Loop]:
    """
    Stack-based DFS from `origin` until it is popped again.

    Rules are pushed in order, so the last rule of a state is explored
    first. A rule pointing back at its own state counts as a loop.
    """
    visited: Set[str] = set()
    stack: List[Tuple[State, List[str]]] = [(origin, [origin.name])]

    while stack:
        current, path = stack.pop()

        if current.id == origin.id and len(path) > 1:
            return Loop(states=path, loop_state=origin.name)

        if current.id in visited:
            continue
        visited.add(current.id)

        for _, _, target in graph.successors(current):
            stack.append((target, path + [target.name]))

    return None


async def find_loops(
    states: Sequence[State],
    *,
    on_progress: Optional[ProgressCallback] = None,
    cancel_token: Optional[Any] = None,
    settings: Optional[SearchSettings] = None,
) -> List[Loop]:
    """
    Report at most one loop per state, in snapshot order.

    Progress is reported once per state; cancellation is checked once per
    state, so a single state's search always runs to completion.
    """
    settings = settings or SearchSettings()
    graph = StateGraph(states)
    checkpoint = Checkpoint(settings.yield_interval, on_progress)
    loops: List[Loop] = []
    total = len(states)

    raise_if_cancelled(cancel_token)
    checkpoint.report(0)

    for processed, state in enumerate(states, start=1):
        raise_if_cancelled(cancel_token)

        loop = first_loop_from(graph, state)
        if loop is not None:
            loops.append(loop)

        checkpoint.report(processed / total * 100)
        if checkpoint.due():
            await checkpoint.pause()

    if total == 0:
        checkpoint.report(100)

    logger.info("find_loops found %d loop(s) across %d state(s)", len(loops), total)
    return loops
