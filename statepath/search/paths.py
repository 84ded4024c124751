"""Path-Finding Engine.

Depth-first enumeration of simple paths from a start state. A path is
complete when, depending on the search mode, it ends in a state without
rules, ends at a chosen target, or ends at a chosen target after stepping
through a required intermediate state.

The traversal runs over an explicit stack of immutable frames, so deep
graphs do not hit the interpreter's recursion limit and no accumulator is
shared between sibling branches.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, FrozenSet, List, NamedTuple, Optional, Sequence, Tuple

from ..config import SearchSettings
from ..core.models import Path, State, StateGraph
from ..errors import InvalidSearchError, NotFoundError
from .cancel import Checkpoint, ProgressCallback, raise_if_cancelled

logger = logging.getLogger(__name__)

PathBatchCallback = Callable[[List[Path]], Any]


class SearchMode(str, Enum):
    END_STATES = "end_states"
    TARGET = "target"
    INTERMEDIATE = "intermediate"


class _Frame(NamedTuple):
    state: State
    names: Tuple[str, ...]  # path up to, not including, `state`
    visited: FrozenSet[str]
    rules: Tuple[str, ...]
    failed: Tuple[Tuple[str, ...], ...]
    found_intermediate: bool
    depth: int


def resolve_mode(end_state_id: Optional[str], intermediate_state_id: Optional[str]) -> SearchMode:
    if intermediate_state_id:
        if not end_state_id:
            raise InvalidSearchError("An intermediate state requires an end state")
        return SearchMode.INTERMEDIATE
    if end_state_id:
        return SearchMode.TARGET
    return SearchMode.END_STATES


def _is_complete(
    mode: SearchMode, state: State, end_state_id: Optional[str], found_intermediate: bool
) -> bool:
    if mode is SearchMode.INTERMEDIATE:
        return state.id == end_state_id and found_intermediate
    if mode is SearchMode.TARGET:
        return state.id == end_state_id
    return state.is_end_state


async def find_paths(
    states: Sequence[State],
    start_state_id: str,
    *,
    end_state_id: Optional[str] = None,
    intermediate_state_id: Optional[str] = None,
    on_progress: Optional[ProgressCallback] = None,
    on_path_batch: Optional[PathBatchCallback] = None,
    cancel_token: Optional[Any] = None,
    settings: Optional[SearchSettings] = None,
) -> List[Path]:
    """
    Enumerate every simple path from `start_state_id` that satisfies the mode.

    Args:
        states: Snapshot of the state machine (never modified)
        start_state_id: State to start from
        end_state_id: Only paths ending here qualify
        intermediate_state_id: Paths must also step through this state
            (requires end_state_id)
        on_progress: Receives a non-decreasing estimate in [0, 100];
            the last call of a completed search is exactly 100
        on_path_batch: Receives a copy of all paths found so far each time
            the count reaches a multiple of settings.batch_size
        cancel_token: Any object with a boolean `cancelled` attribute
        settings: Tuning constants (defaults when None)

    Returns:
        Paths in DFS discovery order

    Raises:
        NotFoundError: start, end or intermediate id not in `states`
        InvalidSearchError: intermediate given without end
        CancelledError: the token was set before or during the search
    """
    settings = settings or SearchSettings()
    graph = StateGraph(states)

    start = graph.first(start_state_id)
    if start is None:
        raise NotFoundError("start", start_state_id)
    mode = resolve_mode(end_state_id, intermediate_state_id)
    if end_state_id and end_state_id not in graph:
        raise NotFoundError("end", end_state_id)
    if intermediate_state_id and intermediate_state_id not in graph:
        raise NotFoundError("intermediate", intermediate_state_id)

    raise_if_cancelled(cancel_token)

    total = len(states)
    max_depth = total * settings.depth_multiplier
    checkpoint = Checkpoint(settings.yield_interval, on_progress)
    paths: List[Path] = []
    processed = 0
    pruned = 0

    logger.debug(
        "find_paths start=%s mode=%s end=%s intermediate=%s states=%d",
        start_state_id,
        mode.value,
        end_state_id,
        intermediate_state_id,
        total,
    )
    checkpoint.report(0)

    stack: List[_Frame] = [_Frame(start, (), frozenset(), (), (), False, 0)]
    while stack:
        frame = stack.pop()
        raise_if_cancelled(cancel_token)

        if frame.depth > max_depth:
            continue

        processed += 1
        if checkpoint.due():
            checkpoint.report(min(processed / (total * 2) * 100, 99))
            await checkpoint.pause()
            raise_if_cancelled(cancel_token)

        state = frame.state
        names = frame.names + (state.name,)
        visited = frame.visited | {state.id}

        if _is_complete(mode, state, end_state_id, frame.found_intermediate):
            paths.append(
                Path(
                    states=list(names),
                    rules=list(frame.rules),
                    failed_rules=[list(f) for f in frame.failed],
                )
            )
            if len(paths) % settings.batch_size == 0 and on_path_batch is not None:
                on_path_batch(list(paths))

        children: List[_Frame] = []
        for i, rule, target in graph.successors(state):
            if target.id in visited:
                pruned += 1
                continue
            tried = tuple(r.condition for r in state.rules[:i])
            children.append(
                _Frame(
                    state=target,
                    names=names,
                    visited=visited,
                    rules=frame.rules + (rule.condition,),
                    failed=frame.failed + (tried,),
                    found_intermediate=frame.found_intermediate or target.id == intermediate_state_id,
                    depth=frame.depth + 1,
                )
            )
        # First rule must be explored first
        stack.extend(reversed(children))

    checkpoint.report(100)
    logger.info("find_paths found %d path(s) from %s (%d frames)", len(paths), start_state_id, processed)
    logger.debug("find_paths pruned %d cyclic edge(s)", pruned)
    return paths
