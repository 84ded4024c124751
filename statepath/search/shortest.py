"""Shortest-Path Finder (BFS). Synchronous; visits each state at most once."""

from __future__ import annotations

from collections import deque
from typing import Dict, List, Optional, Sequence, Set, Tuple

from ..core.models import Path, State, StateGraph


def find_shortest_path(states: Sequence[State], from_state_id: str, to_state_id: str) -> Optional[Path]:
    """
    Fewest-rules path between two states.

    Returns:
        Path without failed_rules, or None if either id is missing or
        `to_state_id` cannot be reached
    """
    graph = StateGraph(states)
    start = graph.first(from_state_id)
    if start is None or to_state_id not in graph:
        return None

    visited: Set[str] = {start.id}
    queue: deque[Tuple[State, List[str], List[str]]] = deque([(start, [start.name], [])])

    while queue:
        current, names, rules = queue.popleft()

        if current.id == to_state_id:
            return Path(states=names, rules=rules)

        for _, rule, target in graph.successors(current):
            if target.id in visited:
                continue
            visited.add(target.id)
            queue.append((target, names + [target.name], rules + [rule.condition]))

    return None


def is_reachable(states: Sequence[State], from_state_id: str, to_state_id: str) -> bool:
    return find_shortest_path(states, from_state_id, to_state_id) is not None


def shortest_distances(states: Sequence[State], from_state_id: str) -> Dict[str, int]:
    """Rule count to every state reachable from `from_state_id` (itself at 0)."""
    graph = StateGraph(states)
    start = graph.first(from_state_id)
    if start is None:
        return {}

    distances: Dict[str, int] = {start.id: 0}
    queue: deque[State] = deque([start])
    while queue:
        current = queue.popleft()
        for _, _, target in graph.successors(current):
            if target.id not in distances:
                distances[target.id] = distances[current.id] + 1
                queue.append(target)
    return distances
