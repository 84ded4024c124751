"""Graph partitioning for splitting a large state machine into subgraphs.

- Connected components: weakly connected, BFS over rules in both directions
- Partitions: components when the graph is disconnected, otherwise
  degree-seeded greedy assignment
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence, Set

from .models import State

DEFAULT_TARGET_PARTITIONS = 3


@dataclass
class BoundaryEdge:
    from_state: str
    to_state: str
    condition: str
    type: str = "outgoing"


@dataclass
class Partition:
    id: str
    name: str
    state_ids: List[str]
    states: List[State]
    boundary_edges: List[BoundaryEdge] = field(default_factory=list)

    @property
    def state_count(self) -> int:
        return len(self.state_ids)

    @property
    def boundaries(self) -> int:
        return len(self.boundary_edges)


def _incoming(states: Sequence[State]) -> Dict[str, List[str]]:
    incoming: Dict[str, List[str]] = {}
    for s in states:
        for r in s.rules:
            if r.next_state:
                incoming.setdefault(r.next_state, []).append(s.id)
    return incoming


def find_connected_components(states: Sequence[State]) -> List[List[str]]:
    """
    Weakly connected components as lists of state ids.

    Components appear in snapshot order of their first state; ids inside a
    component appear in BFS order.
    """
    by_id = {s.id: s for s in states}
    incoming = _incoming(states)
    visited: Set[str] = set()
    components: List[List[str]] = []

    for state in states:
        if state.id in visited:
            continue

        component: List[str] = []
        queue: deque[str] = deque([state.id])
        visited.add(state.id)

        while queue:
            current_id = queue.popleft()
            component.append(current_id)

            current = by_id.get(current_id)
            if current is None:
                continue

            neighbors: List[str] = [r.next_state for r in current.rules if r.next_state]
            neighbors.extend(incoming.get(current_id, []))
            for nid in neighbors:
                # Dangling targets are not part of any component
                if nid in by_id and nid not in visited:
                    visited.add(nid)
                    queue.append(nid)

        components.append(component)

    return components


def state_connections(states: Sequence[State]) -> List[Dict[str, object]]:
    """Per-state degree (outgoing rules + incoming rules)."""
    incoming = _incoming(states)
    return [
        {"id": s.id, "name": s.name, "connections": len(s.rules) + len(incoming.get(s.id, []))}
        for s in states
    ]


def connection_score(state_id: str, partition: Iterable[str], states: Sequence[State]) -> int:
    """Number of rules between `state_id` and the members of `partition`, both directions."""
    members = set(partition)
    by_id = {s.id: s for s in states}
    state = by_id.get(state_id)
    if state is None:
        return 0

    score = sum(1 for r in state.rules if r.next_state in members)
    for member_id in members:
        member = by_id.get(member_id)
        if member is not None:
            score += sum(1 for r in member.rules if r.next_state == state_id)
    return score


def find_partitions(states: Sequence[State], target_partitions: int = DEFAULT_TARGET_PARTITIONS) -> List[List[str]]:
    """
    Group state ids into at most `target_partitions` partitions.

    A disconnected graph is returned as its connected components regardless
    of the target. A connected graph is seeded with its highest-degree states
    and every other state joins the partition it has most rules with (ties go
    to the earlier partition).
    """
    if not states:
        return []
    if len(states) == 1:
        return [[states[0].id]]

    target = max(1, min(target_partitions, len(states)))

    components = find_connected_components(states)
    if len(components) > 1:
        return components

    # Stable sort keeps snapshot order among equal degrees
    ranked = sorted(state_connections(states), key=lambda c: -int(c["connections"]))

    partitions: List[List[str]] = [[str(c["id"])] for c in ranked[:target]]
    assigned = {p[0] for p in partitions}

    for conn in ranked:
        sid = str(conn["id"])
        if sid in assigned:
            continue
        scores = [connection_score(sid, p, states) for p in partitions]
        best = scores.index(max(scores))
        partitions[best].append(sid)
        assigned.add(sid)

    return [p for p in partitions if p]


def find_boundary_edges(partition_states: Sequence[State], all_states: Sequence[State]) -> List[BoundaryEdge]:
    """Rules leaving the partition towards an existing state."""
    member_ids = {s.id for s in partition_states}
    by_id = {s.id: s for s in all_states}
    out: List[BoundaryEdge] = []
    for s in partition_states:
        for r in s.rules:
            if not r.next_state or r.next_state in member_ids:
                continue
            target = by_id.get(r.next_state)
            if target is not None:
                out.append(BoundaryEdge(from_state=s.name, to_state=target.name, condition=r.condition))
    return out


def find_entry_points(partition_states: Sequence[State], all_states: Sequence[State]) -> List[str]:
    """Names of partition states targeted by rules from outside the partition."""
    member_by_id = {s.id: s for s in partition_states}
    names: List[str] = []
    for s in all_states:
        if s.id in member_by_id:
            continue
        for r in s.rules:
            target = member_by_id.get(r.next_state or "")
            if target is not None and target.name not in names:
                names.append(target.name)
    return names


def find_exit_points(partition_states: Sequence[State], all_states: Sequence[State]) -> List[str]:
    """Names of partition states with at least one rule leaving the partition."""
    member_ids = {s.id for s in partition_states}
    names: List[str] = []
    for s in partition_states:
        if any(r.next_state and r.next_state not in member_ids for r in s.rules):
            if s.name not in names:
                names.append(s.name)
    return names


def _make_partition(pid: str, name: str, state_ids: List[str], states: Sequence[State]) -> Partition:
    wanted = set(state_ids)
    members = [s for s in states if s.id in wanted]
    return Partition(
        id=pid,
        name=name,
        state_ids=state_ids,
        states=members,
        boundary_edges=find_boundary_edges(members, states),
    )


def split_graph(states: Sequence[State], target_partitions: int = DEFAULT_TARGET_PARTITIONS) -> List[Partition]:
    """Split a snapshot into `Partition` objects with boundary metadata."""
    if not states:
        return []
    groups = find_partitions(states, target_partitions)
    return [
        _make_partition(f"partition-{i + 1}", f"Subgraph {i + 1}", ids, states)
        for i, ids in enumerate(groups)
    ]


def validate_partitions(partitions: Sequence[Partition]) -> bool:
    """True when no state id belongs to more than one partition."""
    seen: Set[str] = set()
    for p in partitions:
        for sid in p.state_ids:
            if sid in seen:
                return False
            seen.add(sid)
    return True


def merge_partitions(partitions: Sequence[Partition], states: Sequence[State]) -> Partition:
    merged: List[str] = []
    for p in partitions:
        for sid in p.state_ids:
            if sid not in merged:
                merged.append(sid)
    return _make_partition("partition-merged", "Merged Subgraph", merged, states)


def split_partition(partition: Partition, states: Sequence[State], target_count: int = 2) -> List[Partition]:
    """Re-split the states of one partition; rules leaving it are ignored."""
    wanted = set(partition.state_ids)
    return split_graph([s for s in states if s.id in wanted], target_count)
