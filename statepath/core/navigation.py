"""Rule/state navigation helpers over a states snapshot.

All helpers are synchronous, read-only, and tolerate dangling rule targets.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from .models import Rule, State


def find_state_by_id(states: Sequence[State], state_id: Optional[str]) -> Optional[State]:
    if not state_id:
        return None
    for s in states:
        if s.id == state_id:
            return s
    return None


def find_state_by_name(states: Sequence[State], name: Optional[str]) -> Optional[State]:
    """
    Find a state by display name.

    Tries:
    1. Exact match
    2. Case-insensitive exact match
    3. Case-insensitive partial match (name contains query)
    4. Reverse partial match (query contains name)
    """
    if not name:
        return None

    query = name.strip()
    for s in states:
        if s.name == query:
            return s

    query_lower = query.lower()
    for s in states:
        if s.name.lower() == query_lower:
            return s

    for s in states:
        if query_lower in s.name.lower():
            return s

    for s in states:
        # Empty names would match everything here
        if s.name and s.name.lower() in query_lower:
            return s

    return None


def target_state(states: Sequence[State], rule: Optional[Rule]) -> Optional[State]:
    """Resolve a rule's target, or None for missing/dangling targets."""
    if rule is None or not rule.next_state:
        return None
    return find_state_by_id(states, rule.next_state)


def referencing_states(states: Sequence[State], state_id: Optional[str]) -> List[State]:
    """States with at least one rule pointing at `state_id`."""
    if not state_id:
        return []
    return [s for s in states if any(r.next_state == state_id for r in s.rules)]


def reachable_states(state: Optional[State], states: Sequence[State]) -> List[State]:
    """Direct successors of `state`, in snapshot order."""
    if state is None:
        return []
    targets = {r.next_state for r in state.rules if r.next_state is not None}
    return [s for s in states if s.id in targets]


def orphaned_states(states: Sequence[State]) -> List[State]:
    """States that no rule points at."""
    referenced = {r.next_state for s in states for r in s.rules if r.next_state}
    return [s for s in states if s.id not in referenced]


def dead_end_states(states: Sequence[State]) -> List[State]:
    return [s for s in states if s.is_end_state]


def rule_by_id(state: Optional[State], rule_id: Optional[str]) -> Optional[Rule]:
    if state is None or not rule_id:
        return None
    for r in state.rules:
        if r.id == rule_id:
            return r
    return None


def build_adjacency_map(states: Sequence[State]) -> Dict[str, List[str]]:
    """
    Map each state id to the distinct ids its rules point at.

    Targets keep first-seen rule order; dangling ids are kept as written.
    """
    adjacency: Dict[str, List[str]] = {}
    for s in states:
        seen: List[str] = []
        for r in s.rules:
            if r.next_state and r.next_state not in seen:
                seen.append(r.next_state)
        adjacency[s.id] = seen
    return adjacency
