from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple


def _pick(d: Dict[str, Any], *keys: str) -> Any:
    for k in keys:
        if k in d:
            return d[k]
    return None


@dataclass(frozen=True)
class Rule:
    """
    A directed, labeled edge owned by its source state.

    `next_state` may be None or point at an id missing from the snapshot;
    such rules are never traversed.
    """

    id: str
    condition: str
    next_state: Optional[str] = None
    priority: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "id": self.id,
            "condition": self.condition,
            "nextState": self.next_state,
        }
        if self.priority is not None:
            d["priority"] = self.priority
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Rule":
        next_state = _pick(d, "nextState", "next_state")
        priority = d.get("priority")
        return cls(
            id=str(d.get("id") or ""),
            condition=str(d.get("condition") or ""),
            next_state=str(next_state) if next_state is not None else None,
            priority=int(priority) if isinstance(priority, (int, float)) else None,
        )


@dataclass(frozen=True)
class State:
    """A node of the rule graph. Rule order is the traversal order."""

    id: str
    name: str
    rules: Tuple[Rule, ...] = ()

    @property
    def is_end_state(self) -> bool:
        return len(self.rules) == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "rules": [r.to_dict() for r in self.rules],
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "State":
        rules = d.get("rules") or []
        return cls(
            id=str(d.get("id") or ""),
            name=str(d.get("name") or ""),
            rules=tuple(Rule.from_dict(r) for r in rules if isinstance(r, dict)),
        )


@dataclass
class Path:
    """
    One traversal result.

    - states: state names, start to finish
    - rules: condition labels between consecutive states
    - failed_rules: per step, conditions tried before the chosen rule
      (None for shortest-path results)
    """

    states: List[str]
    rules: List[str] = field(default_factory=list)
    failed_rules: Optional[List[List[str]]] = None

    @property
    def edge_count(self) -> int:
        return len(self.rules)

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"states": list(self.states), "rules": list(self.rules)}
        if self.failed_rules is not None:
            d["failedRules"] = [list(f) for f in self.failed_rules]
        return d


@dataclass
class Loop:
    """A cycle found from `loop_state`; `states` ends with the closing state name."""

    states: List[str]
    loop_state: str

    def to_dict(self) -> Dict[str, Any]:
        return {"states": list(self.states), "loopState": self.loop_state}


class StateGraph:
    """
    Read-only id index over a states snapshot.

    Built once per search call for O(1) rule resolution. The snapshot
    itself is never modified.
    """

    def __init__(self, states: Sequence[State]):
        self.states = states
        self._by_id: Dict[str, State] = {s.id: s for s in states}

    def __contains__(self, state_id: object) -> bool:
        return state_id in self._by_id

    def __len__(self) -> int:
        return len(self.states)

    def get(self, state_id: Optional[str]) -> Optional[State]:
        """Get state by ID (O(1))."""
        if state_id is None:
            return None
        return self._by_id.get(state_id)

    def first(self, state_id: Optional[str]) -> Optional[State]:
        """First state in snapshot order with this id (used for start lookups)."""
        for s in self.states:
            if s.id == state_id:
                return s
        return None

    def successors(self, state: State) -> Iterator[Tuple[int, Rule, State]]:
        """Yield (rule index, rule, target) for every resolvable rule, in rule order."""
        for i, rule in enumerate(state.rules):
            target = self.get(rule.next_state)
            if target is not None:
                yield i, rule, target
