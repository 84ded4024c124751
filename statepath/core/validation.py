"""Structural validation of a states snapshot.

Dangling rule targets are reported here so a host can surface them, but the
search engine keeps tolerating them (they are simply not traversable).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from .models import Rule, State
from .navigation import referencing_states

logger = logging.getLogger(__name__)


@dataclass
class ValidationReport:
    valid: bool
    errors: List[str] = field(default_factory=list)


@dataclass
class DeleteCheck:
    can_delete: bool
    referencing_states: List[State] = field(default_factory=list)


def is_valid_rule(rule: object) -> bool:
    if not isinstance(rule, Rule):
        return False
    if not rule.id or not rule.condition:
        return False
    return rule.next_state is None or isinstance(rule.next_state, str)


def is_valid_state(state: object) -> bool:
    if not isinstance(state, State):
        return False
    if not state.id or not state.name:
        return False
    return all(is_valid_rule(r) for r in state.rules)


def validate_states(states: Sequence[State]) -> ValidationReport:
    """
    Check a snapshot for malformed entries, duplicate ids and dangling rules.

    Returns:
        ValidationReport with one message per problem, in snapshot order
    """
    errors: List[str] = []

    for index, state in enumerate(states):
        if not is_valid_state(state):
            label = getattr(state, "name", "") or "unknown"
            errors.append(f"Invalid state at index {index}: {label}")

    ids = set()
    for state in states:
        state_id = getattr(state, "id", None)
        if state_id is None:
            continue
        if state_id in ids:
            errors.append(f"Duplicate state ID: {state_id}")
        ids.add(state_id)

    for state in states:
        if not isinstance(state, State):
            continue
        for rule in state.rules:
            if not isinstance(rule, Rule):
                continue
            if rule.next_state and rule.next_state not in ids:
                errors.append(
                    f'State "{state.name}" has rule pointing to non-existent state: {rule.next_state}'
                )

    if errors:
        logger.debug("Snapshot validation found %d problem(s)", len(errors))
    return ValidationReport(valid=not errors, errors=errors)


def can_delete_state(states: Sequence[State], state_id: str) -> DeleteCheck:
    """A state can be deleted when no other state's rules point at it."""
    refs = [s for s in referencing_states(states, state_id) if s.id != state_id]
    return DeleteCheck(can_delete=not refs, referencing_states=refs)
