from __future__ import annotations

import pytest

from statepath.core.models import Rule, State
from statepath.core.navigation import (
    build_adjacency_map,
    dead_end_states,
    find_state_by_id,
    find_state_by_name,
    orphaned_states,
    reachable_states,
    referencing_states,
    rule_by_id,
    target_state,
)
from statepath.core.validation import can_delete_state, validate_states


@pytest.fixture
def states():
    return [
        State(
            id="s1",
            name="Main Menu",
            rules=(
                Rule(id="r1", condition="press 1", next_state="s2"),
                Rule(id="r2", condition="press 2", next_state="s3"),
                Rule(id="r3", condition="press 1 again", next_state="s2"),
            ),
        ),
        State(id="s2", name="Billing", rules=(Rule(id="r4", condition="done", next_state="s3"),)),
        State(id="s3", name="Goodbye"),
        State(id="s4", name="Legacy", rules=(Rule(id="r5", condition="jump", next_state="gone"),)),
    ]


def test_find_state_by_name_match_order(states):
    assert find_state_by_name(states, " Billing ").id == "s2"
    assert find_state_by_name(states, "goodbye").id == "s3"
    assert find_state_by_name(states, "menu").id == "s1"
    assert find_state_by_name(states, "Legacy flow v2").id == "s4"
    assert find_state_by_name(states, "unknown") is None
    assert find_state_by_name(states, "") is None


def test_find_by_id_and_target(states):
    assert find_state_by_id(states, "s3").name == "Goodbye"
    assert find_state_by_id(states, None) is None
    assert target_state(states, states[0].rules[1]).id == "s3"
    assert target_state(states, states[3].rules[0]) is None


def test_referencing_and_reachable(states):
    assert [s.id for s in referencing_states(states, "s3")] == ["s1", "s2"]
    assert referencing_states(states, "") == []
    assert [s.id for s in reachable_states(states[0], states)] == ["s2", "s3"]
    assert reachable_states(None, states) == []


def test_orphans_and_dead_ends(states):
    assert [s.id for s in orphaned_states(states)] == ["s1", "s4"]
    assert [s.id for s in dead_end_states(states)] == ["s3"]


def test_rule_by_id(states):
    assert rule_by_id(states[1], "r4").condition == "done"
    assert rule_by_id(states[1], "r1") is None


def test_adjacency_map_dedupes_in_order(states):
    assert build_adjacency_map(states) == {
        "s1": ["s2", "s3"],
        "s2": ["s3"],
        "s3": [],
        "s4": ["gone"],
    }


def test_validate_states_reports_problems(states):
    broken = states + [
        State(id="s2", name="Billing copy"),
        State(id="s5", name="", rules=(Rule(id="", condition="x", next_state="s1"),)),
    ]

    report = validate_states(broken)

    assert not report.valid
    assert report.errors == [
        "Invalid state at index 5: unknown",
        "Duplicate state ID: s2",
        'State "Legacy" has rule pointing to non-existent state: gone',
    ]


def test_validate_clean_snapshot():
    states = [State(id="a", name="A", rules=(Rule(id="r", condition="c", next_state="b"),)), State(id="b", name="B")]

    report = validate_states(states)

    assert report.valid
    assert report.errors == []


def test_can_delete_state(states):
    check = can_delete_state(states, "s3")
    assert not check.can_delete
    assert [s.id for s in check.referencing_states] == ["s1", "s2"]

    assert can_delete_state(states, "s1").can_delete

    looped = [State(id="x", name="X", rules=(Rule(id="r", condition="again", next_state="x"),))]
    assert can_delete_state(looped, "x").can_delete


def test_validate_states_reports_non_state_entries(states):
    report = validate_states(states + [{"id": "s9", "name": "raw dict"}, None])

    assert not report.valid
    assert report.errors[:2] == ["Invalid state at index 4: unknown", "Invalid state at index 5: unknown"]
    assert 'State "Legacy" has rule pointing to non-existent state: gone' in report.errors
