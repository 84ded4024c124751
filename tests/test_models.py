from __future__ import annotations

import pytest

from statepath.core.models import Loop, Path, Rule, State, StateGraph
from statepath.core.snapshot import load_states, states_from_dicts
from statepath.errors import SnapshotError


def test_state_from_dict_accepts_camel_and_snake_case() -> None:
    s = State.from_dict(
        {
            "id": "s1",
            "name": "Greeting",
            "rules": [
                {"id": "r1", "condition": "press 1", "nextState": "s2", "priority": 1},
                {"id": "r2", "condition": "press 2", "next_state": "s3"},
                {"id": "r3", "condition": "hang up"},
                "not a rule",
            ],
        }
    )

    assert [r.next_state for r in s.rules] == ["s2", "s3", None]
    assert s.rules[0].priority == 1
    assert s.rules[1].priority is None
    assert not s.is_end_state


def test_round_trip_keeps_host_keys() -> None:
    d = {"id": "s1", "name": "Menu", "rules": [{"id": "r1", "condition": "c", "nextState": "s2"}]}

    assert State.from_dict(d).to_dict() == d


def test_path_and_loop_dicts() -> None:
    p = Path(states=["A", "B"], rules=["go"], failed_rules=[["skip"]])
    assert p.edge_count == 1
    assert p.to_dict()["failedRules"] == [["skip"]]
    assert Loop(states=["A", "A"], loop_state="A").to_dict() == {"states": ["A", "A"], "loopState": "A"}


def test_state_graph_skips_unresolvable_rules() -> None:
    states = [
        State(
            id="a",
            name="A",
            rules=(
                Rule(id="r0", condition="none"),
                Rule(id="r1", condition="dangling", next_state="zz"),
                Rule(id="r2", condition="ok", next_state="b"),
            ),
        ),
        State(id="b", name="B"),
    ]
    g = StateGraph(states)

    assert "a" in g and "zz" not in g
    assert len(g) == 2
    assert [(i, r.id, t.id) for i, r, t in g.successors(states[0])] == [(2, "r2", "b")]


def test_state_graph_duplicate_ids() -> None:
    first = State(id="x", name="first")
    second = State(id="x", name="second")
    g = StateGraph([first, second])

    assert g.first("x") is first
    assert g.get("x") is second


def test_states_from_dicts_skips_garbage() -> None:
    states = states_from_dicts([{"id": "a", "name": "A"}, 42, None])

    assert [s.id for s in states] == ["a"]


def test_load_states_yaml_and_json(tmp_path) -> None:
    yml = tmp_path / "states.yaml"
    yml.write_text(
        """
states:
  - id: a
    name: Start
    rules:
      - {id: r1, condition: go, nextState: b}
  - id: b
    name: End
"""
    )
    js = tmp_path / "states.json"
    js.write_text('[{"id": "a", "name": "Start", "rules": []}]')

    assert [s.name for s in load_states(yml)] == ["Start", "End"]
    assert load_states(yml)[0].rules[0].next_state == "b"
    assert [s.id for s in load_states(js)] == ["a"]


def test_load_states_errors(tmp_path) -> None:
    with pytest.raises(SnapshotError):
        load_states(tmp_path / "missing.json")

    bad = tmp_path / "bad.yaml"
    bad.write_text("states: {a: 1}")
    with pytest.raises(SnapshotError):
        load_states(bad)

    empty = tmp_path / "empty.yaml"
    empty.write_text("")
    assert load_states(empty) == []
