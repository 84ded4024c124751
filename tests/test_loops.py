from __future__ import annotations

import asyncio

import pytest

from statepath.config import SearchSettings
from statepath.core.models import Rule, State
from statepath.errors import CancelledError
from statepath.search import CancelToken, find_loops


def _state(sid, *targets):
    return State(
        id=sid,
        name=sid.upper(),
        rules=tuple(Rule(id=f"{sid}{i}", condition=f"to {t}", next_state=t) for i, t in enumerate(targets)),
    )


def test_two_cycle_reported_from_both_states() -> None:
    states = [_state("a", "b", "c"), _state("b", "a"), _state("c")]

    loops = asyncio.run(find_loops(states))

    assert [l.to_dict() for l in loops] == [
        {"states": ["A", "B", "A"], "loopState": "A"},
        {"states": ["B", "A", "B"], "loopState": "B"},
    ]


def test_self_rule_is_a_loop() -> None:
    states = [_state("a", "a")]

    loops = asyncio.run(find_loops(states))

    assert len(loops) == 1
    assert loops[0].states == ["A", "A"]


def test_cycle_not_through_origin_is_not_reported_for_origin() -> None:
    states = [_state("a", "b"), _state("b", "c"), _state("c", "b")]

    loops = asyncio.run(find_loops(states))

    assert [l.loop_state for l in loops] == ["B", "C"]
    assert loops[0].states == ["B", "C", "B"]


def test_acyclic_graph_has_no_loops() -> None:
    states = [_state("a", "b", "c"), _state("b", "c"), _state("c"), _state("d", "missing")]

    assert asyncio.run(find_loops(states)) == []


def test_only_first_loop_per_state() -> None:
    # a -> b -> a and a -> c -> a; the last rule is explored first
    states = [_state("a", "b", "c"), _state("b", "a"), _state("c", "a")]

    loops = asyncio.run(find_loops(states))

    from_a = [l for l in loops if l.loop_state == "A"]
    assert len(from_a) == 1
    assert from_a[0].states == ["A", "C", "A"]


def test_progress_once_per_state() -> None:
    states = [_state("a", "b"), _state("b", "c"), _state("c")]
    progress = []

    asyncio.run(find_loops(states, on_progress=progress.append))

    assert progress[0] == 0
    assert progress[1:] == pytest.approx([100 / 3, 200 / 3, 100])


def test_empty_snapshot_completes() -> None:
    progress = []

    assert asyncio.run(find_loops([], on_progress=progress.append)) == []
    assert progress[-1] == 100


def test_cancelled_token_raises() -> None:
    states = [_state("a", "b"), _state("b", "a")]

    with pytest.raises(CancelledError):
        asyncio.run(find_loops(states, cancel_token=CancelToken(cancelled=True)))


def test_cancel_between_states() -> None:
    states = [_state("a", "b"), _state("b", "a"), _state("c", "c")]
    token = CancelToken()
    seen = []

    def on_progress(pct):
        seen.append(pct)
        if pct > 0:
            token.cancel()

    with pytest.raises(CancelledError):
        asyncio.run(find_loops(states, on_progress=on_progress, cancel_token=token))

    assert len(seen) == 2


def test_concurrent_task_can_cancel_a_running_search() -> None:
    # Acyclic chain: every state's search walks the rest of the chain
    count = 3000
    states = [_state(f"s{i}", f"s{i + 1}") for i in range(count - 1)] + [_state(f"s{count - 1}")]
    token = CancelToken()
    progress = []

    async def cancel_later():
        await asyncio.sleep(0.05)
        token.cancel()

    async def main():
        canceller = asyncio.create_task(cancel_later())
        with pytest.raises(CancelledError):
            await find_loops(
                states,
                on_progress=progress.append,
                cancel_token=token,
                settings=SearchSettings(yield_interval=0.001),
            )
        await canceller

    asyncio.run(main())

    assert token.cancelled
    assert progress[-1] < 100
