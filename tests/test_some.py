"""Tests for any() and some()."""

import asyncio

import pytest

from pledge import Outcome, Promise, RangeError, Result
from fakes import Recorder, workload_gen


def test_any_returns_first_success_ignoring_failures() -> None:
    err = RuntimeError("network")

    async def run():
        promise = Promise()
        ws = [workload_gen(err, 0.01), workload_gen("b", 0.05), workload_gen("c", 0.2)]
        got = await promise.any(ws)
        await promise.drain()
        return got

    assert asyncio.run(run()) == [Result(1, Outcome.Success("b"))]


def test_any_returns_all_failures_sorted() -> None:
    errs = [RuntimeError(f"e{i}") for i in range(3)]

    async def run():
        ws = [workload_gen(errs[0], 0.05), workload_gen(errs[1], 0.01), workload_gen(errs[2], 0.03)]
        return await Promise().any(ws)

    got = asyncio.run(run())
    assert [r.idx for r in got] == [0, 1, 2]
    assert [r.error for r in got] == errs


def test_any_empty() -> None:
    assert asyncio.run(Promise().any([])) == []


def test_some_count_above_length_is_range_error() -> None:
    recorder = Recorder()

    async def run():
        promise = Promise()
        got = await promise.some([recorder.workload(1), recorder.workload(2)], 3)
        return got, promise.background

    got, background = asyncio.run(run())
    assert len(got) == 1
    assert isinstance(got[0].error, RangeError)
    assert got[0].error.count == 3
    assert got[0].error.size == 2
    assert "less than or equal to the length" in str(got[0].error)
    assert recorder.calls == 0
    assert background == 0


def test_some_negative_count_is_range_error() -> None:
    got = asyncio.run(Promise().some([workload_gen(1)], -1))
    assert isinstance(got[0].error, RangeError)


def test_some_range_error_on_empty_input() -> None:
    got = asyncio.run(Promise().some([], 1))
    assert isinstance(got[0].error, RangeError)


def test_some_zero_count_launches_nothing() -> None:
    recorder = Recorder()

    async def run():
        return await Promise().some([recorder.workload(1)], 0)

    assert asyncio.run(run()) == []
    assert recorder.calls == 0
    assert asyncio.run(Promise().some([], 0)) == []


def test_some_returns_first_successes_in_submission_order() -> None:
    async def run():
        promise = Promise()
        ws = [workload_gen(1, 0.05), workload_gen(2, 0.01), workload_gen(3, 0.3)]
        got = await promise.some(ws, 2)
        await promise.drain()
        return got

    assert asyncio.run(run()) == [
        Result(0, Outcome.Success(1)),
        Result(1, Outcome.Success(2)),
    ]


def test_some_skips_failures_while_reachable() -> None:
    err = RuntimeError("network")

    async def run():
        ws = [workload_gen(err, 0.01), workload_gen("b", 0.05), workload_gen("c", 0.03)]
        return await Promise().some(ws, 2)

    got = asyncio.run(run())
    assert [(r.idx, r.payload) for r in got] == [(1, "b"), (2, "c")]


def test_some_unreachable_returns_all_failures() -> None:
    errs = [RuntimeError("a"), RuntimeError("b")]

    async def run():
        ws = [workload_gen(errs[1], 0.03), workload_gen("ok", 0.01), workload_gen(errs[0], 0.02)]
        return await Promise().some(ws, 2)

    got = asyncio.run(run())
    assert [r.idx for r in got] == [0, 2]
    assert [r.error for r in got] == [errs[1], errs[0]]


def test_some_unreachable_when_last_arrival_succeeds() -> None:
    err = RuntimeError("early")

    async def run():
        ws = [workload_gen(err, 0.01), workload_gen(2, 0.03), workload_gen(3, 0.05)]
        return await asyncio.wait_for(Promise().some(ws, 3), timeout=2)

    assert asyncio.run(run()) == [Result(0, Outcome.Failure(err))]


def test_some_exact_count_equals_length() -> None:
    async def run():
        ws = [workload_gen(i, 0.01 * (3 - i)) for i in range(3)]
        return await Promise().some(ws, 3)

    got = asyncio.run(run())
    assert [r.payload for r in got] == [0, 1, 2]


def test_scenario_one_two_three() -> None:
    async def run():
        promise = Promise()
        ws = [workload_gen(1, 0.2), workload_gen(2, 0.1), workload_gen(3, 0.02)]
        everything = await promise.all(ws)
        first = await promise.race(ws)
        two = await promise.some(ws, 2)
        await promise.drain()
        return everything, first, two

    everything, first, two = asyncio.run(run())
    assert [(r.idx, r.payload) for r in everything] == [(0, 1), (1, 2), (2, 3)]
    assert (first.idx, first.payload) == (0, 3)
    assert [(r.idx, r.payload) for r in two] == [(1, 2), (2, 3)]


def test_some_rejects_non_integer_count() -> None:
    recorder = Recorder()

    async def run(count):
        return await Promise().some([recorder.workload(1), recorder.workload(2)], count)

    for count in (1.5, "1", True):
        with pytest.raises(TypeError):
            asyncio.run(run(count))
    assert recorder.calls == 0
