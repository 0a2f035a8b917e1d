"""Promise engine - the all / all_settled / race / race_all / any / some combinators."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Iterable
from typing import Any

from pledge.config import Options
from pledge.kernel import Outcome, RangeError, Result, Trace, Workload, in_submission_order

from .fanout import FanOut, fan_out
from .timeout import with_timeout

logger = logging.getLogger(__name__)


class _Span:
    """Records one combinator call into the trace, if there is one."""

    def __init__(self, trace: Trace | None, name: str, size: int) -> None:
        self.trace = trace
        self.name = name
        self.parent_id: int | None = None
        self.start = time.perf_counter()
        if trace is not None:
            self.parent_id = trace.record(f"{name}_begin", info={"size": size})

    def branch(self, result: Result[Any]) -> None:
        if self.trace is not None:
            self.trace.record(
                f"branch_{result.idx}",
                info={"kind": result.outcome.kind},
                parent_id=self.parent_id,
            )

    def end(self, returned: int) -> None:
        if self.trace is not None:
            self.trace.record(
                f"{self.name}_end",
                info={"returned": returned},
                parent_id=self.parent_id,
                duration_ms=(time.perf_counter() - self.start) * 1000,
            )


class Promise:
    """Combinator engine over batches of workloads.

    Every combinator launches one task per workload and reads completions
    from a shared queue. Combinators that return early leave the remaining
    tasks running to completion; `Options.cancel_pending` cancels them
    instead. Failures are returned as results, never raised.
    """

    def __init__(self, options: Options | None = None, trace: Trace | None = None) -> None:
        self.options = options or Options()
        self.trace = trace
        self._background: set[asyncio.Task[Any]] = set()

    @property
    def background(self) -> int:
        """Number of launched tasks that have not finished yet."""
        return sum(1 for task in self._background if not task.done())

    async def drain(self) -> None:
        """Wait until every task this engine launched has finished."""
        while self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)

    def _track(self, task: asyncio.Task[Any]) -> None:
        # asyncio keeps only weak references to tasks
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    def _launch(self, workloads: list[Workload], name: str) -> FanOut:
        fan = fan_out(workloads, name=f"pledge-{name}")
        for task in fan.tasks:
            self._track(task)
        logger.debug("%s: launched %d workloads", name, len(fan))
        return fan

    def _settle(self, fan: FanOut, name: str) -> None:
        """Handle tasks left running after an early return."""
        if self.options.cancel_pending:
            cancelled = fan.cancel_pending()
            if cancelled:
                logger.debug("%s: cancelled %d pending workloads", name, cancelled)
        elif fan.pending():
            logger.debug("%s: %d workloads left running", name, len(fan.pending()))

    async def all_settled(self, workloads: Iterable[Workload]) -> list[Result[Any]]:
        """Wait for every workload; return all results in submission order."""
        workloads = list(workloads)
        if not workloads:
            return []

        span = _Span(self.trace, "all_settled", len(workloads))
        fan = self._launch(workloads, "all_settled")
        results: list[Result[Any]] = []
        for _ in workloads:
            result = await fan.next()
            span.branch(result)
            results.append(result)

        span.end(len(results))
        return in_submission_order(results)

    async def all(self, workloads: Iterable[Workload]) -> list[Result[Any]]:
        """Wait for every success, or return the first failure on its own.

        Returns:
            All results in submission order, or a single-element list with
            the first failure observed
        """
        workloads = list(workloads)
        if not workloads:
            return []

        span = _Span(self.trace, "all", len(workloads))
        fan = self._launch(workloads, "all")
        successes: list[Result[Any]] = []
        while len(successes) < len(workloads):
            result = await fan.next()
            span.branch(result)
            if not result.ok:
                logger.debug("all: workload %d failed, short-circuiting: %r", result.idx, result.error)
                self._settle(fan, "all")
                span.end(1)
                return [result]
            successes.append(result)

        span.end(len(successes))
        return in_submission_order(successes)

    async def race(self, workloads: Iterable[Workload]) -> Result[Any] | None:
        """Return the first workload to finish, success or failure.

        The returned idx is 0 unless `Options.race_index` is set.
        """
        workloads = list(workloads)
        if not workloads:
            return None

        span = _Span(self.trace, "race", len(workloads))
        fan = self._launch(workloads, "race")
        winner = await fan.next()
        span.branch(winner)
        self._settle(fan, "race")
        span.end(1)

        idx = winner.idx if self.options.race_index else 0
        return Result(idx=idx, outcome=winner.outcome)

    async def race_all(self, workloads: Iterable[Workload]) -> list[Result[Any]]:
        """Race each workload against the configured timeout, then apply all().

        Workloads slower than the timeout contribute their fallback at their
        own index. With no timeout configured this is all().
        """
        workloads = list(workloads)
        if not workloads:
            return []
        if not self.options.timeout:
            return await self.all(workloads)

        timed = [
            with_timeout(
                workload,
                self.options.timeout,
                track=self._track,
                cancel_late=self.options.cancel_pending,
            )
            for workload in workloads
        ]
        winners = await self.all_settled(timed)
        return await self.all([Workload.of(winner.outcome) for winner in winners])

    async def any(self, workloads: Iterable[Workload]) -> list[Result[Any]]:
        """Return the first success, or every failure if nothing succeeds."""
        workloads = list(workloads)
        if not workloads:
            return []
        return await self.some(workloads, 1)

    async def some(self, workloads: Iterable[Workload], count: int) -> list[Result[Any]]:
        """Return the first `count` successes in submission order.

        Returns:
            - a single RangeError failure if count is out of range
            - an empty list if count is 0
            - `count` successes sorted by idx once that many have arrived
            - every failure sorted by idx once all workloads finished short
        """
        if isinstance(count, bool) or not isinstance(count, int):
            raise TypeError(f"some() count must be an int, got {type(count).__name__}")
        workloads = list(workloads)
        if count < 0 or count > len(workloads):
            logger.debug("some: count %d out of range for %d workloads", count, len(workloads))
            return [Result(idx=0, outcome=Outcome.Failure(RangeError(count, len(workloads))))]
        if count == 0:
            return []

        span = _Span(self.trace, "some", len(workloads))
        fan = self._launch(workloads, "some")
        successes: list[Result[Any]] = []
        failures: list[Result[Any]] = []
        while True:
            result = await fan.next()
            span.branch(result)
            if result.ok:
                successes.append(result)
                if len(successes) == count:
                    self._settle(fan, "some")
                    span.end(len(successes))
                    return in_submission_order(successes)
            else:
                failures.append(result)

            if len(successes) + len(failures) == len(workloads):
                logger.debug(
                    "some: %d of %d successes reachable, rejecting", len(successes), count
                )
                span.end(len(failures))
                return in_submission_order(failures)
