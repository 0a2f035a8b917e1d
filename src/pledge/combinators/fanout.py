"""Fan-out/fan-in primitive shared by every combinator."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from pledge.kernel import Result, Workload


@dataclass
class FanOut:
    """One task per workload, all publishing into a single completion queue.

    The queue is unbounded: a task whose result nobody will read anymore
    still publishes without blocking, then finishes.
    """

    tasks: list[asyncio.Task[None]]
    completions: asyncio.Queue[Result[Any]]

    def __len__(self) -> int:
        return len(self.tasks)

    async def next(self) -> Result[Any]:
        """Wait for the next completion, in completion order."""
        return await self.completions.get()

    def pending(self) -> list[asyncio.Task[None]]:
        return [task for task in self.tasks if not task.done()]

    def cancel_pending(self) -> int:
        pending = self.pending()
        for task in pending:
            task.cancel()
        return len(pending)


def fan_out(workloads: Sequence[Workload], name: str = "pledge") -> FanOut:
    """Start every workload concurrently; must be called inside a running loop."""
    completions: asyncio.Queue[Result[Any]] = asyncio.Queue()

    async def publish(idx: int, workload: Workload) -> None:
        outcome = await workload.run()
        completions.put_nowait(Result(idx=idx, outcome=outcome))

    tasks = [
        asyncio.create_task(publish(idx, workload), name=f"{name}-{idx}")
        for idx, workload in enumerate(workloads)
    ]
    return FanOut(tasks=tasks, completions=completions)
