"""Workload - a unit of work submitted to a combinator."""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any

from pledge.kernel.outcome import Outcome

Command = Callable[[], Any]


@dataclass(frozen=True)
class Workload:
    """A zero-argument command plus the value to substitute on timeout.

    The command may be a coroutine function (awaited on the event loop) or a
    plain callable (run on a thread of its own, never a shared pool). `fallback` is only consulted
    when the workload is wrapped with a timeout.
    """

    command: Command
    fallback: Any = None

    def __post_init__(self) -> None:
        if not callable(self.command):
            raise TypeError(f"Workload command must be callable, got {type(self.command).__name__}")

    @staticmethod
    def of(value: Any) -> Workload:
        """Create a workload that immediately produces a constant value."""
        async def constant() -> Any:
            return value

        return Workload(command=constant)

    async def run(self) -> Outcome[Any]:
        """Execute the command once and tag what it produced.

        Returns:
            The command's own Outcome if it returned one, Failure if it
            raised, Success otherwise
        """
        try:
            if inspect.iscoroutinefunction(self.command):
                produced = await self.command()
            else:
                produced = await self._run_in_thread()
                # e.g. a lambda wrapping a coroutine call
                if inspect.isawaitable(produced):
                    produced = await produced
        except Exception as exc:
            return Outcome.Failure(exc)

        if isinstance(produced, Outcome):
            return produced
        return Outcome.Success(produced)

    async def _run_in_thread(self) -> Any:
        # Dedicated thread per command; after shutdown(wait=False) it still runs to completion
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="pledge")
        try:
            return await asyncio.get_running_loop().run_in_executor(executor, self.command)
        finally:
            executor.shutdown(wait=False)
