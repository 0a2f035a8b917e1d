"""Timeout wrapper - race a workload against a timer."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import timedelta
from typing import Any

from pledge.kernel import Outcome, Workload

logger = logging.getLogger(__name__)


def with_timeout(
    workload: Workload,
    timeout: timedelta | float,
    *,
    track: Callable[[asyncio.Task[Any]], Any] | None = None,
    cancel_late: bool = False,
) -> Workload:
    """Wrap a workload so it yields its fallback once `timeout` elapses.

    Semantics:
        - The real command runs on its own task
        - Whichever finishes first, command or timer, decides the outcome
        - On timeout the fallback is returned and the real task keeps
          running unless `cancel_late` is set; its output is discarded

    Args:
        workload: The workload to wrap.
        timeout: Deadline as a timedelta or seconds.
        track: Called with the real task so a caller can keep it referenced
            after the wrapper returns.
        cancel_late: Cancel the real task when the timer wins.

    Returns:
        Workload: A new workload with the same fallback.
    """
    seconds = timeout.total_seconds() if isinstance(timeout, timedelta) else float(timeout)
    fallback = workload.fallback

    async def timed() -> Outcome[Any]:
        task = asyncio.create_task(workload.run(), name="pledge-timed")
        if track is not None:
            track(task)

        done, _ = await asyncio.wait({task}, timeout=seconds)
        if task in done:
            return task.result()

        logger.debug("workload exceeded %.3fs, substituting fallback %r", seconds, fallback)
        if cancel_late:
            task.cancel()
        if isinstance(fallback, Outcome):
            return fallback
        return Outcome.Success(fallback)

    return Workload(command=timed, fallback=fallback)
