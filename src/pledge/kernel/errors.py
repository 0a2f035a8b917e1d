"""Error types reported by the combinator engine."""

from __future__ import annotations


class PledgeError(Exception):
    """Base class for errors produced by pledge itself (not by workloads)."""


class RangeError(PledgeError, ValueError):
    """Requested more successes than there are workloads.

    Carried as the failure of a single result; no workload is launched.
    """

    def __init__(self, count: int, size: int) -> None:
        self.count = count
        self.size = size
        super().__init__(
            "Range error: count, count should be less than or equal to the length of iterable"
        )

    def __repr__(self) -> str:
        return f"RangeError(count={self.count!r}, size={self.size!r})"
