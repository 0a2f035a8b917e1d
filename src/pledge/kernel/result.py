"""Index-tagged workload results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from pledge.kernel.outcome import Outcome

V = TypeVar("V")


@dataclass(frozen=True)
class Result(Generic[V]):
    """
    One workload's outcome together with the workload's position.

    Attributes:
        idx: Position of the workload in the submitted sequence
        outcome: Success or failure produced by the workload
    """

    idx: int
    outcome: Outcome[V]

    @property
    def ok(self) -> bool:
        return self.outcome.ok

    @property
    def value(self) -> V | None:
        return self.outcome.value

    @property
    def error(self) -> Exception | None:
        return self.outcome.error

    @property
    def payload(self) -> V | Exception | None:
        return self.outcome.payload

    def unwrap(self) -> V | None:
        """Return the produced value, raising the carried error on failure."""
        return self.outcome.unwrap()


def by_idx(result: Result) -> int:
    return result.idx


def in_submission_order(results: list[Result]) -> list[Result]:
    return sorted(results, key=by_idx)
