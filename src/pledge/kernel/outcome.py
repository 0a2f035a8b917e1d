"""Outcome of a single workload - a tagged success/failure value."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeVar

V = TypeVar("V")


@dataclass(frozen=True)
class Outcome(Generic[V]):
    """
    What a workload produced, tagged at the point the task completes.

    Kinds:
    - success: the command returned normally, `value` holds its output
    - failure: the command raised (or reported) an error, `error` holds it

    Combinators branch on `kind`; they never inspect the type of `value`.
    """

    kind: Literal["success", "failure"]
    value: V | None = None
    error: Exception | None = None

    @staticmethod
    def Success(value: Any = None) -> Outcome[Any]:
        return Outcome(kind="success", value=value)

    @staticmethod
    def Failure(error: Exception) -> Outcome[Any]:
        if not isinstance(error, Exception):
            raise TypeError(f"Failure expects an Exception, got {type(error).__name__}")
        return Outcome(kind="failure", error=error)

    @property
    def ok(self) -> bool:
        return self.kind == "success"

    @property
    def payload(self) -> V | Exception | None:
        """The value on success, the error on failure."""
        return self.value if self.ok else self.error

    def unwrap(self) -> V | None:
        if self.error is not None:
            raise self.error
        return self.value
