"""Runtime trace of combinator execution - separate from results.

Trace is runtime infrastructure: it records what the engine launched and
consumed, it never changes what a combinator returns.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


@dataclass(frozen=True)
class Evidence:
    """A single recorded engine event."""

    action: str
    id: int = 0
    parent_id: int | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    info: dict[str, Any] = field(default_factory=dict)
    duration_ms: float | None = None


class Trace:
    """Append-only event log for combinator calls.

    Events form a tree through `parent_id`: every `<combinator>_begin` event
    is the parent of its `branch_<idx>` and `<combinator>_end` events.
    Only touched from the event loop thread, so no locking.
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._events: list[Evidence] = []
        self._next_id: int = 0

    def record(
        self,
        action: str,
        info: dict[str, Any] | None = None,
        parent_id: int | None = None,
        duration_ms: float | None = None,
    ) -> int | None:
        """Record an event.

        Returns:
            Event ID for linking child events, or None if tracing disabled
        """
        if not self.enabled:
            return None

        event_id = self._next_id
        self._next_id += 1
        self._events.append(
            Evidence(
                action=action,
                id=event_id,
                parent_id=parent_id,
                info=info or {},
                duration_ms=duration_ms,
            )
        )
        return event_id

    def get_events(self) -> list[Evidence]:
        return list(self._events)

    def find(self, action: str) -> list[Evidence]:
        return [ev for ev in self._events if ev.action == action]

    def children_of(self, parent_id: int) -> list[Evidence]:
        return [ev for ev in self._events if ev.parent_id == parent_id]

    def as_tree(self) -> dict[int | None, list[int]]:
        """Map each parent_id to the ids of its children."""
        tree: dict[int | None, list[int]] = {}
        for ev in self._events:
            tree.setdefault(ev.parent_id, []).append(ev.id)
        return tree

    def __len__(self) -> int:
        return len(self._events)

    def clear(self) -> None:
        self._events.clear()
        self._next_id = 0
