"""Combinators - concurrent waiting policies over batches of workloads."""

from .engine import Promise
from .fanout import FanOut, fan_out
from .timeout import with_timeout

__all__ = [
    "Promise",
    "FanOut",
    "fan_out",
    "with_timeout",
]
