from .combinators import Promise, with_timeout
from .config import Options
from .kernel import (
    Command,
    Evidence,
    Outcome,
    PledgeError,
    RangeError,
    Result,
    Trace,
    Workload,
)

__all__ = [
    # Engine
    "Promise",
    "Options",
    "with_timeout",
    # Data
    "Command",
    "Workload",
    "Outcome",
    "Result",
    # Errors
    "PledgeError",
    "RangeError",
    # Tracing
    "Trace",
    "Evidence",
]
