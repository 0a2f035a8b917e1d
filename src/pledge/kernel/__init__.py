"""Kernel layer - workload and result types for pledge."""

from pledge.kernel.errors import PledgeError, RangeError
from pledge.kernel.outcome import Outcome
from pledge.kernel.result import Result, in_submission_order
from pledge.kernel.trace import Evidence, Trace
from pledge.kernel.workload import Command, Workload

__all__ = [
    "Command",
    "Workload",
    "Outcome",
    "Result",
    "in_submission_order",
    # Errors
    "PledgeError",
    "RangeError",
    # Tracing
    "Evidence",
    "Trace",
]
