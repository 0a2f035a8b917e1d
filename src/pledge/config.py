"""Engine configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Options(BaseModel):
    """Options supplied once when a Promise engine is constructed.

    `timeout` accepts a timedelta, a number of seconds, or an ISO-8601
    duration string. Zero disables the timeout.
    """

    model_config = ConfigDict(frozen=True)

    timeout: timedelta = Field(default=timedelta(0))
    race_index: bool = Field(
        default=False,
        description="Tag race() results with the winner's index instead of 0.",
    )
    cancel_pending: bool = Field(
        default=False,
        description=(
            "Cancel workloads still running when a combinator returns early. "
            "Plain-callable commands already running on their thread still run to completion."
        ),
    )

    @field_validator("timeout", mode="before")
    @classmethod
    def _seconds_from_text(cls, value: Any) -> Any:
        # "0.5" in an env var means seconds; ISO-8601 strings pass through
        if isinstance(value, str):
            try:
                return float(value)
            except ValueError:
                return value
        return value

    @field_validator("timeout")
    @classmethod
    def _timeout_not_negative(cls, value: timedelta) -> timedelta:
        if value < timedelta(0):
            raise ValueError("timeout must not be negative")
        return value

    @property
    def timeout_seconds(self) -> float:
        return self.timeout.total_seconds()

    @classmethod
    def from_env(cls, prefix: str = "PLEDGE_", environ: Mapping[str, str] | None = None) -> Options:
        """Build options from environment variables such as PLEDGE_TIMEOUT."""
        env = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            raw = env.get(f"{prefix}{name.upper()}")
            if raw is not None:
                values[name] = raw
        return cls.model_validate(values)
