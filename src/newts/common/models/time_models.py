# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Timestamp and Duration value types.

Both are immutable integer counts of milliseconds. A Timestamp is measured from
the Unix epoch, which is also the origin of every step grid: aligning a
timestamp to a step means rounding it to a multiple of the step measured from
the epoch.
"""

from __future__ import annotations

import time
from dataclasses import dataclass

from newts.common.constants import (
    MILLIS_PER_DAY,
    MILLIS_PER_HOUR,
    MILLIS_PER_MINUTE,
    MILLIS_PER_SECOND,
)
from newts.common.exceptions import InvalidArgumentError

__all__ = ["Duration", "Timestamp"]


@dataclass(frozen=True, slots=True, order=True)
class Duration:
    """A non-negative span of time in milliseconds."""

    millis: int

    def __post_init__(self) -> None:
        if self.millis < 0:
            raise InvalidArgumentError(
                f"Duration must be non-negative, got {self.millis}ms"
            )

    @classmethod
    def of_millis(cls, millis: int) -> Duration:
        return cls(int(millis))

    @classmethod
    def seconds(cls, seconds: int) -> Duration:
        return cls(int(seconds) * MILLIS_PER_SECOND)

    @classmethod
    def minutes(cls, minutes: int) -> Duration:
        return cls(int(minutes) * MILLIS_PER_MINUTE)

    @classmethod
    def hours(cls, hours: int) -> Duration:
        return cls(int(hours) * MILLIS_PER_HOUR)

    @classmethod
    def days(cls, days: int) -> Duration:
        return cls(int(days) * MILLIS_PER_DAY)

    def as_millis(self) -> int:
        return self.millis

    def as_seconds(self) -> float:
        return self.millis / MILLIS_PER_SECOND

    def __add__(self, other: Duration) -> Duration:
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(self.millis + other.millis)

    def __sub__(self, other: Duration) -> Duration:
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(self.millis - other.millis)

    def __mul__(self, factor: int) -> Duration:
        if not isinstance(factor, int):
            return NotImplemented
        return Duration(self.millis * factor)

    __rmul__ = __mul__

    def __floordiv__(self, other: Duration) -> int:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.millis // other.millis

    def __str__(self) -> str:
        return f"{self.millis}ms"


@dataclass(frozen=True, slots=True, order=True)
class Timestamp:
    """An instant, in milliseconds since the Unix epoch."""

    millis: int

    @classmethod
    def from_epoch_millis(cls, millis: int) -> Timestamp:
        return cls(int(millis))

    @classmethod
    def from_epoch_seconds(cls, seconds: int) -> Timestamp:
        return cls(int(seconds) * MILLIS_PER_SECOND)

    @classmethod
    def now(cls) -> Timestamp:
        return cls(time.time_ns() // 1_000_000)

    def as_millis(self) -> int:
        return self.millis

    def as_seconds(self) -> int:
        """Whole seconds since the epoch, rounded toward negative infinity."""
        return self.millis // MILLIS_PER_SECOND

    def __add__(self, other: Duration) -> Timestamp:
        if not isinstance(other, Duration):
            return NotImplemented
        return Timestamp(self.millis + other.millis)

    def __sub__(self, other: Timestamp | Duration) -> Duration | Timestamp:
        """``ts - ts`` is the Duration between them; ``ts - duration`` is an earlier Timestamp."""
        if isinstance(other, Timestamp):
            return Duration(self.millis - other.millis)
        if isinstance(other, Duration):
            return Timestamp(self.millis - other.millis)
        return NotImplemented

    def step_floor(self, step: Duration) -> Timestamp:
        """Align down to the nearest multiple of ``step`` from the epoch."""
        step_millis = _step_millis(step)
        return Timestamp((self.millis // step_millis) * step_millis)

    def step_ceiling(self, step: Duration) -> Timestamp:
        """Align up to the nearest multiple of ``step`` from the epoch."""
        step_millis = _step_millis(step)
        return Timestamp(-(-self.millis // step_millis) * step_millis)

    def __str__(self) -> str:
        return f"{self.millis}"


def _step_millis(step: Duration) -> int:
    if step is None or step.millis <= 0:
        raise InvalidArgumentError(f"step must be a positive Duration, got {step}")
    return step.millis
