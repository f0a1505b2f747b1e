# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

from newts.common.constants import DEFAULT_STEP_SECONDS
from newts.common.exceptions import InvalidArgumentError
from newts.common.models import Duration, Timestamp

__all__ = ["DEFAULT_STEP_SIZE", "Timestamps"]

DEFAULT_STEP_SIZE = Duration.seconds(DEFAULT_STEP_SECONDS)


class Timestamps:
    """Single-use cursor over the step grid between two instants.

    Yields ``start.step_ceiling(step)``, then every ``step`` after it, up to and
    including ``end.step_ceiling(step)``. Once exhausted, ``next()`` raises
    :class:`StopIteration`. Build a new instance for every aggregation call.
    """

    __slots__ = ("_step", "_current", "_final")

    def __init__(
        self, start: Timestamp, end: Timestamp, step: Duration = DEFAULT_STEP_SIZE
    ) -> None:
        if start is None or end is None or step is None:
            raise InvalidArgumentError("start, end and step are required")
        self._step = step
        self._current = start.step_ceiling(step)
        self._final = end.step_ceiling(step)

    @property
    def step(self) -> Duration:
        return self._step

    def has_next(self) -> bool:
        return self._current <= self._final

    def remaining(self) -> int:
        """Number of grid timestamps not yet produced."""
        if not self.has_next():
            return 0
        return (self._final - self._current) // self._step + 1

    def __iter__(self) -> Timestamps:
        return self

    def __next__(self) -> Timestamp:
        if not self.has_next():
            raise StopIteration
        current = self._current
        self._current = current + self._step
        return current

    def __repr__(self) -> str:
        return f"Timestamps(current={self._current}, final={self._final}, step={self._step})"
