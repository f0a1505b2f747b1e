# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

from collections.abc import Iterable, Iterator

from newts.common.constants import MILLIS_PER_SECOND
from newts.common.models import Point, ValueType

__all__ = ["RateFunction", "rate"]


class RateFunction:
    """Maps each point to the per-second rate of change since the previous point.

    The first call has no predecessor and returns None. The instance remembers
    the previous point, so it must only be used for a single traversal.

    Inputs must be strictly increasing in time. Equal timestamps divide by zero
    and raise :class:`ZeroDivisionError`; decreasing ones yield a negative
    elapsed time. Neither is checked here.
    """

    __slots__ = ("_previous",)

    def __init__(self) -> None:
        self._previous: Point | None = None

    def __call__(self, point: Point) -> Point | None:
        previous, self._previous = self._previous, point
        if previous is None:
            return None
        return Point(point.x, self._get_rate(previous, point))

    @staticmethod
    def _get_rate(previous: Point, point: Point) -> ValueType | None:
        if point.y is None or previous.y is None:
            return None
        elapsed_seconds = (point.x.as_millis() - previous.x.as_millis()) / MILLIS_PER_SECOND
        # Counter wraparound is absorbed by the value kind's delta
        return point.y.delta(previous.y).divide_by(elapsed_seconds)


def rate(points: Iterable[Point]) -> Iterator[Point | None]:
    """Lazily transform ``points`` into rates of change.

    The output has one element per input. The first element is always None;
    drop it to get the n-1 meaningful rates.
    """
    return map(RateFunction(), points)
