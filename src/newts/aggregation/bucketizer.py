# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Gauge rollup onto a step grid with NaN-time accounting.

Unlike :func:`newts.aggregation.average.average`, a sample that lands several
steps past the current bucket closes every step in between, and all of them
carry the value computed for the bucket that preceded the gap. The trailing
partial bucket after the last sample is never emitted.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from newts.common.exceptions import InvalidArgumentError
from newts.common.models import Duration, Gauge, Point, Timestamp
from newts.common.newts_logger import NewtsLogger

__all__ = ["Bucketizer", "rollup"]

_logger = NewtsLogger(__name__)


class Bucketizer:
    """Accumulates one traversal of gauge samples into step-aligned buckets.

    Holds per-call state; construct a new one for every rollup.
    """

    def __init__(
        self,
        start: Timestamp,
        end: Timestamp,
        step: Duration,
        heartbeat: Duration,
        points: Iterable[Point],
    ) -> None:
        if start is None or end is None or step is None or heartbeat is None:
            raise InvalidArgumentError("start, end, step and heartbeat are required")
        if points is None:
            raise InvalidArgumentError("points argument is required")
        if step.as_millis() <= 0:
            raise InvalidArgumentError(f"step must be positive, got {step}")

        self._start = start
        self._end = end
        self._step = step
        self._heartbeat = heartbeat
        self._points = points

        self._last_update_time = start
        # Time in the first bucket before start has no value
        self._nan_millis = (start - start.step_floor(step)).as_millis()
        self._last_value = math.nan
        self._accum = 0.0

    def rollup(self) -> list[Point]:
        results: list[Point] = []

        for point in self._points:
            old_time = self._last_update_time
            start_time = old_time.step_floor(self._step)
            end_time = start_time + self._step
            new_time = point.x
            new_value = point.y.to_float() if point.y is not None else math.nan
            update_value = self._calculate_update(
                self._last_value, new_value, old_time, new_time
            )
            self._last_value = update_value

            if new_time < end_time:
                self._accumulate(old_time, new_time, update_value)
            else:
                boundary_time = new_time.step_floor(self._step)
                self._accumulate(old_time, boundary_time, update_value)

                total_value = math.nan
                valid_millis = (boundary_time - start_time).as_millis() - self._nan_millis
                if self._nan_millis < self._heartbeat.as_millis() and valid_millis > 0:
                    total_value = self._accum / valid_millis

                num_steps = (boundary_time - end_time) // self._step + 1
                _logger.trace(
                    lambda: f"Closing {num_steps} step(s) from {end_time} with value {total_value}"
                )
                next_time = end_time
                for _ in range(num_steps):
                    results.append(Point(next_time, Gauge(total_value)))
                    next_time = next_time + self._step

                self._nan_millis = 0
                self._accum = 0.0
                self._accumulate(boundary_time, new_time, update_value)

            self._last_update_time = new_time

        _logger.debug(
            lambda: f"Rolled up {len(results)} points from {self._start} to {self._end} at step {self._step}"
        )
        return results

    def _accumulate(self, old_time: Timestamp, new_time: Timestamp, update_value: float) -> None:
        elapsed = new_time.as_millis() - old_time.as_millis()
        if math.isnan(update_value):
            self._nan_millis += elapsed
        else:
            self._accum += update_value * elapsed

    def _calculate_update(
        self,
        old_value: float,
        new_value: float,
        old_time: Timestamp,
        new_time: Timestamp,
    ) -> float:
        # Gauges report the value that held over the whole interval
        return new_value


def rollup(
    start: Timestamp,
    end: Timestamp,
    step: Duration,
    heartbeat: Duration,
    points: Iterable[Point],
) -> list[Point]:
    """Roll gauge ``points`` up onto the ``step`` grid.

    Each closed bucket's value is ``accumulated / valid time``, or NaN when the
    bucket's NaN time reached ``heartbeat`` or it has no valid time.
    """
    return Bucketizer(start, end, step, heartbeat, points).rollup()
