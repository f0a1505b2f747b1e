# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Interval-weighted averaging of raw samples onto a step grid.

Each input point reports the value that held since the previous point. The
time between consecutive points is folded into the bucket it falls in as
*known* time (weighted by the value) or *unknown* time (no value, or a gap of
at least ``HEARTBEAT``). When a point crosses the next grid boundary the
bucket is closed and reported as ``accumulated / known``, unless the unknown
share of the bucket reached ``XFF``, in which case it is reported without a
value.

Only one grid boundary is closed per input point. A point more than one step
past the previous boundary skips the boundaries in between, and no result is
emitted for them. :func:`newts.aggregation.bucketizer.rollup` fills such gaps
instead, so the two do not produce grids of the same length for sparse input.
"""

from __future__ import annotations

from collections.abc import Iterable

from newts.aggregation.steps import Timestamps
from newts.common.constants import HEARTBEAT_MILLIS, XFF
from newts.common.exceptions import InvalidArgumentError
from newts.common.models import Duration, Gauge, Point, Timestamp, ValueType
from newts.common.newts_logger import NewtsLogger

__all__ = ["HEARTBEAT", "XFF", "average"]

_logger = NewtsLogger(__name__)

HEARTBEAT = HEARTBEAT_MILLIS


def average(
    start: Timestamp,
    end: Timestamp,
    step: Duration,
    points: Iterable[Point | None],
) -> list[Point]:
    """Resample ``points`` onto the ``step`` grid between ``start`` and ``end``.

    Args:
        start: Beginning of the query range. Time between ``start`` and the first
            point is unknown.
        end: End of the query range; the last grid boundary is ``end.step_ceiling(step)``.
        step: Grid spacing.
        points: Samples in ascending timestamp order. Ordering is the caller's
            responsibility. None entries and points older than the last folded
            point are skipped.

    Returns:
        One point per grid boundary crossed by the input, in order. The value is
        None where too much of the bucket was unknown.

    Raises:
        InvalidArgumentError: If any argument is None or ``step`` is not positive.
    """
    if start is None:
        raise InvalidArgumentError("start argument is required")
    if end is None:
        raise InvalidArgumentError("end argument is required")
    if step is None:
        raise InvalidArgumentError("step argument is required")
    if points is None:
        raise InvalidArgumentError("points argument is required")

    results: list[Point] = []
    steps = Timestamps(start, end, step)
    if not steps.has_next():
        return results

    step_millis = step.as_millis()
    next_step = next(steps)
    last_update = start
    accumulated: ValueType = Gauge(0.0)
    known = 0
    # The part of the first bucket before start is unknown
    unknown = last_update.as_millis() % step_millis

    # TODO: use samples from before start, when the repository has them, to
    # give the initial unknown region a value.
    for point in points:
        if point is None or point.x < last_update:
            continue

        crossed = point.x >= next_step
        if crossed:
            interval = next_step.as_millis() - last_update.as_millis()
        else:
            interval = point.x.as_millis() - last_update.as_millis()

        if point.y is not None and interval < HEARTBEAT:
            known += interval
            accumulated = accumulated.plus(point.y.weighted(interval))
        else:
            unknown += interval

        if crossed:
            results.append(Point(next_step, _bucket_value(accumulated, known, unknown)))
            _logger.trace(
                lambda: f"Closed bucket {next_step} (known={known}ms, unknown={unknown}ms)"
            )

            # The remainder past the boundary opens the next bucket
            remainder = point.x.as_millis() - next_step.as_millis()
            if point.y is not None:
                known = remainder
                accumulated = point.y.weighted(remainder)
                unknown = 0
            else:
                known = 0
                accumulated = Gauge(0.0)
                unknown = remainder

            if not steps.has_next():
                break
            next_step = next(steps)

        last_update = point.x

    _logger.debug(
        lambda: f"Averaged into {len(results)} points from {start} to {end} at step {step}"
    )
    return results


def _bucket_value(accumulated: ValueType, known: int, unknown: int) -> ValueType | None:
    elapsed = known + unknown
    if elapsed > 0 and (unknown / elapsed) < XFF:
        return accumulated.divide_by(known)
    return None
