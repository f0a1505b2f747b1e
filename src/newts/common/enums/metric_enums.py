# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from newts.common.enums.base_enums import CaseInsensitiveStrEnum


class MetricType(CaseInsensitiveStrEnum):
    """Numeric semantics of a measured value.

    The set is closed: every aggregation algorithm handles each kind through
    the shared value operations.
    """

    GAUGE = "gauge"
    """Gauge: an absolute, instantaneous value that can go up and down."""

    COUNTER = "counter"
    """Counter: a monotonically reported running total that may wrap around."""

    DERIVE = "derive"
    """Derive: a running total that may legitimately decrease (signed deltas, no wraparound)."""

    ABSOLUTE = "absolute"
    """Absolute: a count that is reset on every read, so each value is already a delta."""


class AggregationFunction(CaseInsensitiveStrEnum):
    """Transforms that re-express raw samples as a point sequence."""

    AVERAGE = "average"
    """Interval-weighted average onto a step grid, gated by heartbeat and XFF."""

    RATE = "rate"
    """Per-second rate of change between consecutive samples."""

    ROLLUP = "rollup"
    """Gauge rollup that repeats one bucket's value across every step a gap spans."""
