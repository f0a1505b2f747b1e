# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Resampling engine: converts ordered raw points into grid-aligned point sequences.

Every function here is synchronous and builds its own cursor and accumulator
state per call, so concurrent callers need no locking.
"""

from newts.aggregation.average import HEARTBEAT, XFF, average
from newts.aggregation.bucketizer import Bucketizer, rollup
from newts.aggregation.rate import RateFunction, rate
from newts.aggregation.steps import DEFAULT_STEP_SIZE, Timestamps

__all__ = [
    "DEFAULT_STEP_SIZE",
    "HEARTBEAT",
    "XFF",
    "Bucketizer",
    "RateFunction",
    "Timestamps",
    "average",
    "rate",
    "rollup",
]
