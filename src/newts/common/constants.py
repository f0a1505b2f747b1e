# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
MILLIS_PER_SECOND = 1_000
MILLIS_PER_MINUTE = 60 * MILLIS_PER_SECOND
MILLIS_PER_HOUR = 60 * MILLIS_PER_MINUTE
MILLIS_PER_DAY = 24 * MILLIS_PER_HOUR

DEFAULT_STEP_SECONDS = 300
"""Default grid spacing for resampled output."""

HEARTBEAT_MILLIS = 600_000
"""Maximum gap between samples (in milliseconds) that is still trusted as continuously valid."""

XFF = 0.5
"""Cross-fill-factor: the unknown fraction of a bucket at which it is no longer reported."""

DEFAULT_CONTEXT_ID = "G"

COUNTER32_MAX = 2**32
COUNTER64_MAX = 2**64
