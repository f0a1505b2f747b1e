# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from newts.common.enums.base_enums import CaseInsensitiveStrEnum
from newts.common.enums.metric_enums import AggregationFunction, MetricType

__all__ = [
    "AggregationFunction",
    "CaseInsensitiveStrEnum",
    "MetricType",
]
