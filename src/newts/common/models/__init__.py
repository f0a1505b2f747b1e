# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from newts.common.models.base_models import NewtsBaseModel
from newts.common.models.dto_models import (
    PointDTO,
    ResourceDTO,
    SampleDTO,
    dumps_points,
    loads_samples,
)
from newts.common.models.point_models import Context, Point, Resource, Sample
from newts.common.models.time_models import Duration, Timestamp
from newts.common.models.value_models import (
    Absolute,
    Counter,
    Derive,
    Gauge,
    ValueType,
)

__all__ = [
    "Absolute",
    "Context",
    "Counter",
    "Derive",
    "Duration",
    "Gauge",
    "NewtsBaseModel",
    "Point",
    "PointDTO",
    "Resource",
    "ResourceDTO",
    "Sample",
    "SampleDTO",
    "Timestamp",
    "ValueType",
    "dumps_points",
    "loads_samples",
]
