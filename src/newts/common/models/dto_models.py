# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""JSON representations of samples and aggregated points for client consumption."""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Any

import orjson
from pydantic import Field

from newts.common.constants import DEFAULT_CONTEXT_ID
from newts.common.enums import MetricType
from newts.common.exceptions import InvalidArgumentError
from newts.common.models.base_models import NewtsBaseModel
from newts.common.models.point_models import Context, Point, Resource, Sample
from newts.common.models.time_models import Timestamp
from newts.common.models.value_models import ValueType

__all__ = [
    "PointDTO",
    "ResourceDTO",
    "SampleDTO",
    "dumps_points",
    "loads_samples",
]


class ResourceDTO(NewtsBaseModel):
    """A measured resource and its metadata."""

    id: str = Field(..., min_length=1, description="Unique resource identifier")
    attributes: dict[str, str] = Field(
        default_factory=dict, description="Arbitrary resource metadata"
    )

    def to_resource(self) -> Resource:
        return Resource(self.id, dict(self.attributes))


class SampleDTO(NewtsBaseModel):
    """A single raw sample as exchanged with clients."""

    name: str = Field(..., min_length=1, description="Metric name")
    timestamp: int = Field(..., description="Milliseconds since the Unix epoch")
    type: MetricType = Field(..., description="Numeric semantics of the value")
    value: float | int = Field(..., description="Measured value")
    resource: ResourceDTO = Field(..., description="The resource that was measured")
    attributes: dict[str, str] | None = Field(
        default=None, description="Optional per-sample metadata"
    )
    context: str = Field(
        default=DEFAULT_CONTEXT_ID, min_length=1, description="Context the sample belongs to"
    )

    @classmethod
    def from_sample(cls, sample: Sample) -> SampleDTO:
        return cls(
            name=sample.name,
            timestamp=sample.timestamp.as_millis(),
            type=sample.type,
            value=sample.value.value,
            resource=ResourceDTO(
                id=sample.resource.id, attributes=dict(sample.resource.attributes)
            ),
            attributes=sample.attributes,
            context=sample.context.id,
        )

    def to_sample(self) -> Sample:
        return Sample(
            timestamp=Timestamp.from_epoch_millis(self.timestamp),
            resource=self.resource.to_resource(),
            name=self.name,
            type=self.type,
            value=ValueType.compose(self.value, self.type),
            context=Context(self.context),
            attributes=self.attributes,
        )

    def to_json_dict(self) -> dict[str, Any]:
        """Compact client representation.

        The resource is implied by the request, so it is left out. Attributes
        are omitted when unused and the context when it is the default.
        """
        data: dict[str, Any] = {
            "name": self.name,
            "timestamp": self.timestamp,
            "type": str(self.type),
            "value": self.value,
        }
        if self.attributes:
            data["attributes"] = self.attributes
        if self.context != DEFAULT_CONTEXT_ID:
            data["context"] = self.context
        return data


class PointDTO(NewtsBaseModel):
    """One aggregated output point."""

    timestamp: int = Field(..., description="Grid-aligned milliseconds since the Unix epoch")
    value: float | None = Field(
        default=None, description="Aggregated value, or null when unknown"
    )

    @classmethod
    def from_point(cls, point: Point) -> PointDTO:
        value = None
        if point.y is not None:
            value = point.y.to_float()
            if math.isnan(value):
                value = None
        return cls(timestamp=point.x.as_millis(), value=value)


def dumps_points(points: Iterable[Point], indent: bool = False) -> bytes:
    """Serialize points to a JSON array of ``{"timestamp", "value"}`` objects."""
    option = orjson.OPT_INDENT_2 if indent else 0
    return orjson.dumps(
        [PointDTO.from_point(point).model_dump() for point in points], option=option
    )


def loads_samples(content: bytes | str) -> list[SampleDTO]:
    """Parse a JSON array of samples."""
    data = orjson.loads(content)
    if not isinstance(data, list):
        raise InvalidArgumentError("Expected a JSON array of samples")
    return [SampleDTO.model_validate(item) for item in data]
