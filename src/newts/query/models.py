# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import ConfigDict, Field, model_validator
from typing_extensions import Self

from newts.common.constants import (
    DEFAULT_CONTEXT_ID,
    DEFAULT_STEP_SECONDS,
    HEARTBEAT_MILLIS,
    MILLIS_PER_SECOND,
)
from newts.common.enums import AggregationFunction
from newts.common.models import (
    Context,
    Duration,
    NewtsBaseModel,
    Point,
    Resource,
    Timestamp,
)

__all__ = ["Query", "QueryResult"]


class Query(NewtsBaseModel):
    """A request to aggregate one metric of one resource over a time range."""

    model_config = ConfigDict(frozen=True)

    resource: str = Field(..., min_length=1, description="Resource to read")
    metric: str = Field(..., min_length=1, description="Metric of the resource to aggregate")
    start: int = Field(..., description="Range start, milliseconds since the Unix epoch")
    end: int = Field(..., description="Range end, milliseconds since the Unix epoch")
    resolution: int = Field(
        default=DEFAULT_STEP_SECONDS * MILLIS_PER_SECOND,
        gt=0,
        description="Grid step in milliseconds",
    )
    function: AggregationFunction = Field(
        default=AggregationFunction.AVERAGE, description="Transform to apply"
    )
    heartbeat: int = Field(
        default=HEARTBEAT_MILLIS,
        gt=0,
        description="Rollup heartbeat in milliseconds. Ignored by the other functions.",
    )
    context: str = Field(
        default=DEFAULT_CONTEXT_ID, min_length=1, description="Context of the resource"
    )

    @model_validator(mode="after")
    def validate_range(self) -> Self:
        if self.start > self.end:
            raise ValueError(f"start ({self.start}) must not be after end ({self.end})")
        return self

    @property
    def start_timestamp(self) -> Timestamp:
        return Timestamp.from_epoch_millis(self.start)

    @property
    def end_timestamp(self) -> Timestamp:
        return Timestamp.from_epoch_millis(self.end)

    @property
    def step(self) -> Duration:
        return Duration.of_millis(self.resolution)

    @property
    def heartbeat_duration(self) -> Duration:
        return Duration.of_millis(self.heartbeat)

    @property
    def context_value(self) -> Context:
        return Context(self.context)

    @property
    def resource_value(self) -> Resource:
        return Resource(self.resource)


@dataclass(slots=True)
class QueryResult:
    """Outcome of one query. ``error`` is set instead of ``points`` when it failed."""

    query: Query
    points: list[Point] = field(default_factory=list)
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None
