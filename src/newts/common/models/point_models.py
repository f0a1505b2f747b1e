# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from newts.common.constants import DEFAULT_CONTEXT_ID
from newts.common.enums import MetricType
from newts.common.models.time_models import Timestamp
from newts.common.models.value_models import ValueType

__all__ = ["Context", "Point", "Resource", "Sample"]


@dataclass(frozen=True, slots=True)
class Point:
    """A (timestamp, value) pair in an ordered point sequence.

    ``y`` is None when no observation was reported, which is distinct from a
    present-but-zero value.
    """

    x: Timestamp
    y: ValueType | None = None

    def __str__(self) -> str:
        return f"Point[{self.x}, {self.y}]"


@dataclass(frozen=True, slots=True)
class Context:
    """Namespace that isolates otherwise identical resources."""

    DEFAULT: ClassVar[Context]

    id: str

    def __str__(self) -> str:
        return self.id


Context.DEFAULT = Context(DEFAULT_CONTEXT_ID)


@dataclass(frozen=True, slots=True)
class Resource:
    """Something being measured. Identity is the id; attributes are metadata."""

    id: str
    attributes: dict[str, str] = field(default_factory=dict, compare=False, hash=False)

    def __str__(self) -> str:
        return self.id


@dataclass(frozen=True, slots=True)
class Sample:
    """One raw measurement of one metric of one resource."""

    timestamp: Timestamp
    resource: Resource
    name: str
    type: MetricType
    value: ValueType
    context: Context = Context.DEFAULT
    attributes: dict[str, str] | None = field(default=None, compare=False, hash=False)

    def to_point(self) -> Point:
        return Point(self.timestamp, self.value)
