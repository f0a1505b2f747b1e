# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from newts.common.exceptions import InvalidArgumentError
from newts.common.models import Point, Resource, Sample, Timestamp

__all__ = ["Results", "Row"]


@dataclass(slots=True)
class Row:
    """All samples of one resource that share a timestamp, keyed by metric name."""

    timestamp: Timestamp
    resource: Resource
    elements: dict[str, Sample] = field(default_factory=dict)

    def add_element(self, sample: Sample) -> None:
        self.elements[sample.name] = sample

    def get_element(self, name: str) -> Sample | None:
        return self.elements.get(name)

    def __iter__(self) -> Iterator[Sample]:
        return iter(self.elements.values())

    def __len__(self) -> int:
        return len(self.elements)


class Results:
    """Samples grouped into rows, iterated in ascending timestamp order."""

    __slots__ = ("_rows",)

    def __init__(self) -> None:
        self._rows: dict[Timestamp, Row] = {}

    def add_element(self, sample: Sample) -> None:
        row = self._rows.get(sample.timestamp)
        if row is None:
            row = Row(sample.timestamp, sample.resource)
            self._rows[sample.timestamp] = row
        elif row.resource != sample.resource:
            raise InvalidArgumentError(
                f"Sample for resource {sample.resource} does not belong in a row of {row.resource}"
            )
        row.add_element(sample)

    def get_rows(self) -> list[Row]:
        return [self._rows[ts] for ts in sorted(self._rows)]

    def points(self, metric: str) -> list[Point]:
        """The ordered point sequence of one metric; rows without it are skipped."""
        return [
            row.elements[metric].to_point()
            for row in self.get_rows()
            if metric in row.elements
        ]

    def __iter__(self) -> Iterator[Row]:
        return iter(self.get_rows())

    def __len__(self) -> int:
        return len(self._rows)

    def __repr__(self) -> str:
        return f"Results(rows={len(self._rows)})"
