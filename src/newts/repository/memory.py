# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""NumPy-backed in-memory sample repository.

Samples are stored per (context, resource, metric) in a growable series whose
timestamps live in a sorted NumPy array, so range selection is a pair of
binary searches. Nothing is persisted.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable
from typing import TYPE_CHECKING

import numpy as np

from newts.common.models import Context, Resource, Sample, Timestamp
from newts.common.newts_logger import NewtsLogger
from newts.repository.results import Results

if TYPE_CHECKING:
    from numpy.typing import NDArray

__all__ = ["InMemoryIndexer", "InMemorySampleRepository", "SampleTimeSeries"]

_logger = NewtsLogger(__name__)

_INITIAL_CAPACITY = 256

SeriesKey = tuple[str, str, str]


class SampleTimeSeries:
    """Timestamp-sorted samples of a single metric.

    Timestamps are kept in an int64 NumPy array next to a list of the samples
    themselves (counter values can exceed float64 precision). Out-of-order
    appends are inserted at their sorted position; equal timestamps keep
    insertion order.
    """

    __slots__ = ("_timestamps", "_samples", "_size")

    def __init__(self) -> None:
        self._timestamps: np.ndarray = np.empty(_INITIAL_CAPACITY, dtype=np.int64)
        self._samples: list[Sample] = []
        self._size: int = 0

    def append(self, sample: Sample) -> None:
        if self._size >= len(self._timestamps):
            new_ts = np.empty(len(self._timestamps) * 2, dtype=np.int64)
            new_ts[: self._size] = self._timestamps[: self._size]
            self._timestamps = new_ts

        ts = sample.timestamp.as_millis()
        if self._size == 0 or ts >= self._timestamps[self._size - 1]:
            idx = self._size
        else:
            idx = int(np.searchsorted(self.timestamps, ts, side="right"))
            self._timestamps[idx + 1 : self._size + 1] = self._timestamps[idx : self._size].copy()

        self._timestamps[idx] = ts
        self._samples.insert(idx, sample)
        self._size += 1

    @property
    def timestamps(self) -> NDArray[np.int64]:
        return self._timestamps[: self._size]

    def __len__(self) -> int:
        return self._size

    def select(self, start: Timestamp | None, end: Timestamp | None) -> list[Sample]:
        """Samples with ``start <= timestamp <= end``."""
        ts = self.timestamps
        lo = 0 if start is None else int(np.searchsorted(ts, start.as_millis(), side="left"))
        hi = self._size if end is None else int(np.searchsorted(ts, end.as_millis(), side="right"))
        return self._samples[lo:hi]


class InMemorySampleRepository:
    """Sample repository that keeps everything in process memory."""

    def __init__(self) -> None:
        self._series: dict[SeriesKey, SampleTimeSeries] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _key(context: Context, resource: Resource, name: str) -> SeriesKey:
        return (context.id, resource.id, name)

    def insert(self, samples: Iterable[Sample]) -> None:
        count = 0
        with self._lock:
            for sample in samples:
                key = self._key(sample.context, sample.resource, sample.name)
                series = self._series.get(key)
                if series is None:
                    series = self._series[key] = SampleTimeSeries()
                series.append(sample)
                count += 1
        _logger.debug(lambda: f"Inserted {count} samples")

    def select(
        self,
        context: Context,
        resource: Resource,
        start: Timestamp | None = None,
        end: Timestamp | None = None,
    ) -> Results:
        results = Results()
        with self._lock:
            selected = [
                series.select(start, end)
                for (context_id, resource_id, _), series in self._series.items()
                if context_id == context.id and resource_id == resource.id
            ]
        for samples in selected:
            for sample in samples:
                results.add_element(sample)
        _logger.debug(
            lambda: f"Selected {len(results)} rows for resource {resource} in context {context}"
        )
        return results

    def delete(self, context: Context, resource: Resource) -> None:
        with self._lock:
            keys = [
                key
                for key in self._series
                if key[0] == context.id and key[1] == resource.id
            ]
            for key in keys:
                del self._series[key]
        _logger.debug(
            lambda: f"Deleted {len(keys)} series for resource {resource} in context {context}"
        )


class InMemoryIndexer:
    """Tracks which metrics each resource has, per context."""

    def __init__(self) -> None:
        self._metrics: dict[tuple[str, str], set[str]] = {}
        self._lock = threading.Lock()

    def update(self, samples: Iterable[Sample]) -> None:
        with self._lock:
            for sample in samples:
                key = (sample.context.id, sample.resource.id)
                self._metrics.setdefault(key, set()).add(sample.name)

    def delete(self, context: Context, resource: Resource) -> None:
        with self._lock:
            self._metrics.pop((context.id, resource.id), None)

    def metrics(self, context: Context, resource: Resource) -> list[str]:
        """Names of the metrics seen for ``resource``, sorted."""
        with self._lock:
            return sorted(self._metrics.get((context.id, resource.id), ()))

    def resources(self, context: Context) -> list[str]:
        """Ids of every resource seen in ``context``, sorted."""
        with self._lock:
            return sorted(
                resource_id for context_id, resource_id in self._metrics if context_id == context.id
            )
