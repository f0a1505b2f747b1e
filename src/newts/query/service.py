# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Sample read/write/delete operations and aggregation queries over a repository."""

from __future__ import annotations

from collections.abc import Iterable
from itertools import islice

from newts.aggregation import average, rate, rollup
from newts.common.enums import AggregationFunction
from newts.common.exceptions import InvalidArgumentError
from newts.common.models import Context, Point, Resource, SampleDTO, Timestamp
from newts.common.newts_logger import NewtsLogger
from newts.query.models import Query
from newts.repository.protocols import IndexerProtocol, SampleRepositoryProtocol

__all__ = ["SampleService"]

_logger = NewtsLogger(__name__)


class SampleService:
    """Front door to the repository for clients and query workers.

    Args:
        repository: Where raw samples are stored
        indexer: Metadata index updated on writes and notified on deletes
    """

    def __init__(
        self, repository: SampleRepositoryProtocol, indexer: IndexerProtocol
    ) -> None:
        if repository is None:
            raise InvalidArgumentError("sample repository is required")
        if indexer is None:
            raise InvalidArgumentError("indexer is required")
        self._repository = repository
        self._indexer = indexer

    @property
    def repository(self) -> SampleRepositoryProtocol:
        return self._repository

    def write_samples(self, samples: Iterable[SampleDTO]) -> int:
        """Store ``samples`` and return how many were written."""
        converted = [dto.to_sample() for dto in samples]
        self._repository.insert(converted)
        self._indexer.update(converted)
        return len(converted)

    def get_samples(
        self,
        resource: str,
        start: int | None = None,
        end: int | None = None,
        context: str | None = None,
    ) -> list[list[SampleDTO]]:
        """Raw samples of ``resource`` grouped by timestamp, oldest first."""
        results = self._repository.select(
            _context(context),
            Resource(resource),
            None if start is None else Timestamp.from_epoch_millis(start),
            None if end is None else Timestamp.from_epoch_millis(end),
        )
        return [[SampleDTO.from_sample(sample) for sample in row] for row in results]

    def delete_samples(self, resource: str, context: str | None = None) -> None:
        """Delete every sample of ``resource`` and notify the indexer."""
        ctx = _context(context)
        res = Resource(resource)
        self._repository.delete(ctx, res)
        self._indexer.delete(ctx, res)
        _logger.info(lambda: f"Deleted samples of resource {resource} in context {ctx}")

    def aggregate(self, query: Query) -> list[Point]:
        """Run ``query`` against the repository with fresh aggregation state."""
        start = query.start_timestamp
        end = query.end_timestamp
        step = query.step

        if query.function == AggregationFunction.AVERAGE:
            # The last boundary is only closed by a sample at or after it, so
            # read one step past it.
            upper = end.step_ceiling(step) + step
            points = self._select_points(query, start, upper)
            return average(start, end, step, points)

        if query.function == AggregationFunction.ROLLUP:
            points = self._select_points(query, start, end.step_ceiling(step))
            return rollup(start, end, step, query.heartbeat_duration, points)

        if query.function == AggregationFunction.RATE:
            points = self._select_points(query, start, end)
            # Drop the leading no-predecessor sentinel
            return list(islice(rate(points), 1, None))

        raise InvalidArgumentError(f"Unsupported aggregation function: {query.function}")

    def _select_points(self, query: Query, start: Timestamp, end: Timestamp) -> list[Point]:
        results = self._repository.select(
            query.context_value, query.resource_value, start, end
        )
        points = results.points(query.metric)
        _logger.debug(
            lambda: f"Read {len(points)} points of {query.resource}/{query.metric} for {query.function}"
        )
        return points


def _context(context_id: str | None) -> Context:
    return Context(context_id) if context_id else Context.DEFAULT
