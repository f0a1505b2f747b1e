# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Async query workers that drain a shared queue of aggregation queries.

Each query is aggregated synchronously with its own cursor and accumulators,
so any number of workers can share one queue and one service without locks
around the engine.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable

from newts.common.environment import Environment
from newts.common.exceptions import NewtsError
from newts.common.newts_logger import NewtsLogger
from newts.query.models import Query, QueryResult
from newts.query.service import SampleService

__all__ = ["QueryWorker", "run_query_workers"]

_logger = NewtsLogger(__name__)

QueueItem = tuple[int, Query]


class QueryWorker:
    """Pulls ``(index, query)`` items off a queue until shut down and drained.

    Args:
        sequence: Worker number, used in the worker id
        service: Service the queries are run against
        queue: Shared work queue
        results: Shared mapping of queue index to result
        poll_interval: Seconds to wait on an empty queue before re-checking for shutdown
    """

    def __init__(
        self,
        sequence: int,
        service: SampleService,
        queue: asyncio.Queue[QueueItem],
        results: dict[int, QueryResult],
        poll_interval: float | None = None,
    ) -> None:
        self.id = f"query_worker_{sequence}"
        self._service = service
        self._queue = queue
        self._results = results
        self._poll_interval = poll_interval or Environment.QUERY.POLL_INTERVAL
        self._shutdown = asyncio.Event()
        self.queries_processed = 0
        self.rows_returned = 0

    def shutdown(self) -> None:
        """Stop once the queue is empty."""
        self._shutdown.set()

    @property
    def is_shutdown(self) -> bool:
        return self._shutdown.is_set()

    async def run(self) -> None:
        while True:
            try:
                index, query = await asyncio.wait_for(
                    self._queue.get(), timeout=self._poll_interval
                )
            except asyncio.TimeoutError:
                if self.is_shutdown:
                    break
                continue

            try:
                self._results[index] = self._process(query)
            finally:
                self._queue.task_done()

        _logger.debug(
            lambda: f"{self.id} stopped after {self.queries_processed} queries ({self.rows_returned} rows)"
        )

    def _process(self, query: Query) -> QueryResult:
        _logger.debug(
            lambda: f"Selecting from {query.start} to {query.end} for resource {query.resource} at resolution {query.resolution}"
        )
        self.queries_processed += 1
        try:
            points = self._service.aggregate(query)
        except NewtsError as e:
            _logger.warning(f"{self.id} failed query for {query.resource}/{query.metric}: {e}")
            return QueryResult(query=query, error=str(e))

        self.rows_returned += len(points)
        _logger.debug(lambda: f"Select returned {len(points)} rows.")
        return QueryResult(query=query, points=points)


async def run_query_workers(
    service: SampleService,
    queries: Iterable[Query],
    num_workers: int | None = None,
) -> list[QueryResult]:
    """Run ``queries`` across a pool of workers sharing one queue.

    Returns:
        One result per query, in the order the queries were given.
    """
    num_workers = num_workers or Environment.QUERY.NUM_WORKERS
    queue: asyncio.Queue[QueueItem] = asyncio.Queue()
    results: dict[int, QueryResult] = {}

    count = 0
    for count, query in enumerate(queries, start=1):
        queue.put_nowait((count - 1, query))

    workers = [QueryWorker(i, service, queue, results) for i in range(num_workers)]
    tasks = [asyncio.create_task(worker.run(), name=worker.id) for worker in workers]
    _logger.debug(lambda: f"Started {num_workers} query workers for {count} queries")

    # A worker that dies would leave the queue undrained, so stop waiting on
    # join() as soon as any worker exits early.
    join_task = asyncio.create_task(queue.join())
    try:
        await asyncio.wait([join_task, *tasks], return_when=asyncio.FIRST_COMPLETED)
    finally:
        join_task.cancel()
        for worker in workers:
            worker.shutdown()
        outcomes = await asyncio.gather(*tasks, return_exceptions=True)

    for worker, outcome in zip(workers, outcomes):
        if isinstance(outcome, BaseException):
            _logger.error(f"{worker.id} failed: {outcome!r}")
            raise outcome

    return [results[i] for i in range(count)]
