# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Implementations behind the CLI commands, imported lazily by :mod:`newts.cli`."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

import orjson
from rich.console import Console

from newts.common.enums import AggregationFunction
from newts.common.exceptions import InvalidArgumentError
from newts.common.logging import setup_rich_logging
from newts.common.models import Context, PointDTO, Resource, loads_samples
from newts.common.newts_logger import NewtsLogger
from newts.query import Query, SampleService, run_query_workers
from newts.repository import InMemoryIndexer, InMemorySampleRepository

_logger = NewtsLogger(__name__)


def load_service(samples_file: Path) -> tuple[SampleService, InMemoryIndexer]:
    """Build an in-memory service pre-loaded with the samples in ``samples_file``."""
    if not samples_file.is_file():
        raise InvalidArgumentError(f"Samples file does not exist: {samples_file}")

    indexer = InMemoryIndexer()
    service = SampleService(InMemorySampleRepository(), indexer)
    count = service.write_samples(loads_samples(samples_file.read_bytes()))
    _logger.info(lambda: f"Loaded {count} samples from {samples_file}")
    return service, indexer


def run_aggregate(
    samples_file: Path,
    resource: str,
    start: int,
    end: int,
    metrics: list[str] | None = None,
    function: AggregationFunction = AggregationFunction.AVERAGE,
    resolution: int | None = None,
    heartbeat: int | None = None,
    context: str | None = None,
    workers: int | None = None,
    output: Path | None = None,
    log_level: str | None = None,
) -> dict[str, Any]:
    """Aggregate each requested metric of ``resource`` and emit the JSON result."""
    setup_rich_logging(log_level)
    service, indexer = load_service(samples_file)

    query_args: dict[str, Any] = {"resource": resource, "start": start, "end": end}
    if resolution is not None:
        query_args["resolution"] = resolution
    if heartbeat is not None:
        query_args["heartbeat"] = heartbeat
    if context:
        query_args["context"] = context

    names = metrics or indexer.metrics(
        Context(context) if context else Context.DEFAULT, Resource(resource)
    )
    if not names:
        raise InvalidArgumentError(f"No metrics found for resource {resource!r}")

    queries = [Query(metric=name, function=function, **query_args) for name in names]
    results = asyncio.run(run_query_workers(service, queries, workers))

    payload = {
        "resource": resource,
        "function": str(function),
        "start": start,
        "end": end,
        "metrics": {
            result.query.metric: {
                "points": [PointDTO.from_point(p).model_dump() for p in result.points],
                "error": result.error,
            }
            for result in results
        },
    }
    _write_json(payload, output)
    return payload


def run_samples(
    samples_file: Path,
    resource: str,
    start: int | None = None,
    end: int | None = None,
    context: str | None = None,
    log_level: str | None = None,
) -> list[list[dict[str, Any]]]:
    """Emit the raw samples of ``resource`` grouped by timestamp."""
    setup_rich_logging(log_level)
    service, _ = load_service(samples_file)
    rows = [
        [dto.to_json_dict() for dto in row]
        for row in service.get_samples(resource, start=start, end=end, context=context)
    ]
    _write_json(rows, None)
    return rows


def _write_json(payload: Any, output: Path | None) -> None:
    content = orjson.dumps(payload, option=orjson.OPT_INDENT_2)
    if output is None:
        Console().print_json(content.decode("utf-8"))
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(content)
    _logger.info(lambda: f"Wrote results to {output}")
