# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from newts.common.enums import AggregationFunction
from newts.common.exceptions import InvalidArgumentError
from newts.common.models import Context, Duration, Gauge, Point, Resource, SampleDTO, Timestamp
from newts.query import Query, SampleService
from newts.repository import InMemorySampleRepository


def as_pairs(points: list[Point]) -> list[tuple[int, float | None]]:
    return [(p.x.as_millis(), None if p.y is None else p.y.to_float()) for p in points]


class TestQuery:
    def test_defaults(self):
        query = Query(resource="host1", metric="load", start=0, end=600_000)
        assert query.function == AggregationFunction.AVERAGE
        assert query.step == Duration.seconds(300)
        assert query.heartbeat_duration == Duration.seconds(600)
        assert query.context_value == Context.DEFAULT
        assert query.resource_value == Resource("host1")
        assert query.start_timestamp == Timestamp(0)
        assert query.end_timestamp == Timestamp(600_000)

    def test_function_is_case_insensitive(self):
        query = Query(resource="host1", metric="load", start=0, end=1, function="RATE")
        assert query.function == AggregationFunction.RATE

    @pytest.mark.parametrize(
        "overrides",
        [
            {"start": 10, "end": 0},
            {"resolution": 0},
            {"heartbeat": -1},
            {"resource": ""},
            {"function": "median"},
        ],
    )
    def test_invalid_query_raises(self, overrides):
        data = {"resource": "host1", "metric": "load", "start": 0, "end": 600_000}
        data.update(overrides)
        with pytest.raises(ValidationError):
            Query(**data)

    def test_is_frozen(self):
        query = Query(resource="host1", metric="load", start=0, end=1)
        with pytest.raises(ValidationError):
            query.metric = "other"


class TestSampleService:
    @pytest.mark.parametrize("missing", ["repository", "indexer"])
    def test_requires_collaborators(self, missing):
        args = {"repository": InMemorySampleRepository(), "indexer": MagicMock()}
        args[missing] = None
        with pytest.raises(InvalidArgumentError):
            SampleService(**args)

    def test_write_updates_indexer(self, service, indexer):
        assert indexer.metrics(Context.DEFAULT, Resource("host1")) == ["load", "octets", "temp"]

    def test_write_returns_count(self):
        indexer = MagicMock()
        service = SampleService(InMemorySampleRepository(), indexer)
        dto = SampleDTO.model_validate(
            {"name": "m", "timestamp": 0, "type": "gauge", "value": 1.0, "resource": {"id": "r"}}
        )
        assert service.write_samples([dto, dto]) == 2
        indexer.update.assert_called_once()
        assert len(indexer.update.call_args.args[0]) == 2

    def test_get_samples_grouped_by_timestamp(self, service):
        rows = service.get_samples("host1", start=0, end=10_000)
        assert [[dto.name for dto in row] for row in rows] == [
            ["load", "octets", "temp"],
            ["octets"],
        ]
        assert rows[1][0].value == 100

    def test_get_samples_of_unknown_resource(self, service):
        assert service.get_samples("missing") == []

    def test_delete_removes_samples_and_notifies_indexer(self):
        repository = MagicMock()
        indexer = MagicMock()
        service = SampleService(repository, indexer)
        service.delete_samples("host1")
        repository.delete.assert_called_once_with(Context.DEFAULT, Resource("host1"))
        indexer.delete.assert_called_once_with(Context.DEFAULT, Resource("host1"))

    def test_delete_then_read_is_empty(self, service, indexer):
        service.delete_samples("host1")
        assert service.get_samples("host1") == []
        assert indexer.metrics(Context.DEFAULT, Resource("host1")) == []

    def test_aggregate_average(self, service):
        query = Query(resource="host1", metric="load", start=0, end=600_000)
        assert as_pairs(service.aggregate(query)) == [
            (0, None),
            (300_000, 20.0),
            (600_000, 30.0),
        ]

    def test_aggregate_rollup(self, service):
        query = Query(
            resource="host1",
            metric="temp",
            start=0,
            end=1_200_000,
            function=AggregationFunction.ROLLUP,
        )
        assert as_pairs(service.aggregate(query)) == [
            (300_000, 5.0),
            (600_000, 5.0),
            (900_000, 5.0),
            (1_200_000, 5.0),
        ]

    def test_aggregate_rate(self, service):
        query = Query(
            resource="host1",
            metric="octets",
            start=0,
            end=20_000,
            function=AggregationFunction.RATE,
        )
        assert service.aggregate(query) == [
            Point(Timestamp(10_000), Gauge(10.0)),
            Point(Timestamp(20_000), Gauge(20.0)),
        ]

    def test_aggregate_unknown_metric_is_empty(self, service):
        query = Query(resource="host1", metric="missing", start=0, end=600_000)
        assert service.aggregate(query) == []
