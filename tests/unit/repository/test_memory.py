# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import numpy as np
import pytest

from newts.common.enums import MetricType
from newts.common.models import Context, Gauge, Resource, Sample, Timestamp
from newts.repository import (
    IndexerProtocol,
    InMemoryIndexer,
    InMemorySampleRepository,
    SampleRepositoryProtocol,
    SampleTimeSeries,
)

RESOURCE = Resource("localhost")


def make_sample(
    millis: int,
    value: float = 1.0,
    name: str = "load",
    resource: Resource = RESOURCE,
    context: Context = Context.DEFAULT,
) -> Sample:
    return Sample(
        timestamp=Timestamp(millis),
        resource=resource,
        name=name,
        type=MetricType.GAUGE,
        value=Gauge(value),
        context=context,
    )


@pytest.fixture
def repository() -> InMemorySampleRepository:
    return InMemorySampleRepository()


class TestSampleTimeSeries:
    def test_out_of_order_appends_are_sorted(self):
        series = SampleTimeSeries()
        for millis in [300, 100, 200, 0, 400]:
            series.append(make_sample(millis))
        np.testing.assert_array_equal(series.timestamps, [0, 100, 200, 300, 400])
        assert [s.timestamp.as_millis() for s in series.select(None, None)] == [0, 100, 200, 300, 400]

    def test_equal_timestamps_keep_insertion_order(self):
        series = SampleTimeSeries()
        series.append(make_sample(100, value=1.0))
        series.append(make_sample(200, value=2.0))
        series.append(make_sample(100, value=3.0))
        assert [s.value for s in series.select(None, None)] == [Gauge(1.0), Gauge(3.0), Gauge(2.0)]

    def test_grows_past_initial_capacity(self):
        series = SampleTimeSeries()
        for millis in range(1000, 0, -1):
            series.append(make_sample(millis))
        assert len(series) == 1000
        assert bool(np.all(np.diff(series.timestamps) > 0))

    @pytest.mark.parametrize(
        "start,end,expected",
        [
            (100, 300, [100, 200, 300]),
            (101, 299, [200]),
            (None, 100, [0, 100]),
            (300, None, [300, 400]),
            (500, 600, []),
        ],
    )
    def test_select_bounds_are_inclusive(self, start, end, expected):
        series = SampleTimeSeries()
        for millis in [0, 100, 200, 300, 400]:
            series.append(make_sample(millis))
        selected = series.select(
            None if start is None else Timestamp(start),
            None if end is None else Timestamp(end),
        )
        assert [s.timestamp.as_millis() for s in selected] == expected


class TestInMemorySampleRepository:
    def test_satisfies_protocol(self, repository):
        assert isinstance(repository, SampleRepositoryProtocol)
        assert isinstance(InMemoryIndexer(), IndexerProtocol)

    def test_select_groups_metrics_by_timestamp(self, repository):
        repository.insert(
            [
                make_sample(200, name="load"),
                make_sample(100, name="load"),
                make_sample(100, name="memory"),
            ]
        )
        rows = repository.select(Context.DEFAULT, RESOURCE).get_rows()
        assert [row.timestamp for row in rows] == [Timestamp(100), Timestamp(200)]
        assert sorted(rows[0].elements) == ["load", "memory"]
        assert rows[1].get_element("memory") is None

    def test_points_of_one_metric(self, repository):
        repository.insert([make_sample(100, 1.0), make_sample(200, 2.0, name="memory")])
        points = repository.select(Context.DEFAULT, RESOURCE).points("load")
        assert [(p.x, p.y) for p in points] == [(Timestamp(100), Gauge(1.0))]

    def test_select_isolates_resources_and_contexts(self, repository):
        other = Resource("other")
        lab = Context("lab")
        repository.insert(
            [
                make_sample(100),
                make_sample(100, resource=other),
                make_sample(200, context=lab),
            ]
        )
        assert len(repository.select(Context.DEFAULT, RESOURCE)) == 1
        assert len(repository.select(Context.DEFAULT, other)) == 1
        assert len(repository.select(lab, RESOURCE)) == 1

    def test_select_range(self, repository):
        repository.insert([make_sample(millis) for millis in range(0, 1000, 100)])
        results = repository.select(Context.DEFAULT, RESOURCE, Timestamp(200), Timestamp(400))
        assert [row.timestamp.as_millis() for row in results] == [200, 300, 400]

    def test_delete(self, repository):
        repository.insert([make_sample(100), make_sample(100, name="memory")])
        repository.insert([make_sample(100, resource=Resource("other"))])
        repository.delete(Context.DEFAULT, RESOURCE)
        assert len(repository.select(Context.DEFAULT, RESOURCE)) == 0
        assert len(repository.select(Context.DEFAULT, Resource("other"))) == 1

    def test_select_unknown_resource_is_empty(self, repository):
        assert len(repository.select(Context.DEFAULT, Resource("missing"))) == 0


class TestInMemoryIndexer:
    def test_update_and_delete(self):
        indexer = InMemoryIndexer()
        indexer.update(
            [
                make_sample(0, name="load"),
                make_sample(0, name="memory"),
                make_sample(0, name="load", resource=Resource("other")),
            ]
        )
        assert indexer.metrics(Context.DEFAULT, RESOURCE) == ["load", "memory"]
        assert indexer.resources(Context.DEFAULT) == ["localhost", "other"]

        indexer.delete(Context.DEFAULT, RESOURCE)
        assert indexer.metrics(Context.DEFAULT, RESOURCE) == []
        assert indexer.resources(Context.DEFAULT) == ["other"]
