# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Shared fixtures for query tests."""

import pytest

from newts.common.models import SampleDTO
from newts.query import SampleService
from newts.repository import InMemoryIndexer, InMemorySampleRepository


def sample_dto(
    name: str,
    seconds: int,
    value: float | int,
    type: str = "gauge",
    resource: str = "host1",
) -> SampleDTO:
    return SampleDTO.model_validate(
        {
            "name": name,
            "timestamp": seconds * 1000,
            "type": type,
            "value": value,
            "resource": {"id": resource},
        }
    )


@pytest.fixture
def indexer() -> InMemoryIndexer:
    return InMemoryIndexer()


@pytest.fixture
def service(indexer: InMemoryIndexer) -> SampleService:
    """Service over an in-memory repository holding a few metrics of ``host1``."""
    service = SampleService(InMemorySampleRepository(), indexer)
    service.write_samples(
        [
            sample_dto("load", 0, 10.0),
            sample_dto("load", 300, 20.0),
            sample_dto("load", 600, 30.0),
            sample_dto("octets", 0, 0, type="counter"),
            sample_dto("octets", 10, 100, type="counter"),
            sample_dto("octets", 20, 300, type="counter"),
            sample_dto("temp", 0, 5.0),
            sample_dto("temp", 1200, 5.0),
        ]
    )
    return service
