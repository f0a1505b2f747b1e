# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from newts.repository.memory import (
    InMemoryIndexer,
    InMemorySampleRepository,
    SampleTimeSeries,
)
from newts.repository.protocols import IndexerProtocol, SampleRepositoryProtocol
from newts.repository.results import Results, Row

__all__ = [
    "InMemoryIndexer",
    "InMemorySampleRepository",
    "IndexerProtocol",
    "Results",
    "Row",
    "SampleRepositoryProtocol",
    "SampleTimeSeries",
]
