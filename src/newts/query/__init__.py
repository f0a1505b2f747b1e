# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from newts.query.models import Query, QueryResult
from newts.query.service import SampleService
from newts.query.worker import QueryWorker, run_query_workers

__all__ = [
    "Query",
    "QueryResult",
    "QueryWorker",
    "SampleService",
    "run_query_workers",
]
