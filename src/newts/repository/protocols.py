# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from newts.common.models import Context, Resource, Sample, Timestamp
    from newts.repository.results import Results


@runtime_checkable
class SampleRepositoryProtocol(Protocol):
    """Storage of raw samples, keyed by context and resource."""

    def insert(self, samples: Iterable[Sample]) -> None:
        """Persist ``samples``. Order does not matter."""
        ...

    def select(
        self,
        context: Context,
        resource: Resource,
        start: Timestamp | None = None,
        end: Timestamp | None = None,
    ) -> Results:
        """Return the resource's samples in ``[start, end]`` grouped by timestamp.

        Args:
            context: Context the resource belongs to
            resource: Resource to read
            start: Inclusive lower bound, or None for no bound
            end: Inclusive upper bound, or None for no bound
        """
        ...

    def delete(self, context: Context, resource: Resource) -> None: ...


@runtime_checkable
class IndexerProtocol(Protocol):
    """Metadata index kept in step with the samples written and deleted."""

    def update(self, samples: Iterable[Sample]) -> None:
        """Record the resources and metric names seen in ``samples``."""
        ...

    def delete(self, context: Context, resource: Resource) -> None: ...
