# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Main CLI entry point for Newts."""

################################################################################
# NOTE: Keep the imports here to a minimum. This file is read every time
# the CLI is run, including to generate the help text.
################################################################################

from pathlib import Path

from cyclopts import App

from newts.cli_utils import exit_on_error
from newts.common.constants import (
    DEFAULT_CONTEXT_ID,
    DEFAULT_STEP_SECONDS,
    HEARTBEAT_MILLIS,
    MILLIS_PER_SECOND,
)
from newts.common.enums import AggregationFunction

app = App(name="newts", help="Newts time-series aggregation")


@app.command(name="aggregate")
def aggregate(
    samples_file: Path,
    resource: str,
    start: int,
    end: int,
    *,
    metric: list[str] | None = None,
    function: AggregationFunction = AggregationFunction.AVERAGE,
    resolution: int = DEFAULT_STEP_SECONDS * MILLIS_PER_SECOND,
    heartbeat: int = HEARTBEAT_MILLIS,
    context: str = DEFAULT_CONTEXT_ID,
    workers: int | None = None,
    output: Path | None = None,
    log_level: str | None = None,
) -> None:
    """Aggregate the metrics of one resource from a JSON samples file.

    Args:
        samples_file: JSON array of samples (name, timestamp, type, value, resource).
        resource: Id of the resource to aggregate.
        start: Range start in milliseconds since the epoch.
        end: Range end in milliseconds since the epoch.
        metric: Metric(s) to aggregate. Defaults to every metric of the resource.
        function: Aggregation to apply: average, rate or rollup.
        resolution: Grid step in milliseconds.
        heartbeat: Rollup heartbeat in milliseconds.
        context: Context of the resource.
        workers: Number of concurrent query workers.
        output: File to write the JSON result to. Defaults to stdout.
        log_level: Log level (TRACE, DEBUG, INFO, WARNING, ERROR).
    """
    with exit_on_error(title="Error Running Aggregation"):
        from newts.cli_runner import run_aggregate

        run_aggregate(
            samples_file=samples_file,
            resource=resource,
            start=start,
            end=end,
            metrics=metric,
            function=function,
            resolution=resolution,
            heartbeat=heartbeat,
            context=context,
            workers=workers,
            output=output,
            log_level=log_level,
        )


@app.command(name="samples")
def samples(
    samples_file: Path,
    resource: str,
    *,
    start: int | None = None,
    end: int | None = None,
    context: str = DEFAULT_CONTEXT_ID,
    log_level: str | None = None,
) -> None:
    """Print the raw samples of one resource, grouped by timestamp.

    Args:
        samples_file: JSON array of samples (name, timestamp, type, value, resource).
        resource: Id of the resource to print.
        start: Optional inclusive range start in milliseconds since the epoch.
        end: Optional inclusive range end in milliseconds since the epoch.
        context: Context of the resource.
        log_level: Log level (TRACE, DEBUG, INFO, WARNING, ERROR).
    """
    with exit_on_error(title="Error Reading Samples"):
        from newts.cli_runner import run_samples

        run_samples(
            samples_file=samples_file,
            resource=resource,
            start=start,
            end=end,
            context=context,
            log_level=log_level,
        )
