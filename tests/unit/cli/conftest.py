# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Shared fixtures for CLI tests."""

from pathlib import Path
from unittest.mock import MagicMock

import orjson
import pytest


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch) -> MagicMock:
    """Keep the commands from replacing the root logger's handlers."""
    setup = MagicMock()
    monkeypatch.setattr("newts.cli_runner.setup_rich_logging", setup)
    return setup


@pytest.fixture
def samples_file(tmp_path: Path) -> Path:
    """Samples of two metrics of ``host1`` and one of ``host2``."""
    samples = [
        {"name": "load", "timestamp": 0, "type": "gauge", "value": 10.0, "resource": {"id": "host1"}},
        {"name": "load", "timestamp": 300_000, "type": "gauge", "value": 20.0, "resource": {"id": "host1"}},
        {"name": "load", "timestamp": 600_000, "type": "gauge", "value": 30.0, "resource": {"id": "host1"}},
        {"name": "octets", "timestamp": 0, "type": "counter", "value": 0, "resource": {"id": "host1"}},
        {"name": "octets", "timestamp": 300_000, "type": "counter", "value": 3000, "resource": {"id": "host1"}},
        {"name": "load", "timestamp": 0, "type": "gauge", "value": 1.0, "resource": {"id": "host2"}},
    ]
    path = tmp_path / "samples.json"
    path.write_bytes(orjson.dumps(samples))
    return path
