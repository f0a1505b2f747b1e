# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Environment-driven settings for Newts.

Settings are grouped by concern and read from ``NEWTS_<GROUP>_<FIELD>``
environment variables (or a ``.env`` file). Access them through the
module-level :data:`Environment` singleton, e.g.
``Environment.QUERY.NUM_WORKERS``.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["Environment"]


class _LoggingSettings(BaseSettings):
    """Console and file logging settings."""

    model_config = SettingsConfigDict(
        env_prefix="NEWTS_LOGGING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    LEVEL: str = Field(
        default="INFO",
        description="Root log level (TRACE, DEBUG, INFO, WARNING, ERROR)",
    )
    MAX_CONSOLE_MESSAGE_LENGTH: int = Field(
        default=4096,
        ge=64,
        description="Messages longer than this are truncated on the console",
    )


class _QuerySettings(BaseSettings):
    """Query worker pool settings."""

    model_config = SettingsConfigDict(
        env_prefix="NEWTS_QUERY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    NUM_WORKERS: int = Field(
        default=4,
        ge=1,
        le=256,
        description="Number of concurrent query workers pulling from the shared queue",
    )
    POLL_INTERVAL: float = Field(
        default=0.25,
        gt=0.0,
        description="Seconds a worker waits on an empty queue before re-checking for shutdown",
    )


class _Environment:
    """Namespace holding every settings group."""

    def __init__(self) -> None:
        self.LOGGING = _LoggingSettings()
        self.QUERY = _QuerySettings()


Environment = _Environment()
