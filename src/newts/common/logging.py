# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Rich console and file logging for the Newts CLI and query workers.

Usage::

    from newts.common.logging import setup_rich_logging

    setup_rich_logging("DEBUG", log_file=Path("artifacts/newts.log"))
"""

import logging
from datetime import datetime
from pathlib import Path

from rich.console import Console, ConsoleRenderable, Group
from rich.logging import RichHandler
from rich.text import Text
from rich.traceback import Traceback

from newts.common.environment import Environment
from newts.common.exceptions import ConfigurationError
from newts.common.newts_logger import NewtsLogger

_logger = NewtsLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_rich_logging(
    level: str | int | None = None,
    log_file: Path | None = None,
    console: Console | None = None,
) -> None:
    """Set up rich console logging on the root logger, and optionally a log file.

    Args:
        level: Log level name or number. Defaults to ``Environment.LOGGING.LEVEL``.
        log_file: Optional path of a file that receives the same records.
        console: Optional console to render to (stderr by default).
    """
    level = level or Environment.LOGGING.LEVEL
    if isinstance(level, str):
        level = level.upper()

    root_logger = logging.getLogger()
    try:
        root_logger.setLevel(level)
    except ValueError as e:
        raise ConfigurationError(f"Invalid log level: {level}") from e

    # Remove all existing handlers to avoid duplicate logs
    for existing_handler in root_logger.handlers[:]:
        root_logger.removeHandler(existing_handler)

    rich_handler = CustomRichHandler(
        rich_tracebacks=True,
        show_path=False,
        console=console or Console(stderr=True),
        show_time=False,
        show_level=False,
        tracebacks_show_locals=False,
    )
    rich_handler.setLevel(level)
    root_logger.addHandler(rich_handler)

    if log_file is not None:
        root_logger.addHandler(create_file_handler(log_file, level))

    _logger.debug(lambda: f"Logging initialized with level: {level}")


def create_file_handler(log_file: Path, level: str | int) -> logging.FileHandler:
    """Configure a file handler for logging."""
    log_file.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    return file_handler


class CustomRichHandler(RichHandler):
    """Rich logging handler with a compact single-line format.

    Each record renders as::

        HH:MM:SS.mmm LEVEL    message content (logger_name:lineno)

    Messages longer than ``Environment.LOGGING.MAX_CONSOLE_MESSAGE_LENGTH`` are
    truncated. Exception tracebacks render with Rich when ``rich_tracebacks=True``.
    """

    LOG_LEVEL_STYLES = {
        "TRACE": "dim",
        "DEBUG": "dim",
        "INFO": "cyan",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "bold red",
    }

    def render(
        self,
        *,
        record: logging.LogRecord,
        traceback: Traceback | None,
        message_renderable: ConsoleRenderable,
    ) -> ConsoleRenderable:
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S.%f")[:-3]
        level_style = self.LOG_LEVEL_STYLES.get(record.levelname, "white")
        message = record.getMessage()[: Environment.LOGGING.MAX_CONSOLE_MESSAGE_LENGTH]

        formatted_log = Text.assemble(
            Text(f"{timestamp} ", style="log.time"),
            Text(f"{record.levelname:<8} ", style=level_style),
            Text(message),
            Text(f" ({record.name}:{record.lineno})", style="dim italic"),
        )
        return Group(formatted_log, traceback) if traceback else formatted_log

    def emit(self, record: logging.LogRecord) -> None:
        traceback = None
        if (
            self.rich_tracebacks
            and record.exc_info
            and record.exc_info != (None, None, None)
        ):
            traceback = Traceback.from_exception(*record.exc_info)

        log_renderable = self.render(
            record=record, traceback=traceback, message_renderable=Text("")
        )
        self.console.print(log_renderable)
