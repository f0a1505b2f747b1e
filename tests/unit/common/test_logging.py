# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import io
import logging
import sys
from unittest.mock import MagicMock

import pytest
from rich.console import Console, Group
from rich.text import Text

from newts.common.environment import Environment
from newts.common.exceptions import ConfigurationError
from newts.common.logging import CustomRichHandler, setup_rich_logging


def make_log_record(
    msg: str = "Test message",
    level: int = logging.INFO,
    name: str = "test_logger",
    lineno: int = 42,
    exc_info: tuple | None = None,
) -> logging.LogRecord:
    """Factory for creating LogRecord instances with sensible defaults."""
    return logging.LogRecord(
        name=name,
        level=level,
        pathname="test.py",
        lineno=lineno,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )


def render_to_str(handler: CustomRichHandler, record: logging.LogRecord) -> str:
    result = handler.render(record=record, traceback=None, message_renderable=Text(""))
    return str(result)


@pytest.fixture
def handler() -> CustomRichHandler:
    return CustomRichHandler(console=MagicMock(spec=Console), rich_tracebacks=True)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    for existing in root.handlers[:]:
        root.removeHandler(existing)
        existing.close()
    for original in handlers:
        root.addHandler(original)
    root.setLevel(level)


class TestCustomRichHandler:
    def test_render_includes_level_message_and_origin(self, handler):
        output = render_to_str(handler, make_log_record("Selecting from 0 to 600000"))
        assert "INFO" in output
        assert "Selecting from 0 to 600000" in output
        assert output.endswith("(test_logger:42)")

    def test_render_uses_trace_level_name(self, handler):
        output = render_to_str(handler, make_log_record(level=logging.DEBUG - 5))
        assert "TRACE" in output

    def test_long_messages_are_truncated(self, handler, monkeypatch):
        monkeypatch.setattr(Environment.LOGGING, "MAX_CONSOLE_MESSAGE_LENGTH", 64)
        output = render_to_str(handler, make_log_record("x" * 500))
        assert "x" * 64 in output
        assert "x" * 65 not in output

    def test_emit_renders_traceback(self, handler):
        try:
            raise ValueError("bad value")
        except ValueError:
            record = make_log_record(level=logging.ERROR, exc_info=sys.exc_info())

        handler.emit(record)
        (renderable,), _ = handler.console.print.call_args
        assert isinstance(renderable, Group)

    def test_emit_without_exception_prints_text(self, handler):
        handler.emit(make_log_record())
        (renderable,), _ = handler.console.print.call_args
        assert isinstance(renderable, Text)


class TestSetupRichLogging:
    def test_installs_single_rich_handler(self, restore_root_logger):
        console = Console(file=io.StringIO())
        setup_rich_logging("debug", console=console)
        setup_rich_logging("debug", console=console)

        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0], CustomRichHandler)

    def test_writes_to_console(self, restore_root_logger):
        buffer = io.StringIO()
        setup_rich_logging("INFO", console=Console(file=buffer, width=200))
        logging.getLogger("newts.test").info("Select returned 3 rows.")
        assert "Select returned 3 rows." in buffer.getvalue()

    def test_log_file(self, restore_root_logger, tmp_path):
        log_file = tmp_path / "logs" / "newts.log"
        setup_rich_logging("INFO", log_file=log_file, console=Console(file=io.StringIO()))
        logging.getLogger("newts.test").warning("written to file")
        for existing in restore_root_logger.handlers:
            existing.flush()

        assert len(restore_root_logger.handlers) == 2
        assert "written to file" in log_file.read_text(encoding="utf-8")

    def test_defaults_to_environment_level(self, restore_root_logger, monkeypatch):
        monkeypatch.setattr(Environment.LOGGING, "LEVEL", "WARNING")
        setup_rich_logging(console=Console(file=io.StringIO()))
        assert restore_root_logger.level == logging.WARNING

    def test_accepts_trace_level(self, restore_root_logger):
        setup_rich_logging("TRACE", console=Console(file=io.StringIO()))
        assert restore_root_logger.level == logging.DEBUG - 5

    def test_invalid_level_raises(self, restore_root_logger):
        with pytest.raises(ConfigurationError):
            setup_rich_logging("LOUD", console=Console(file=io.StringIO()))
