# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
import sys
from collections.abc import Iterator
from contextlib import contextmanager

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from newts.common.newts_logger import NewtsLogger

_logger = NewtsLogger(__name__)


@contextmanager
def exit_on_error(title: str = "Error", exit_code: int = 1) -> Iterator[None]:
    """Render any error raised inside the block as a rich panel and exit.

    ``SystemExit`` and ``KeyboardInterrupt`` pass through untouched.
    """
    try:
        yield
    except (SystemExit, KeyboardInterrupt):
        raise
    except Exception as e:
        _logger.debug(lambda: f"{title}: {e!r}", exc_info=True)
        console = Console(stderr=True)
        console.print(
            Panel(
                Text(f"{type(e).__name__}: {e}", style="red"),
                title=title,
                title_align="left",
                border_style="red",
            )
        )
        sys.exit(exit_code)
