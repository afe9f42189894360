"""
Console and logging utilities for the CLI.

Everything here writes to stderr: stdout belongs to the protocol stream.
"""

import logging
import os
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

_THEME = Theme(
    {
        "primary": "white",
        "accent": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "green",
        "muted": "grey70",
    }
)


def _should_enable_color(enable: Optional[bool]) -> bool:
    """
    Respect NO_COLOR, then an explicit preference, then whether stderr is a TTY.
    """
    if os.getenv("NO_COLOR") is not None:
        return False
    if enable is not None:
        return enable
    return bool(getattr(sys.stderr, "isatty", lambda: False)())


def make_console(use_color: Optional[bool] = None, stderr: bool = True) -> Console:
    color = _should_enable_color(use_color)
    return Console(
        theme=_THEME,
        stderr=stderr,
        no_color=not color,
        color_system="auto" if color else None,
        highlight=False,
    )


def configure_logging(level: str = "INFO", console: Optional[Console] = None) -> None:
    """Route the root logger through a RichHandler bound to a stderr console."""
    handler = RichHandler(
        console=console or make_console(),
        show_path=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
