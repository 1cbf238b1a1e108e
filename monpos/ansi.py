"""Terminal styling for the log output and the `monpos` report."""

import os
import sys
from typing import TextIO

__all__ = ["LogStyles", "ReportStyles", "paint", "wants_color"]

RESET = "\x1b[0m"


def wants_color(stream: TextIO | None = None) -> bool:
    """Tell whether escape sequences should be written to `stream` (stderr by default).

    NO_COLOR always wins, FORCE_COLOR colors pipes too.
    """
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    return (stream or sys.stderr).isatty()


def paint(text: str, style: tuple[int, ...]) -> str:
    """Wrap `text` in the SGR sequence of `style`."""
    if not style:
        return text
    return f"\x1b[{';'.join(map(str, style))}m{text}{RESET}"


class LogStyles:
    """SGR codes per log level."""

    WARNING = (33,)
    ERROR = (31,)
    CRITICAL = (31, 1)


class ReportStyles:
    """SGR codes used by the command line report."""

    OK = (32, 1)
    FAILURE = (31, 1)
    MONITOR = (1,)
