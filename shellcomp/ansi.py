"""Terminal colors for log records and CLI messages.

Colors are off when NO_COLOR is set or the stream is not a TTY, and forced on
by FORCE_COLOR.
"""

import logging
import os
import sys
from typing import TextIO

__all__ = ["BOLD", "DIM", "GREEN", "LEVEL_STYLES", "RED", "RESET", "YELLOW", "colorize", "should_colorize"]

_CSI = "\x1b["
RESET = f"{_CSI}0m"

BOLD = "1"
DIM = "2"
RED = "31"
GREEN = "32"
YELLOW = "33"

# Log levels not listed here are printed as is
LEVEL_STYLES: dict[int, tuple[str, ...]] = {
    logging.WARNING: (YELLOW, DIM),
    logging.ERROR: (RED, DIM),
    logging.CRITICAL: (RED, BOLD),
}


def should_colorize(stream: TextIO | None = None) -> bool:
    """Tell whether `stream` (stderr by default) should get escape sequences."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    stream = sys.stderr if stream is None else stream
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def colorize(text: str, *codes: str) -> str:
    """Wrap `text` in the SGR `codes` (unchanged without codes)."""
    if not codes:
        return text
    return f"{_CSI}{';'.join(codes)}m{text}{RESET}"

