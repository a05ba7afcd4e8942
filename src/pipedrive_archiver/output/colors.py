"""ANSI color helpers. Color is decided per stream, so piped output stays plain."""

from __future__ import annotations

import os
import sys
from typing import TextIO

GREEN = "\033[32m"
YELLOW = "\033[33m"
RED = "\033[31m"
DIM = "\033[2m"
RESET = "\033[0m"
CYAN = "\033[36m"
BLUE = "\033[34m"
BOLD = "\033[1m"


def use_color(stream: TextIO | None = None) -> bool:
    """Return True if the stream (default stdout) supports ANSI color.

    NO_COLOR in the environment always wins.
    """
    if os.environ.get("NO_COLOR"):
        return False
    stream = stream if stream is not None else sys.stdout
    return hasattr(stream, "isatty") and stream.isatty()


def color(text: str, code: str, stream: TextIO | None = None) -> str:
    """Wrap text in ANSI code(s) if color is enabled for the target stream."""
    if not use_color(stream):
        return text
    return f"{code}{text}{RESET}"
