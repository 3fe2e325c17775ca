#!/usr/bin/env python3
"""Terminal colors for codebundle's command-line output.

Each Colors instance is tied to one stream and is enabled only when that
stream is a TTY. The NO_COLOR (https://no-color.org/) and FORCE_COLOR
environment variables override the TTY check.

Example:
    >>> c = get_colors()
    >>> print(c.path("src/app.tsx") + " " + c.dim("(3 imports)"))
"""

import os
import sys
from typing import TextIO


class Colors:
    """ANSI color helper.

    Attributes:
        enabled: Whether escape codes are emitted.
    """

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"

    def __init__(self, enabled: bool = None, stream: TextIO = None):
        """Initialize colors for one output stream.

        Args:
            enabled: Force colors on or off. None detects from ``stream``.
            stream: Stream the colored text is written to (default stdout).
        """
        if enabled is not None:
            self.enabled = enabled
        else:
            self.enabled = self._should_enable_colors(stream or sys.stdout)

    def _should_enable_colors(self, stream: TextIO) -> bool:
        if os.environ.get("NO_COLOR"):
            return False
        if os.environ.get("FORCE_COLOR"):
            return True
        if not hasattr(stream, "isatty") or not stream.isatty():
            return False
        return os.environ.get("TERM", "") != "dumb"

    def _colorize(self, text: str, *codes: str) -> str:
        if not self.enabled:
            return text
        return f"{''.join(codes)}{text}{self.RESET}"

    def path(self, text: str) -> str:
        """File paths (cyan)."""
        return self._colorize(text, self.CYAN)

    def dim(self, text: str) -> str:
        return self._colorize(text, self.DIM)

    def bold(self, text: str) -> str:
        return self._colorize(text, self.BOLD)

    def success(self, text: str) -> str:
        return self._colorize(text, self.BOLD, self.GREEN)

    def warning(self, text: str) -> str:
        return self._colorize(text, self.YELLOW)

    def error(self, text: str) -> str:
        return self._colorize(text, self.BOLD, self.RED)

    def for_size(self, label: str, text: str) -> str:
        """Color text by a size indicator label."""
        if label == "optimal":
            return self.success(text)
        if label == "large":
            return self.warning(text)
        return self.error(text)


def get_colors(no_color: bool = False, stream: TextIO = None) -> Colors:
    """Return a Colors instance for a stream, disabled when ``no_color`` is set."""
    if no_color:
        return Colors(enabled=False)
    return Colors(stream=stream)
