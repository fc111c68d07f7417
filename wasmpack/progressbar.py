"""Status message output with a configurable log level."""

from __future__ import annotations

import enum
import sys
from dataclasses import dataclass

from .errors import WasmPackError

_WARN_EMOJI = "⚠️ "
_ERROR_EMOJI = "⛔"


class LogLevel(enum.IntEnum):
    """Maximum log level; less verbose levels have lower values."""

    ERROR = 0
    WARN = 1
    INFO = 2


def parse_log_level(text: str) -> LogLevel:
    """Parse a log level name such as ``info``, ``warn`` or ``error``."""
    levels = {"error": LogLevel.ERROR, "warn": LogLevel.WARN, "info": LogLevel.INFO}
    try:
        return levels[text]
    except KeyError:
        raise WasmPackError(f"Unknown log-level: {text}") from None


def _style(text: str) -> str:
    if sys.stderr.isatty():
        return f"\x1b[1m\x1b[2m{text}\x1b[0m"
    return text


@dataclass
class ProgressOutput:
    """Prints status messages to stderr, filtered by quiet mode and log level."""

    quiet: bool = False
    log_level: LogLevel = LogLevel.INFO

    def _message(self, message: str) -> None:
        print(message, file=sys.stderr)

    def is_log_enabled(self, level: LogLevel) -> bool:
        """Return whether messages of ``level`` are shown."""
        return level <= self.log_level

    def info(self, message: str) -> None:
        """Print an informational message."""
        if not self.quiet and self.is_log_enabled(LogLevel.INFO):
            self._message(f"{_style('[INFO]')}: {message}")

    def warn(self, message: str) -> None:
        """Print a warning message."""
        if not self.quiet and self.is_log_enabled(LogLevel.WARN):
            self._message(f"{_WARN_EMOJI} {_style('[WARN]')}: {message}")

    def error(self, message: str) -> None:
        """Print an error message; shown even in quiet mode."""
        if self.is_log_enabled(LogLevel.ERROR):
            self._message(f"{_ERROR_EMOJI} {_style('[ERR]')}: {message}")


PBAR = ProgressOutput()
"""The shared output used for user-facing messages."""