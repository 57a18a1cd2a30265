import sys
from datetime import datetime, timezone
from typing import Any, TextIO

from vfs_platform.services.logger.interface import LoggingInterface

_COLORS = {
    "INFO": "\033[32m",   # green
    "WARN": "\033[33m",   # yellow
    "ERROR": "\033[31m",  # red
    "DEBUG": "\033[36m",  # cyan
}
_RESET = "\033[0m"
_LEVELS = {"DEBUG": 10, "INFO": 20, "WARN": 30, "ERROR": 40}


class PrettyLogger(LoggingInterface):
    """Colorized human-readable logger for local development.

    Entries below *level* are dropped; debug output is hidden by default.
    """

    def __init__(self, level: str = "INFO", stream: TextIO | None = None) -> None:
        level = level.upper()
        if level not in _LEVELS:
            raise ValueError(f"Unknown log level: '{level}' (available: {', '.join(_LEVELS)})")
        self._threshold = _LEVELS[level]
        self._stream = stream

    def info(self, msg: str, **ctx: Any) -> None:
        self._log("INFO", msg, ctx)

    def warn(self, msg: str, **ctx: Any) -> None:
        self._log("WARN", msg, ctx)

    def error(self, msg: str, **ctx: Any) -> None:
        self._log("ERROR", msg, ctx)

    def debug(self, msg: str, **ctx: Any) -> None:
        self._log("DEBUG", msg, ctx)

    def _log(self, level: str, msg: str, ctx: dict[str, Any]) -> None:
        if _LEVELS[level] < self._threshold:
            return
        ts = datetime.now(timezone.utc).strftime("%H:%M:%S")
        color = _COLORS.get(level, "")
        extra = f"  {ctx}" if ctx else ""
        print(f"{color}{ts} [{level}]{_RESET} {msg}{extra}", file=self._stream or sys.stderr)
