from abc import ABC, abstractmethod
from typing import Any


class LoggingInterface(ABC):
    """Structured logging: a message plus keyword context.

    Filesystem services pass the operation and its paths as context, e.g.
    ``logger.debug("Filesystem operation", op="rename", src=..., dst=...)``.
    """

    @abstractmethod
    def info(self, msg: str, **ctx: Any) -> None:
        """Lifecycle events such as a backend becoming ready."""

    @abstractmethod
    def warn(self, msg: str, **ctx: Any) -> None:
        """A filesystem call failed; the error is still raised to the caller."""

    @abstractmethod
    def error(self, msg: str, **ctx: Any) -> None: ...

    @abstractmethod
    def debug(self, msg: str, **ctx: Any) -> None:
        """Per-call detail for mutating operations."""
