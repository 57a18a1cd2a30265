from __future__ import annotations

from abc import ABC, abstractmethod


class MetricsInterface(ABC):
    """Sink for filesystem call metrics.

    Tags are free-form string labels. ObservableFileSystem tags every sample
    with ``operation`` and ``backend``.
    """

    @abstractmethod
    def counter(self, name: str, value: float = 1, tags: dict[str, str] | None = None) -> None:
        """Add *value* to a monotonically increasing count (failed calls)."""

    @abstractmethod
    def gauge(self, name: str, value: float, tags: dict[str, str] | None = None) -> None: ...

    @abstractmethod
    def histogram(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        """Record one observation, e.g. a call duration in seconds."""
