from __future__ import annotations

from dataclasses import dataclass, field

from vfs_platform.services.metrics.interface import MetricsInterface


@dataclass
class Sample:
    name: str
    value: float
    tags: dict[str, str] = field(default_factory=dict)


class MemoryMetrics(MetricsInterface):
    """In-memory metrics for test assertions on metric values.

    ``counters``/``gauges``/``histograms`` aggregate by name only; ``samples``
    keeps every call with its tags.
    """

    def __init__(self) -> None:
        self.counters: dict[str, float] = {}
        self.gauges: dict[str, float] = {}
        self.histograms: dict[str, list[float]] = {}
        self.samples: list[Sample] = []

    def counter(self, name: str, value: float = 1, tags: dict[str, str] | None = None) -> None:
        self.counters[name] = self.counters.get(name, 0) + value
        self.samples.append(Sample(name, value, dict(tags or {})))

    def gauge(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        self.gauges[name] = value
        self.samples.append(Sample(name, value, dict(tags or {})))

    def histogram(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        if name not in self.histograms:
            self.histograms[name] = []
        self.histograms[name].append(value)
        self.samples.append(Sample(name, value, dict(tags or {})))

    def tagged(self, name: str, **tags: str) -> list[Sample]:
        """Return the samples of *name* whose tags include all of *tags*."""
        return [
            s
            for s in self.samples
            if s.name == name and all(s.tags.get(k) == v for k, v in tags.items())
        ]
