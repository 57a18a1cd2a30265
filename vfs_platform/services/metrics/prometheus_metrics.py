"""Prometheus metrics implementation using prometheus_client."""

from __future__ import annotations

from typing import Any

import prometheus_client as prom

from vfs_platform.services.metrics.interface import MetricsInterface
from vfs_platform.services.secrets.interface import SecretsInterface


def _label_names(tags: dict[str, str] | None) -> list[str]:
    return sorted(tags.keys()) if tags else []


def _label_values(names: list[str], tags: dict[str, str] | None) -> list[str]:
    if not tags:
        return []
    return [tags[n] for n in names]


class PrometheusMetrics(MetricsInterface):
    """Metrics backend that exposes metrics via Prometheus HTTP endpoint.

    Config (via secrets):
        METRICS_PROMETHEUS_PORT - Port to expose /metrics on (default: 9091).
                                  Set to 0 or empty to disable the HTTP server.

    Each instance owns its own CollectorRegistry, so several filesystems (or
    tests) can create instances without clashing on metric names. Dashes and
    dots in metric names are replaced with underscores.
    """

    def __init__(
        self,
        secrets: SecretsInterface,
        registry: prom.CollectorRegistry | None = None,
    ) -> None:
        self.registry = registry or prom.CollectorRegistry()
        self._metrics: dict[str, Any] = {}

        port = secrets.get_int("METRICS_PROMETHEUS_PORT", 9091)
        if port:
            prom.start_http_server(port, registry=self.registry)

    @staticmethod
    def _sanitize(name: str) -> str:
        return name.replace("-", "_").replace(".", "_")

    def _get(self, kind: type, name: str, tags: dict[str, str] | None) -> Any:
        safe = self._sanitize(name)
        label_names = _label_names(tags)
        key = f"{kind.__name__}:{safe}:{','.join(label_names)}"
        if key not in self._metrics:
            self._metrics[key] = kind(safe, safe, label_names, registry=self.registry)
        metric = self._metrics[key]
        if label_names:
            return metric.labels(*_label_values(label_names, tags))
        return metric

    def counter(self, name: str, value: float = 1, tags: dict[str, str] | None = None) -> None:
        self._get(prom.Counter, name, tags).inc(value)

    def gauge(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        self._get(prom.Gauge, name, tags).set(value)

    def histogram(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        self._get(prom.Histogram, name, tags).observe(value)
