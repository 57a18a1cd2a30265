from vfs_platform.services.metrics.interface import MetricsInterface


class NoopMetrics(MetricsInterface):
    """Drops every sample.

    FileSystemFactory treats METRICS_IMPL=noop as "metrics off" and hands out
    unwrapped backends, so this is only reached when a caller passes it in.
    """

    def counter(self, name: str, value: float = 1, tags: dict[str, str] | None = None) -> None:
        return None

    def gauge(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        return None

    def histogram(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        return None
