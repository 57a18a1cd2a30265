from vfs_platform.services.metrics.memory_metrics import MemoryMetrics
from vfs_platform.services.metrics.noop_metrics import NoopMetrics


def test_counter_increments():
    m = MemoryMetrics()
    m.counter("fs_operation_errors_total")
    m.counter("fs_operation_errors_total")
    m.counter("fs_operation_errors_total", value=3)
    assert m.counters["fs_operation_errors_total"] == 5


def test_gauge_sets_value():
    m = MemoryMetrics()
    m.gauge("open_handles", 2)
    assert m.gauges["open_handles"] == 2
    m.gauge("open_handles", 0)
    assert m.gauges["open_handles"] == 0


def test_histogram_records_values():
    m = MemoryMetrics()
    m.histogram("latency", 10.0)
    m.histogram("latency", 20.0)
    assert m.histograms["latency"] == [10.0, 20.0]


def test_tagged_filters_samples():
    m = MemoryMetrics()
    m.histogram("latency", 1.0, tags={"operation": "stat", "backend": "memory"})
    m.histogram("latency", 2.0, tags={"operation": "remove", "backend": "memory"})
    m.counter("errors", tags={"operation": "stat"})
    assert [s.value for s in m.tagged("latency", operation="stat")] == [1.0]
    assert len(m.tagged("latency", backend="memory")) == 2
    assert m.tagged("latency", backend="local") == []


def test_noop_metrics_accepts_everything():
    m = NoopMetrics()
    m.counter("a")
    m.gauge("b", 1.0)
    m.histogram("c", 2.0, tags={"x": "y"})
