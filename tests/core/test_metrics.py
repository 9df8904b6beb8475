"""
Tests for metrics collection
"""

import logging
import threading

import pytest

from boardcache.core.monitoring import MetricsCollector, MetricType


class TestMetric:
    """Test individual metric behavior."""

    def setup_method(self):
        self.collector = MetricsCollector()

    def test_counter_keeps_running_total(self):
        counter = self.collector.counter("cache.articles.hits")
        counter.increment()
        counter.increment(2)

        assert counter.current == 3
        assert counter.get_summary().count == 2

    def test_gauge(self):
        gauge = self.collector.gauge("cache.articles.size")
        gauge.set(4)
        gauge.set(2)

        assert gauge.current == 2

    def test_current_defaults_to_zero(self):
        assert self.collector.timer("t").current == 0.0

    def test_type_checks(self):
        with pytest.raises(ValueError):
            self.collector.gauge("g").increment()
        with pytest.raises(ValueError):
            self.collector.counter("c").set(1)
        with pytest.raises(ValueError):
            self.collector.counter("c").time_block()

    def test_summary(self):
        timer = self.collector.timer("refresh")
        for value in (1.0, 2.0, 3.0, 4.0):
            timer.record(value)

        summary = timer.get_summary()
        assert summary.count == 4
        assert summary.min == 1.0
        assert summary.max == 4.0
        assert summary.avg == 2.5

    def test_empty_summary(self):
        summary = self.collector.timer("refresh").get_summary()
        assert summary.count == 0
        assert summary.min is None
        assert summary.avg == 0.0

    def test_time_block_records_on_exception(self):
        with pytest.raises(RuntimeError):
            with self.collector.time_operation("refresh"):
                raise RuntimeError("boom")

        assert self.collector.get_metric("refresh").get_summary().count == 1

    def test_clear(self):
        counter = self.collector.counter("c")
        counter.increment()
        counter.clear()

        assert counter.current == 0.0
        assert counter.get_summary().count == 0


class TestMetricsCollector:
    """Test the registry."""

    def test_create_returns_existing_metric(self):
        collector = MetricsCollector()
        first = collector.counter("hits")
        assert collector.counter("hits") is first
        assert first.type == MetricType.COUNTER

    def test_unknown_names_are_ignored(self, caplog):
        collector = MetricsCollector()
        with caplog.at_level(logging.WARNING):
            collector.increment("missing")
            collector.set_gauge("missing", 1)
            collector.reset("missing")

        assert collector.get_metric("missing") is None
        assert "unknown" in caplog.text

    def test_reset(self):
        collector = MetricsCollector()
        collector.counter("hits").increment(5)
        collector.reset("hits")

        assert collector.get_metric("hits").current == 0.0

    def test_snapshot(self):
        collector = MetricsCollector()
        collector.counter("b.hits").increment()
        collector.gauge("a.size").set(7)

        assert collector.snapshot() == {"a.size": 7, "b.hits": 1}

    def test_collectors_are_independent(self):
        first, second = MetricsCollector(), MetricsCollector()
        first.counter("hits").increment()

        assert second.get_metric("hits") is None

    def test_concurrent_increments(self):
        collector = MetricsCollector()
        collector.counter("hits")

        def worker():
            for _ in range(500):
                collector.increment("hits")

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert collector.get_metric("hits").current == 2000
