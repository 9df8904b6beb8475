"""
Cache Metrics

Counters, gauges and timers recording cache hits, misses, evictions and
sizes, and how long side list refreshes take. Each ArticleCache owns one
MetricsCollector; nothing here is process-wide.
"""

import logging
import threading
import time
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional


logger = logging.getLogger(__name__)


class MetricType(Enum):
    COUNTER = "counter"  # Running total
    GAUGE = "gauge"      # Last value set
    TIMER = "timer"      # Durations in seconds


@dataclass
class MetricValue:
    value: float
    timestamp: float = field(default_factory=time.time)


@dataclass
class MetricSummary:
    """Summary statistics over the retained samples of a metric."""
    count: int = 0
    sum: float = 0.0
    min: Optional[float] = None
    max: Optional[float] = None

    @property
    def avg(self) -> float:
        return self.sum / self.count if self.count else 0.0


class Metric:
    """
    A named series of samples.

    Only the last max_samples values are kept. Counters store their running
    total as each sample, so ``current`` is the total.
    """

    def __init__(self, name: str, metric_type: MetricType,
                 description: str = "", max_samples: int = 1000):
        self.name = name
        self.type = metric_type
        self.description = description

        self._values = deque(maxlen=max_samples)
        self._lock = threading.RLock()

    def record(self, value: float) -> None:
        with self._lock:
            self._values.append(MetricValue(value=value))

    def increment(self, amount: float = 1.0) -> None:
        """Add amount to a counter."""
        if self.type != MetricType.COUNTER:
            raise ValueError(f"increment() only valid for counters, {self.name} is a {self.type.value}")

        with self._lock:
            self.record(self.current + amount)

    def set(self, value: float) -> None:
        """Set a gauge."""
        if self.type != MetricType.GAUGE:
            raise ValueError(f"set() only valid for gauges, {self.name} is a {self.type.value}")

        self.record(value)

    @property
    def current(self) -> float:
        """Most recently recorded value, 0.0 when nothing was recorded."""
        with self._lock:
            return self._values[-1].value if self._values else 0.0

    def time_block(self) -> "TimerContext":
        """Context manager recording the duration of its block."""
        if self.type != MetricType.TIMER:
            raise ValueError(f"time_block() only valid for timers, {self.name} is a {self.type.value}")

        return TimerContext(self)

    def get_summary(self) -> MetricSummary:
        with self._lock:
            values = [v.value for v in self._values]

        if not values:
            return MetricSummary()
        return MetricSummary(count=len(values), sum=sum(values), min=min(values), max=max(values))

    def clear(self) -> None:
        with self._lock:
            self._values.clear()


class TimerContext:
    """Records elapsed wall time into a timer, also when the block raises."""

    def __init__(self, metric: Metric):
        self.metric = metric
        self.start_time: Optional[float] = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.start_time is not None:
            self.metric.record(time.perf_counter() - self.start_time)


class MetricsCollector:
    """
    Registry of named metrics.

    Names are dotted, e.g. ``cache.articles.hits``. Updating a metric that
    was never created logs a warning and is otherwise ignored.
    """

    def __init__(self):
        self._metrics: Dict[str, Metric] = {}
        self._lock = threading.Lock()

    def create_metric(self, name: str, metric_type: MetricType,
                      description: str = "") -> Metric:
        """Create a metric, or return the existing one with that name."""
        with self._lock:
            if name in self._metrics:
                return self._metrics[name]

            metric = Metric(name, metric_type, description)
            self._metrics[name] = metric

        logger.debug(f"Created metric: {name} ({metric_type.value})")
        return metric

    def get_metric(self, name: str) -> Optional[Metric]:
        return self._metrics.get(name)

    def counter(self, name: str, description: str = "") -> Metric:
        return self.create_metric(name, MetricType.COUNTER, description)

    def gauge(self, name: str, description: str = "") -> Metric:
        return self.create_metric(name, MetricType.GAUGE, description)

    def timer(self, name: str, description: str = "") -> Metric:
        return self.create_metric(name, MetricType.TIMER, description)

    def increment(self, name: str, amount: float = 1.0) -> None:
        metric = self._metrics.get(name)
        if metric and metric.type == MetricType.COUNTER:
            metric.increment(amount)
        else:
            logger.warning(f"Attempted to increment unknown or non-counter metric: {name}")

    def set_gauge(self, name: str, value: float) -> None:
        metric = self._metrics.get(name)
        if metric and metric.type == MetricType.GAUGE:
            metric.set(value)
        else:
            logger.warning(f"Attempted to set unknown or non-gauge metric: {name}")

    def reset(self, name: str) -> None:
        """Drop the samples of one metric."""
        metric = self._metrics.get(name)
        if metric:
            metric.clear()

    def time_operation(self, name: str) -> TimerContext:
        """Time a block, creating the timer on first use."""
        return self.timer(name, f"Timer for {name}").time_block()

    def snapshot(self) -> Dict[str, float]:
        """Current value of every metric, keyed by name."""
        return {name: metric.current for name, metric in sorted(self._metrics.items())}
