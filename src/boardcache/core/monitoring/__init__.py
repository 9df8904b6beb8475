"""
Monitoring Package

Metrics collection for cache statistics and refresh timings.
"""

from boardcache.core.monitoring.metrics import (
    MetricType,
    Metric,
    MetricSummary,
    MetricsCollector,
)

__all__ = [
    'MetricType',
    'Metric',
    'MetricSummary',
    'MetricsCollector',
]
