"""Prometheus-style metrics collector. Thread-safe, in-memory. No real Prometheus dependency."""

import threading
from dataclasses import dataclass
from typing import Any, Optional


def _label_key(name: str, category: str) -> str:
    return f"{name}:category={category}"


@dataclass
class _LatencySummary:
    count: int = 0
    total: float = 0.0
    maximum: float = 0.0

    def add(self, latency_ms: float) -> None:
        self.count += 1
        self.total += latency_ms
        self.maximum = max(self.maximum, latency_ms)


class MetricsCollector:
    """
    Counters and latency observations for portal events: records created and
    modified, sync failures, login failures, guidance fallbacks and latency.
    Latencies are kept as running totals, so memory does not grow with traffic.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counters: dict[str, float] = {}
        self._labelled: dict[str, dict[str, float]] = {}
        self._latencies: dict[str, _LatencySummary] = {}

    def increment(
        self,
        name: str,
        value: float = 1.0,
        *,
        category: Optional[str] = None,
    ) -> None:
        """Bump a counter. With category, the count goes to a labelled series instead."""
        with self._lock:
            if category is None:
                self._counters[name] = self._counters.get(name, 0) + value
            else:
                series = self._labelled.setdefault(name, {})
                key = _label_key(name, category)
                series[key] = series.get(key, 0) + value

    def observe_latency(self, name: str, latency_ms: float) -> None:
        with self._lock:
            self._latencies.setdefault(name, _LatencySummary()).add(latency_ms)

    def get_counter(self, name: str, category: Optional[str] = None) -> float:
        with self._lock:
            if category is None:
                return self._counters.get(name, 0)
            return self._labelled.get(name, {}).get(_label_key(name, category), 0)

    def export_metrics(self) -> dict[str, Any]:
        """Snapshot for GET /metrics."""
        with self._lock:
            return {
                "counters": dict(self._counters),
                "counters_by_labels": {name: dict(series) for name, series in self._labelled.items()},
                "histograms": {
                    name: {"count": s.count, "sum": s.total, "max": s.maximum}
                    for name, s in self._latencies.items()
                },
            }

    def reset(self) -> None:
        """Reset all metrics (for tests)."""
        with self._lock:
            self._counters.clear()
            self._labelled.clear()
            self._latencies.clear()
