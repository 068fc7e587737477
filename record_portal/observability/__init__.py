"""Observability layer: in-memory metrics. No external SaaS."""

from record_portal.observability.metrics import MetricsCollector

__all__ = ["MetricsCollector"]
