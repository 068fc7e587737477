"""Resilience helpers for simulated external collaborators."""

from record_portal.scalability.circuit_breaker import CircuitBreaker, CircuitOpenError, CircuitState

__all__ = ["CircuitBreaker", "CircuitOpenError", "CircuitState"]
