"""Circuit breaker guarding the guidance collaborator: CLOSED, OPEN, HALF_OPEN."""

import asyncio
import logging
import time
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


class CircuitState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class CircuitOpenError(Exception):
    """Raised instead of calling the collaborator while the circuit is OPEN."""

    def __init__(self, message: str, retry_after: float = 0.0) -> None:
        self.message = message
        self.retry_after = retry_after
        super().__init__(message)


class CircuitBreaker:
    """
    Consecutive failures up to failure_threshold open the circuit for
    recovery_timeout_seconds. After that a single probe call is let through
    (HALF_OPEN): success closes the circuit, failure reopens it. While the probe
    is in flight other callers are refused.
    """

    def __init__(
        self,
        failure_threshold: int = 3,
        recovery_timeout_seconds: float = 30.0,
        name: str = "default",
        metrics_callback: Any = None,
    ) -> None:
        if failure_threshold < 1:
            raise ValueError(f"failure_threshold must be >= 1, got {failure_threshold}")
        self._threshold = failure_threshold
        self._recovery_timeout = recovery_timeout_seconds
        self._name = name
        self._metrics = metrics_callback
        self._state = CircuitState.CLOSED
        self._consecutive_failures = 0
        self._opened_at: Optional[float] = None
        self._probe_in_flight = False
        self._lock = asyncio.Lock()

    @property
    def state(self) -> CircuitState:
        return self._state

    @property
    def failure_count(self) -> int:
        return self._consecutive_failures

    def _transition(self, new_state: CircuitState) -> None:
        if new_state != self._state:
            logger.info(
                "circuit_state_changed",
                extra={"circuit": self._name, "from_state": self._state.value, "to_state": new_state.value},
            )
        self._state = new_state

    def _count(self, metric: str) -> None:
        if self._metrics is not None:
            self._metrics.increment(metric, category=self._name)

    async def _admit(self) -> None:
        """Let the call through or raise CircuitOpenError."""
        async with self._lock:
            if self._state == CircuitState.CLOSED:
                return
            if self._state == CircuitState.OPEN:
                remaining = self._recovery_timeout - (time.monotonic() - (self._opened_at or 0.0))
                if remaining > 0:
                    raise CircuitOpenError(f"Circuit breaker {self._name} is OPEN", retry_after=remaining)
                self._transition(CircuitState.HALF_OPEN)
            if self._probe_in_flight:
                raise CircuitOpenError(f"Circuit breaker {self._name} is probing")
            self._probe_in_flight = True

    async def _on_success(self) -> None:
        async with self._lock:
            self._probe_in_flight = False
            self._consecutive_failures = 0
            self._transition(CircuitState.CLOSED)

    async def _on_failure(self) -> None:
        async with self._lock:
            self._probe_in_flight = False
            self._consecutive_failures += 1
            self._count("circuit_breaker_failure")
            if self._state == CircuitState.HALF_OPEN or self._consecutive_failures >= self._threshold:
                self._opened_at = time.monotonic()
                self._transition(CircuitState.OPEN)

    async def call(
        self,
        func: Callable[..., Awaitable[T]],
        *args: Any,
        **kwargs: Any,
    ) -> T:
        """Execute func through the circuit. Raises CircuitOpenError while OPEN."""
        await self._admit()
        try:
            result = await func(*args, **kwargs)
        except asyncio.CancelledError:
            # not a collaborator failure; free the probe slot without awaiting
            self._probe_in_flight = False
            raise
        except Exception:
            await self._on_failure()
            raise
        await self._on_success()
        return result
