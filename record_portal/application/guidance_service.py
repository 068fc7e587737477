"""Guidance assistant orchestration. The core never depends on the assistant being available."""

import logging
import time
from dataclasses import dataclass
from typing import Optional

from record_portal.domain.exceptions import DomainValidationError
from record_portal.domain.models.record import CitizenRecord
from record_portal.infrastructure.assistant.guidance_client import GuidanceClient
from record_portal.observability.metrics import MetricsCollector
from record_portal.scalability.circuit_breaker import CircuitBreaker

FALLBACK_MESSAGE = (
    "I'm sorry, I encountered an error connecting to the compliance database. "
    "Please proceed with manual verification."
)
EMPTY_RESPONSE_MESSAGE = "No guidance available."


@dataclass(frozen=True)
class GuidanceResult:
    text: str
    record_id: Optional[str]
    fallback: bool = False


class GuidanceService:
    """
    Ask the guidance collaborator about a record (or the first record when none is
    selected). Any collaborator failure, including an open circuit, yields the
    static fallback message.
    """

    def __init__(
        self,
        client: GuidanceClient,
        breaker: CircuitBreaker,
        metrics: MetricsCollector,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._client = client
        self._breaker = breaker
        self._metrics = metrics
        self._logger = logger or logging.getLogger(__name__)

    async def ask(self, query: str, record: Optional[CitizenRecord]) -> GuidanceResult:
        if not query or not query.strip():
            raise DomainValidationError("query must not be empty", fields=["query"])
        record_id = record.id if record is not None else None
        started = time.monotonic()
        try:
            text = await self._breaker.call(self._client.generate, query.strip(), record)
        except Exception as e:
            self._metrics.increment("guidance_fallbacks")
            self._logger.error(
                "guidance_fallback",
                extra={"record_id": record_id, "error": str(e)},
            )
            return GuidanceResult(text=FALLBACK_MESSAGE, record_id=record_id, fallback=True)
        self._metrics.observe_latency("guidance_latency_ms", (time.monotonic() - started) * 1000)
        if not text or not text.strip():
            return GuidanceResult(text=EMPTY_RESPONSE_MESSAGE, record_id=record_id)
        return GuidanceResult(text=text, record_id=record_id)
