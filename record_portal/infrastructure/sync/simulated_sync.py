"""Simulated record sync: a fixed latency and a random outcome. No network I/O."""

import logging
import random
from typing import Optional

logger = logging.getLogger(__name__)


class SimulatedSync:
    """
    Stand-in for the remote sync call that follows an edit. Callers wait
    delay_seconds (as a cancellable delayed action) before calling attempt(),
    which succeeds with probability success_rate.
    """

    def __init__(
        self,
        delay_seconds: float = 1.5,
        success_rate: float = 0.95,
        rng: Optional[random.Random] = None,
    ) -> None:
        if not 0.0 <= success_rate <= 1.0:
            raise ValueError(f"success_rate must be within [0, 1], got {success_rate}")
        self._delay = delay_seconds
        self._success_rate = success_rate
        self._rng = rng or random.Random()

    @property
    def delay_seconds(self) -> float:
        return self._delay

    def attempt(self) -> bool:
        """Draw the outcome of one sync. True means the remote accepted the change."""
        accepted = self._rng.random() < self._success_rate
        logger.debug("sync_attempt", extra={"accepted": accepted})
        return accepted
