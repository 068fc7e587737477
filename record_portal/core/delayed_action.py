"""Cancellable delayed action on the running asyncio loop. Replaces fire-and-forget timers."""

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, Generic, Optional, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


class ActionState(str, Enum):
    PENDING = "pending"  # waiting out the delay; cancel() still prevents the callback
    RUNNING = "running"
    DONE = "done"
    FAILED = "failed"
    CANCELLED = "cancelled"


class ActionCancelledError(Exception):
    """Raised from wait() when the action was cancelled before its callback ran."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DelayedAction(Generic[T]):
    """
    Run an async callback after `delay` seconds unless cancelled first.
    Once cancel() returns True the callback is guaranteed never to start.
    Must be started from inside a running event loop.
    """

    def __init__(
        self,
        delay: float,
        callback: Callable[[], Awaitable[T]],
        *,
        name: str = "delayed_action",
    ) -> None:
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")
        self._delay = delay
        self._callback = callback
        self._name = name
        self._state = ActionState.PENDING
        self._task: Optional[asyncio.Task] = None

    @property
    def state(self) -> ActionState:
        return self._state

    @property
    def name(self) -> str:
        return self._name

    def start(self) -> "DelayedAction[T]":
        if self._task is not None:
            raise RuntimeError(f"{self._name} already started")
        self._task = asyncio.get_running_loop().create_task(self._run(), name=self._name)
        return self

    async def _run(self) -> T:
        await asyncio.sleep(self._delay)
        self._state = ActionState.RUNNING
        try:
            result = await self._callback()
        except Exception:
            self._state = ActionState.FAILED
            raise
        self._state = ActionState.DONE
        return result

    def cancel(self) -> bool:
        """Cancel if the callback has not started. Returns True if it will never run."""
        if self._state != ActionState.PENDING:
            return self._state == ActionState.CANCELLED
        self._state = ActionState.CANCELLED
        if self._task is not None:
            self._task.cancel()
        logger.info("delayed_action_cancelled", extra={"action": self._name})
        return True

    async def wait(self) -> T:
        """Await the callback's result. Raises ActionCancelledError if cancelled."""
        if self._task is None:
            raise RuntimeError(f"{self._name} was never started")
        try:
            return await self._task
        except asyncio.CancelledError:
            if self._state == ActionState.CANCELLED:
                raise ActionCancelledError(f"{self._name} was cancelled") from None
            raise
