from __future__ import annotations

import asyncio
import logging
from typing import Callable, Iterable, Optional

from ..core.constants import ACTIVITY_EVENTS, DEFAULT_INACTIVITY_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


class InactivityLock:
    """Process-wide idle lock.

    One timer, re-armed by every recognised activity event. `start()` mounts
    it on an event loop, `stop()` tears it down. Once expired the session stays
    locked (activity is ignored) until `unlock()`.
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_INACTIVITY_TIMEOUT_SECONDS,
        events: Iterable[str] = ACTIVITY_EVENTS,
    ):
        self._timeout = float(timeout)
        self._events = frozenset(events)
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._timer: Optional[asyncio.TimerHandle] = None
        self._locked = False
        self._listeners: list[Callable[[], None]] = []

    @property
    def mounted(self) -> bool:
        return self._loop is not None

    @property
    def locked(self) -> bool:
        return self._locked

    @property
    def activity_events(self) -> frozenset[str]:
        return self._events

    @property
    def timeout(self) -> float:
        return self._timeout

    def start(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        if self._loop is not None:
            return
        self._loop = loop or asyncio.get_running_loop()
        self._arm()

    def stop(self) -> None:
        self._cancel_timer()
        self._loop = None

    def add_listener(self, callback: Callable[[], None]) -> None:
        self._listeners.append(callback)

    def notify(self, event: str) -> bool:
        """Record user activity; returns True when the timer was reset."""
        if event not in self._events or self._loop is None or self._locked:
            return False
        self._arm()
        return True

    def unlock(self) -> None:
        self._locked = False
        if self._loop is not None:
            self._arm()

    def _arm(self) -> None:
        self._cancel_timer()
        self._timer = self._loop.call_later(self._timeout, self._expire)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _expire(self) -> None:
        self._timer = None
        self._locked = True
        logger.info("Session locked after %.0f seconds of inactivity", self._timeout)
        for callback in list(self._listeners):
            callback()
