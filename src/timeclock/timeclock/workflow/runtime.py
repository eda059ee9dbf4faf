from __future__ import annotations

import asyncio
import logging
import threading
from typing import Any, Awaitable, Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class KioskRuntime:
    """Owns the asyncio loop the kiosk workflow and session lock live on.

    Flask handlers run on worker threads; they hand work to this loop and
    block on the result, so workflow state is only ever touched by one thread.
    """

    def __init__(self, *, name: str = "kiosk-loop"):
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)
        self._started = threading.Event()

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    @property
    def running(self) -> bool:
        return self._thread.is_alive()

    def start(self) -> "KioskRuntime":
        if not self._thread.is_alive():
            self._thread.start()
            self._started.wait()
        return self

    def _run(self) -> None:
        asyncio.set_event_loop(self._loop)
        self._loop.call_soon(self._started.set)
        try:
            self._loop.run_forever()
        finally:
            self._loop.close()

    def run(self, awaitable: Awaitable[T], *, timeout: Optional[float] = None) -> T:
        future = asyncio.run_coroutine_threadsafe(self._await(awaitable), self._loop)
        return future.result(timeout)

    def call(self, fn: Callable[..., T], *args: Any, timeout: Optional[float] = None, **kwargs: Any) -> T:
        """Run a plain function on the loop thread and return its result."""

        async def _invoke() -> T:
            return fn(*args, **kwargs)

        return self.run(_invoke(), timeout=timeout)

    @staticmethod
    async def _await(awaitable: Awaitable[T]) -> T:
        return await awaitable

    def stop(self, *, cleanup: Optional[Callable[[], Awaitable[Any]]] = None, timeout: float = 5.0) -> None:
        if not self._thread.is_alive():
            return
        if cleanup is not None:
            try:
                self.run(cleanup(), timeout=timeout)
            except Exception:
                logger.exception("Kiosk cleanup failed")
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join(timeout)
