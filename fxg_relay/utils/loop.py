"""Background asyncio loop shared by the Discord client and Flask views."""

from __future__ import annotations

import asyncio
import threading
from concurrent.futures import Future
from typing import Any, Awaitable, Optional


class EventLoopThread:
    """Run one asyncio event loop forever in a daemon thread.

    Flask views run on worker threads and hand coroutines to this loop with
    :meth:`submit`, so every coroutine that touches shared state executes on
    the same thread.
    """

    def __init__(self, name: str = "discord-loop") -> None:
        self.loop = asyncio.new_event_loop()
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)

    def _run(self) -> None:
        asyncio.set_event_loop(self.loop)
        self.loop.run_forever()

    def start(self) -> "EventLoopThread":
        self._thread.start()
        return self

    def submit(self, coro: Awaitable[Any]) -> Future:
        """Schedule ``coro`` on the loop and return a concurrent future."""
        return asyncio.run_coroutine_threadsafe(coro, self.loop)

    def run(self, coro: Awaitable[Any], timeout: Optional[float] = None) -> Any:
        """Run ``coro`` on the loop and block until it finishes."""
        return self.submit(coro).result(timeout)

    def stop(self) -> None:
        if self.loop.is_running():
            self.loop.call_soon_threadsafe(self.loop.stop)
        if self._thread.is_alive():
            self._thread.join(timeout=5)
        if not self.loop.is_running():
            self.loop.close()
