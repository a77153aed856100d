"""
Hosts a DashboardSession on a private event loop so Streamlit script threads
can drive it synchronously.

The session's refresh and live-update callbacks all run on this one loop, so
they never interleave with each other; the store lock covers reads coming from
Streamlit threads.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from concurrent.futures import Future

from insights_dashboard.config import Settings
from insights_dashboard.data.session import DashboardSession

logger = logging.getLogger(__name__)


class SessionRunner:
    def __init__(self, settings: Settings) -> None:
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(
            target=self._loop.run_forever,
            name="dashboard-session-loop",
            daemon=True,
        )
        self._thread.start()
        self._close_lock = threading.Lock()
        self._closed = False
        self.session = DashboardSession(settings)

    def _call(self, coro) -> Future:
        return asyncio.run_coroutine_threadsafe(coro, self._loop)

    @property
    def closed(self) -> bool:
        return self._closed

    def start(self) -> Future:
        """Kick off the initial refresh and live updates without blocking the caller."""
        return self._call(self.session.start())

    def request_refresh(self) -> Future:
        return self._call(self.session.refresh())

    def close(self, timeout: float = 5.0) -> None:
        with self._close_lock:
            if self._closed:
                return
            self._closed = True
        try:
            self._call(self.session.close()).result(timeout=timeout)
        finally:
            self._loop.call_soon_threadsafe(self._loop.stop)
            self._thread.join(timeout=timeout)
            if not self._thread.is_alive():
                self._loop.close()
            logger.info("Session loop stopped")
