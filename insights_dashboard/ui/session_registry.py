"""
Process-wide registry of per-browser-session runners.

Streamlit has no session-end callback, so runners whose browser session is no
longer active are reaped: on every script run and from a background thread.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, List, Optional

from insights_dashboard.config import Settings
from insights_dashboard.ui.session_runner import SessionRunner

logger = logging.getLogger(__name__)

RunnerFactory = Callable[[Settings], SessionRunner]
SessionCheck = Callable[[str], bool]


class RunnerRegistry:
    def __init__(self, factory: RunnerFactory = SessionRunner) -> None:
        self._factory = factory
        self._lock = threading.Lock()
        self._runners: Dict[str, SessionRunner] = {}
        self._reaper: Optional[threading.Thread] = None
        self._stop_reaper = threading.Event()

    def __len__(self) -> int:
        with self._lock:
            return len(self._runners)

    def get(self, session_id: str, settings: Settings) -> SessionRunner:
        """Runner for `session_id`, created and started on first use."""
        with self._lock:
            runner = self._runners.get(session_id)
            if runner is not None and not runner.closed:
                return runner
            runner = self._factory(settings)
            self._runners[session_id] = runner
        runner.start()
        logger.info("Started dashboard session %s", session_id)
        return runner

    def reap(self, is_active: SessionCheck) -> List[str]:
        """Close and forget runners whose session is no longer active."""
        with self._lock:
            ended = [sid for sid in self._runners if not is_active(sid)]
            runners = [self._runners.pop(sid) for sid in ended]
        for session_id, runner in zip(ended, runners):
            runner.close()
            logger.info("Closed runner for ended session %s", session_id)
        return ended

    def start_reaper(self, is_active: SessionCheck, interval: float) -> None:
        if self._reaper is not None:
            return

        def loop() -> None:
            while not self._stop_reaper.wait(interval):
                try:
                    self.reap(is_active)
                except Exception:
                    logger.exception("Session reaper pass failed")

        self._reaper = threading.Thread(target=loop, name="dashboard-session-reaper", daemon=True)
        self._reaper.start()

    def close_all(self) -> None:
        self._stop_reaper.set()
        with self._lock:
            runners = list(self._runners.values())
            self._runners.clear()
        for runner in runners:
            runner.close()
