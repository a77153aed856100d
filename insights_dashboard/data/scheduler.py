"""
Recurring perturbation of campaign metrics that simulates a live data feed.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Dict, Mapping, Optional

import numpy as np

from insights_dashboard.data.store import RecordStore

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 30.0
DEFAULT_MAGNITUDES: Dict[str, int] = {
    "revenue": 1000,
    "users": 100,
    "conversions": 10,
}


def perturbation_deltas(
    size: int,
    magnitudes: Mapping[str, int],
    rng: np.random.Generator,
) -> Dict[str, np.ndarray]:
    """Per-record deltas floor((U - 0.5) * magnitude), with U uniform in [0, 1)."""
    return {
        column: np.floor((rng.random(size) - 0.5) * magnitude).astype("int64")
        for column, magnitude in magnitudes.items()
    }


class LiveUpdateScheduler:
    """Owns the recurring tick task for one dashboard session.

    `start()` must be called from a running event loop. `stop()` may be called
    any number of times; only the first call cancels the task.
    """

    def __init__(
        self,
        store: RecordStore,
        interval: float = DEFAULT_INTERVAL,
        magnitudes: Optional[Mapping[str, int]] = None,
        rng: Optional[np.random.Generator] = None,
        clamp_negative: bool = True,
        skip_when: Optional[Callable[[], bool]] = None,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._store = store
        self._interval = interval
        self._magnitudes = dict(magnitudes if magnitudes is not None else DEFAULT_MAGNITUDES)
        self._rng = rng if rng is not None else np.random.default_rng()
        self._clamp_negative = clamp_negative
        self._skip_when = skip_when
        self._task: Optional[asyncio.Task] = None
        self._stopped = False
        self._tick_count = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def magnitudes(self) -> Dict[str, int]:
        return dict(self._magnitudes)

    def tick(self) -> bool:
        """Apply one perturbation to every record. Returns False when the tick was skipped."""
        if self._skip_when is not None and self._skip_when():
            logger.debug("Live update skipped: refresh in progress")
            return False
        size = self._store.perturb(
            lambda n: perturbation_deltas(n, self._magnitudes, self._rng),
            floor=0 if self._clamp_negative else None,
        )
        self._tick_count += 1
        logger.debug("Live update tick %d applied to %d records", self._tick_count, size)
        return True

    def start(self) -> None:
        if self._stopped:
            raise RuntimeError("Scheduler has been stopped and cannot be restarted")
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())
        logger.info("Live updates started (every %.1fs)", self._interval)

    def stop(self) -> None:
        if self._stopped:
            return
        self._stopped = True
        if self._task is not None and not self._task.done():
            self._task.cancel()
        logger.info("Live updates stopped after %d ticks", self._tick_count)

    async def stop_and_wait(self) -> None:
        self.stop()
        task = self._task
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                self.tick()
            except Exception:
                logger.exception("Live update tick failed; retrying next interval")
