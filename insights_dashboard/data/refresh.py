"""
Explicit refresh: regenerate the working set after a simulated fetch latency.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Optional

import numpy as np

from insights_dashboard.config import Settings
from insights_dashboard.data.generator import (
    generate_campaigns,
    generate_channel_shares,
    generate_chart_points,
)
from insights_dashboard.data.store import RecordStore

logger = logging.getLogger(__name__)


class RefreshState(str, Enum):
    IDLE = "idle"
    REFRESHING = "refreshing"


class RefreshController:
    """Idle/Refreshing state machine around one store.

    While refreshing, the store keeps serving its previous contents. The new
    records, chart points and channel shares are swapped in by a single
    `replace_all` call once generation completes.
    """

    def __init__(
        self,
        store: RecordStore,
        settings: Settings,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self._store = store
        self._settings = settings
        self._rng = rng if rng is not None else np.random.default_rng()
        self._state = RefreshState.IDLE
        self._completed = 0

    @property
    def state(self) -> RefreshState:
        return self._state

    @property
    def refreshing(self) -> bool:
        return self._state is RefreshState.REFRESHING

    @property
    def completed(self) -> int:
        return self._completed

    async def refresh(self) -> bool:
        """Run one refresh. Returns False when a refresh was already in flight."""
        if self.refreshing:
            logger.debug("Refresh requested while refreshing; ignored")
            return False

        self._state = RefreshState.REFRESHING
        logger.info("Refreshing campaign data (%d records)", self._settings.record_count)
        try:
            await asyncio.sleep(self._settings.refresh_latency)
            records = generate_campaigns(self._settings.record_count, rng=self._rng)
            chart_points = generate_chart_points(self._settings.chart_days, rng=self._rng)
            self._store.replace_all(
                records,
                chart_points=chart_points,
                channel_shares=generate_channel_shares(),
            )
        except asyncio.CancelledError:
            logger.info("Refresh cancelled; keeping previous data")
            raise
        except Exception:
            logger.exception("Refresh failed; keeping previous data")
            raise
        finally:
            self._state = RefreshState.IDLE

        self._completed += 1
        logger.info("Refresh complete (store version %d)", self._store.version)
        return True
