"""
One dashboard session: the owned store, its live-update scheduler and refresh
controller, and assembly of the plain-data view consumed by the UI.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np
import pandas as pd

from insights_dashboard.config import Settings
from insights_dashboard.data.aggregation import AggregateMetrics, aggregate, top_campaigns
from insights_dashboard.data.filters import DateRange, select_date_range
from insights_dashboard.data.models import ChannelShare, ChartPoint
from insights_dashboard.data.query import (
    QueryParams,
    QueryResult,
    filter_and_sort,
    filter_options,
    run_query,
)
from insights_dashboard.data.refresh import RefreshController
from insights_dashboard.data.scheduler import LiveUpdateScheduler
from insights_dashboard.data.store import RecordStore

logger = logging.getLogger(__name__)


@dataclass
class DashboardView:
    working_set: pd.DataFrame
    matching: pd.DataFrame
    page: QueryResult
    metrics: AggregateMetrics
    top_campaigns: pd.DataFrame
    channels: List[str]
    statuses: List[str]
    chart_points: List[ChartPoint]
    channel_shares: List[ChannelShare]
    date_range: DateRange
    store_version: int


def build_view(
    snapshot: pd.DataFrame,
    params: QueryParams,
    date_range: Optional[DateRange] = None,
    chart_points: Optional[List[ChartPoint]] = None,
    channel_shares: Optional[List[ChannelShare]] = None,
    store_version: int = 0,
) -> DashboardView:
    """Derive every view output from one snapshot so they agree with each other."""
    date_range = date_range or DateRange()
    working = select_date_range(snapshot, date_range.start, date_range.end)
    channels, statuses = filter_options(working)
    return DashboardView(
        working_set=working,
        matching=filter_and_sort(working, params),
        page=run_query(working, params),
        metrics=aggregate(working),
        top_campaigns=top_campaigns(working),
        channels=channels,
        statuses=statuses,
        chart_points=list(chart_points or []),
        channel_shares=list(channel_shares or []),
        date_range=date_range,
        store_version=store_version,
    )


class DashboardSession:
    def __init__(self, settings: Settings, rng: Optional[np.random.Generator] = None) -> None:
        self.settings = settings
        rng = rng if rng is not None else np.random.default_rng(settings.seed)
        self.store = RecordStore(rng=rng)
        self.refresher = RefreshController(self.store, settings, rng=rng)
        self.scheduler = LiveUpdateScheduler(
            self.store,
            interval=settings.live_update_interval,
            rng=rng,
            clamp_negative=settings.clamp_negative,
            skip_when=lambda: self.refresher.refreshing,
        )
        self._started = False
        self._closed = False

    @property
    def loading(self) -> bool:
        return self.refresher.refreshing or self.refresher.completed == 0

    @property
    def closed(self) -> bool:
        return self._closed

    async def start(self) -> None:
        if self._started or self._closed:
            return
        self._started = True
        await self.refresher.refresh()
        if not self._closed:
            self.scheduler.start()

    async def refresh(self) -> bool:
        if self._closed:
            return False
        return await self.refresher.refresh()

    def close_nowait(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.scheduler.stop()
        logger.info("Dashboard session closed")

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self.scheduler.stop_and_wait()
        logger.info("Dashboard session closed")

    def view(
        self,
        params: Optional[QueryParams] = None,
        date_range: Optional[DateRange] = None,
    ) -> DashboardView:
        params = params or QueryParams(page_size=self.settings.page_size)
        snapshot, chart_points, channel_shares, version = self.store.read()
        return build_view(
            snapshot,
            params,
            date_range=date_range,
            chart_points=chart_points,
            channel_shares=channel_shares,
            store_version=version,
        )
