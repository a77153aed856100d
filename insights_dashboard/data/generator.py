"""
Synthetic campaign data used in place of a real ad-platform feed.
"""

from __future__ import annotations

import datetime as dt
from typing import List, Optional

import numpy as np
import pandas as pd

from insights_dashboard.data.models import (
    CampaignStatus,
    ChannelShare,
    ChartPoint,
    normalize_frame,
)

CHANNELS: List[str] = ["Google Ads", "Facebook", "Instagram", "LinkedIn", "Twitter", "TikTok", "YouTube"]
CAMPAIGN_TYPES: List[str] = [
    "Summer Sale",
    "Black Friday",
    "Holiday Special",
    "Brand Awareness",
    "Product Launch",
    "Retargeting",
    "Lead Gen",
]
STATUSES: List[str] = [status.value for status in CampaignStatus]

CHANNEL_SHARES: List[ChannelShare] = [
    ChannelShare("Google Ads", 35, "#3B82F6"),
    ChannelShare("Facebook", 25, "#8B5CF6"),
    ChannelShare("Instagram", 20, "#F59E0B"),
    ChannelShare("LinkedIn", 12, "#10B981"),
    ChannelShare("Twitter", 5, "#EF4444"),
    ChannelShare("Others", 3, "#6B7280"),
]

LOOKBACK_DAYS = 90


def _today(today: Optional[dt.date]) -> dt.date:
    return today if today is not None else dt.date.today()


def generate_campaigns(
    count: int = 50,
    rng: Optional[np.random.Generator] = None,
    today: Optional[dt.date] = None,
) -> pd.DataFrame:
    """Generate `count` campaign rows with ids 1..count.

    Names combine a campaign type with the id so they stay unique; dates fall
    within the last 90 days.
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    rng = rng if rng is not None else np.random.default_rng()
    anchor = _today(today)

    ids = np.arange(1, count + 1)
    types = rng.choice(CAMPAIGN_TYPES, count)
    day_offsets = rng.integers(0, LOOKBACK_DAYS, count)

    df = pd.DataFrame({
        "id": ids,
        "campaign_name": [f"{kind} {i}" for kind, i in zip(types, ids)],
        "revenue": rng.integers(0, 50_000, count) + 5_000,
        "users": rng.integers(0, 10_000, count) + 1_000,
        "conversions": rng.integers(0, 500, count) + 50,
        # Growth can be negative
        "growth": rng.random(count) * 40 - 10,
        "date": [anchor - dt.timedelta(days=int(offset)) for offset in day_offsets],
        "channel": rng.choice(CHANNELS, count),
        "status": rng.choice(STATUSES, count),
        "ctr": rng.random(count) * 5 + 1,
        "cpc": rng.random(count) * 3 + 0.5,
    })
    return normalize_frame(df)


def generate_chart_points(
    days: int = 30,
    rng: Optional[np.random.Generator] = None,
    today: Optional[dt.date] = None,
) -> List[ChartPoint]:
    """Daily revenue/users/conversions series, oldest first, with a weekly wave."""
    rng = rng if rng is not None else np.random.default_rng()
    anchor = _today(today)

    points: List[ChartPoint] = []
    for i in range(days):
        day = anchor - dt.timedelta(days=days - 1 - i)
        base_revenue = 15_000 + np.sin(i / 7) * 3_000
        points.append(
            ChartPoint(
                date=day.strftime("%b %d"),
                revenue=int(np.floor(base_revenue + rng.random() * 5_000 - 2_500)),
                users=int(np.floor(base_revenue / 3 + rng.random() * 2_000 - 1_000)),
                conversions=int(np.floor(base_revenue / 50 + rng.random() * 100 - 50)),
            )
        )
    return points


def generate_channel_shares() -> List[ChannelShare]:
    return list(CHANNEL_SHARES)
