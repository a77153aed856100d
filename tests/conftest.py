"""
Shared fixtures for the campaign engine tests.

- `rng`: seeded numpy Generator so generated data is reproducible
- `sample_records` / `sample_frame`: six hand-written campaigns with revenue
  ties, mixed-case names and dates spread across March 2024
- `generated_frame`: 100 synthetic campaigns anchored at TODAY
"""

import datetime as dt
from typing import List

import numpy as np
import pandas as pd
import pytest

from insights_dashboard.data.generator import generate_campaigns
from insights_dashboard.data.models import CampaignRecord, records_to_frame

TODAY = dt.date(2024, 3, 31)


def make_record(
    id: int,
    campaign_name: str,
    revenue: int = 1000,
    users: int = 100,
    conversions: int = 10,
    growth: float = 1.0,
    date: dt.date = dt.date(2024, 3, 10),
    channel: str = "Google Ads",
    status: str = "active",
    ctr: float = 2.0,
    cpc: float = 1.0,
) -> CampaignRecord:
    return CampaignRecord(
        id=id,
        campaign_name=campaign_name,
        revenue=revenue,
        users=users,
        conversions=conversions,
        growth=growth,
        date=date,
        channel=channel,
        status=status,
        ctr=ctr,
        cpc=cpc,
    )


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def sample_records() -> List[CampaignRecord]:
    return [
        make_record(1, "Summer Sale 1", revenue=5000, growth=10.0, date=dt.date(2024, 3, 5)),
        make_record(2, "Black Friday 2", revenue=7000, growth=-5.0, date=dt.date(2024, 3, 10),
                    channel="Facebook", status="paused"),
        make_record(3, "summer splash 3", revenue=5000, growth=2.5, date=dt.date(2024, 3, 12),
                    status="completed"),
        make_record(4, "Lead Gen 4", revenue=9000, growth=0.0, date=dt.date(2024, 2, 28),
                    channel="LinkedIn"),
        make_record(5, "Summer Sale 5", revenue=5000, growth=7.5, date=dt.date(2024, 3, 20)),
        make_record(6, "brand awareness 6", revenue=3000, growth=-1.0, date=dt.date(2024, 3, 15),
                    channel="Facebook"),
    ]


@pytest.fixture
def sample_frame(sample_records) -> pd.DataFrame:
    return records_to_frame(sample_records)


@pytest.fixture
def generated_frame(rng) -> pd.DataFrame:
    return generate_campaigns(100, rng=rng, today=TODAY)
