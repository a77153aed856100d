"""
Record types shared by the data engine and the frame schema used to hold them.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Iterable, List

import pandas as pd


class CampaignStatus(str, Enum):
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"


# Column order of the record frame
RECORD_COLUMNS: List[str] = [
    "id",
    "campaign_name",
    "revenue",
    "users",
    "conversions",
    "growth",
    "date",
    "channel",
    "status",
    "ctr",
    "cpc",
]

IDENTITY_COLUMNS: List[str] = ["id", "campaign_name", "date", "channel", "status"]
PERFORMANCE_COLUMNS: List[str] = ["revenue", "users", "conversions", "growth", "ctr", "cpc"]
INTEGER_COLUMNS: List[str] = ["id", "revenue", "users", "conversions"]
FLOAT_COLUMNS: List[str] = ["growth", "ctr", "cpc"]
STRING_COLUMNS: List[str] = ["campaign_name", "channel", "status"]


@dataclass(frozen=True)
class CampaignRecord:
    id: int
    campaign_name: str
    revenue: int
    users: int
    conversions: int
    growth: float
    date: dt.date
    channel: str
    status: str
    ctr: float
    cpc: float


@dataclass(frozen=True)
class ChartPoint:
    date: str
    revenue: int
    users: int
    conversions: int


@dataclass(frozen=True)
class ChannelShare:
    name: str
    value: float
    color: str


def empty_frame() -> pd.DataFrame:
    return normalize_frame(pd.DataFrame(columns=RECORD_COLUMNS))


def normalize_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy of `df` restricted to the record columns with canonical dtypes.

    Dates are coerced to `datetime.date` objects so every downstream comparison
    works on calendar dates rather than on ISO strings.
    """
    missing = [col for col in RECORD_COLUMNS if col not in df.columns]
    if missing:
        raise ValueError(f"Campaign records missing columns: {missing}")

    frame = df[RECORD_COLUMNS].copy()
    for col in INTEGER_COLUMNS:
        frame[col] = pd.to_numeric(frame[col]).astype("int64")
    for col in FLOAT_COLUMNS:
        frame[col] = pd.to_numeric(frame[col]).astype("float64")
    for col in STRING_COLUMNS:
        frame[col] = frame[col].astype(str)
    frame["date"] = pd.to_datetime(frame["date"]).dt.date if len(frame) else frame["date"].astype(object)
    return frame.reset_index(drop=True)


def records_to_frame(records: Iterable[CampaignRecord]) -> pd.DataFrame:
    rows = [asdict(record) for record in records]
    if not rows:
        return empty_frame()
    return normalize_frame(pd.DataFrame(rows))


def frame_to_records(df: pd.DataFrame) -> List[CampaignRecord]:
    records: List[CampaignRecord] = []
    for row in df[RECORD_COLUMNS].itertuples(index=False):
        records.append(
            CampaignRecord(
                id=int(row.id),
                campaign_name=str(row.campaign_name),
                revenue=int(row.revenue),
                users=int(row.users),
                conversions=int(row.conversions),
                growth=float(row.growth),
                date=row.date,
                channel=str(row.channel),
                status=str(row.status),
                ctr=float(row.ctr),
                cpc=float(row.cpc),
            )
        )
    return records


def chart_points_frame(points: Iterable[ChartPoint]) -> pd.DataFrame:
    return pd.DataFrame([asdict(p) for p in points], columns=["date", "revenue", "users", "conversions"])


def channel_shares_frame(shares: Iterable[ChannelShare]) -> pd.DataFrame:
    return pd.DataFrame([asdict(s) for s in shares], columns=["name", "value", "color"])
