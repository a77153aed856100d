"""
Date-range selection applied to the campaign records before querying.
"""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

import pandas as pd

logger = logging.getLogger(__name__)

DateBound = Union[None, str, dt.date, dt.datetime, pd.Timestamp]


def parse_date_bound(value: DateBound) -> Optional[dt.date]:
    """Return a calendar date for a bound, or None when the bound is unset.

    Handles pd.Timestamp, datetime.datetime, datetime.date, ISO strings and None.
    Unparseable values are logged and treated as unset.
    """
    if value is None or value is pd.NaT:
        return None
    if isinstance(value, pd.Timestamp):
        return value.date()
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    text = str(value).strip()
    if not text:
        return None
    parsed = pd.to_datetime(text, errors="coerce")
    if pd.isna(parsed):
        logger.warning("Ignoring unparseable date bound %r", value)
        return None
    return parsed.date()


@dataclass(frozen=True)
class DateRange:
    start: Optional[dt.date] = None
    end: Optional[dt.date] = None

    @classmethod
    def from_bounds(cls, start: DateBound = None, end: DateBound = None) -> "DateRange":
        return cls(parse_date_bound(start), parse_date_bound(end))

    @property
    def is_inverted(self) -> bool:
        return self.start is not None and self.end is not None and self.start > self.end

    def serialize(self) -> Dict[str, Any]:
        return {
            "start": self.start.isoformat() if self.start else None,
            "end": self.end.isoformat() if self.end else None,
        }


def select_date_range(
    df: pd.DataFrame,
    start_date: DateBound = None,
    end_date: DateBound = None,
) -> pd.DataFrame:
    """Keep records whose date lies within the inclusive [start, end] bounds.

    Either bound may be omitted. An inverted range selects nothing.
    """
    date_range = DateRange.from_bounds(start_date, end_date)
    if df.empty:
        return df.copy()
    if date_range.is_inverted:
        logger.debug("Inverted date range %s selects no records", date_range.serialize())
        return df.iloc[0:0].copy()

    mask = pd.Series(True, index=df.index)
    if date_range.start is not None:
        mask &= df["date"].map(lambda d: d >= date_range.start)
    if date_range.end is not None:
        mask &= df["date"].map(lambda d: d <= date_range.end)
    return df[mask].copy()
