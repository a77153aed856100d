"""
Search, categorical filter, sort and pagination over a snapshot of campaign records.
"""

from __future__ import annotations

import locale
import math
import unicodedata
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Tuple

import pandas as pd

from insights_dashboard.data.models import RECORD_COLUMNS, STRING_COLUMNS

SORT_DIRECTIONS = ("asc", "desc")
DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True)
class QueryParams:
    search_term: str = ""
    channel_filter: str = ""
    status_filter: str = ""
    sort_field: str = "revenue"
    sort_direction: str = "desc"
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def serialize(self) -> Dict[str, Any]:
        return {
            "search_term": self.search_term,
            "channel_filter": self.channel_filter,
            "status_filter": self.status_filter,
            "sort_field": self.sort_field,
            "sort_direction": self.sort_direction,
            "page": self.page,
            "page_size": self.page_size,
        }


@dataclass
class QueryResult:
    records: pd.DataFrame
    total_count: int
    total_pages: int
    page: int
    page_size: int

    def showing_range(self) -> Tuple[int, int, int]:
        """(first, last, total) row numbers of the current page, 1-based."""
        if self.total_count == 0:
            return 0, 0, 0
        first = (self.page - 1) * self.page_size + 1
        last = min(self.page * self.page_size, self.total_count)
        return first, last, self.total_count

    def page_numbers(self, limit: int = 5) -> List[int]:
        return list(range(1, min(limit, self.total_pages) + 1))


def _fold_accents(value: str) -> str:
    decomposed = unicodedata.normalize("NFKD", value)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def _collation_key(value: str) -> str:
    """Sort key that ignores case and accents, so "Éclair" files under E."""
    return locale.strxfrm(_fold_accents(value).casefold())


def _validate(params: QueryParams) -> None:
    if params.sort_field not in RECORD_COLUMNS:
        raise ValueError(f"Unknown sort field: {params.sort_field!r}")
    if params.sort_direction not in SORT_DIRECTIONS:
        raise ValueError(f"Sort direction must be one of {SORT_DIRECTIONS}, got {params.sort_direction!r}")
    if params.page_size < 1:
        raise ValueError(f"page_size must be positive, got {params.page_size}")


def search_filter(df: pd.DataFrame, search_term: str) -> pd.DataFrame:
    if not search_term:
        return df
    mask = df["campaign_name"].str.lower().str.contains(search_term.lower(), regex=False)
    return df[mask]


def categorical_filter(df: pd.DataFrame, channel: str = "", status: str = "") -> pd.DataFrame:
    if channel:
        df = df[df["channel"] == channel]
    if status:
        df = df[df["status"] == status]
    return df


def sort_records(df: pd.DataFrame, field: str, direction: str = "desc") -> pd.DataFrame:
    """Stable sort; rows with equal keys keep their prior relative order in both directions."""
    key = None
    if field in STRING_COLUMNS:
        key = lambda s: s.map(_collation_key)  # noqa: E731
    return df.sort_values(
        by=field,
        ascending=direction == "asc",
        kind="stable",
        key=key,
    )


def clamp_page(page: int, total_pages: int) -> int:
    return max(1, min(page, total_pages))


def paginate(df: pd.DataFrame, page: int, page_size: int) -> pd.DataFrame:
    start = (page - 1) * page_size
    return df.iloc[start: start + page_size]


def filter_and_sort(df: pd.DataFrame, params: QueryParams) -> pd.DataFrame:
    """Every matching record in display order, before pagination (what CSV export receives)."""
    _validate(params)
    filtered = search_filter(df, params.search_term)
    filtered = categorical_filter(filtered, params.channel_filter, params.status_filter)
    return sort_records(filtered, params.sort_field, params.sort_direction).reset_index(drop=True)


def run_query(df: pd.DataFrame, params: QueryParams) -> QueryResult:
    """
    Apply search → channel/status filter → sort → paginate to a record snapshot.

    The input frame is never modified; the returned page is an independent copy
    with a fresh 0-based index.
    """
    ordered = filter_and_sort(df, params)

    total_count = len(ordered)
    total_pages = math.ceil(total_count / params.page_size)
    page = clamp_page(params.page, total_pages)
    page_df = paginate(ordered, page, params.page_size).reset_index(drop=True)

    return QueryResult(
        records=page_df,
        total_count=total_count,
        total_pages=total_pages,
        page=page,
        page_size=params.page_size,
    )


def filter_options(df: pd.DataFrame) -> Tuple[List[str], List[str]]:
    """Distinct channels and statuses in first-seen order, for the filter selectors."""
    if df.empty:
        return [], []
    return df["channel"].drop_duplicates().tolist(), df["status"].drop_duplicates().tolist()


def next_sort(params: QueryParams, field: str) -> QueryParams:
    """Clicking the active column flips direction; a new column starts descending."""
    if params.sort_field == field:
        direction = "asc" if params.sort_direction == "desc" else "desc"
        return replace(params, sort_direction=direction)
    return replace(params, sort_field=field, sort_direction="desc")
