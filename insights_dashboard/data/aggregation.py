"""
Summary metrics derived from an arbitrary subset of campaign records.

Metrics are always recomputed from the rows they describe; nothing here keeps
running totals between calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

import pandas as pd


@dataclass(frozen=True)
class AggregateMetrics:
    total_revenue: int = 0
    total_users: int = 0
    total_conversions: int = 0
    avg_growth: float = 0.0

    def serialize(self) -> Dict[str, Any]:
        return {
            "total_revenue": self.total_revenue,
            "total_users": self.total_users,
            "total_conversions": self.total_conversions,
            "avg_growth": self.avg_growth,
        }


def aggregate(df: pd.DataFrame) -> AggregateMetrics:
    if df.empty:
        return AggregateMetrics()
    return AggregateMetrics(
        total_revenue=int(df["revenue"].sum()),
        total_users=int(df["users"].sum()),
        total_conversions=int(df["conversions"].sum()),
        avg_growth=float(df["growth"].mean()),
    )


def _truncate_label(name: str, width: int) -> str:
    return name[:width] + "..." if len(name) > width else name


def top_campaigns(df: pd.DataFrame, limit: int = 10, label_width: int = 15) -> pd.DataFrame:
    """Highest-revenue campaigns with shortened display labels for the bar chart."""
    if df.empty:
        return pd.DataFrame(columns=["id", "name", "revenue", "conversions"])
    top = df.sort_values("revenue", ascending=False, kind="stable").head(limit)
    return pd.DataFrame({
        "id": top["id"].to_numpy(),
        "name": [_truncate_label(name, label_width) for name in top["campaign_name"]],
        "revenue": top["revenue"].to_numpy(),
        "conversions": top["conversions"].to_numpy(),
    })
