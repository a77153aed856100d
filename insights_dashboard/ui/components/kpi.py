from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

import streamlit as st

from insights_dashboard.data.aggregation import AggregateMetrics
from insights_dashboard.ui.components.formatting import (
    format_currency,
    format_number,
    format_percent,
    format_signed_percent,
)

CARD_COLORS = {
    "blue": "#3B82F6",
    "purple": "#8B5CF6",
    "green": "#10B981",
    "orange": "#F59E0B",
}


@dataclass(frozen=True)
class MetricCard:
    title: str
    value: str
    change: Optional[float] = None
    icon: str = ""
    color: str = "blue"


def format_change(change: Optional[float]) -> Optional[str]:
    """Signed one-decimal trend label; st.metric colours it by the leading sign."""
    if change is None:
        return None
    return format_signed_percent(change)


def metric_cards(metrics: AggregateMetrics) -> List[MetricCard]:
    # Period-over-period changes are fixed illustrations; Avg Growth reports its own value
    return [
        MetricCard(
            "Total Revenue",
            format_currency(metrics.total_revenue, compact=False),
            change=12.5,
            icon="💲",
            color="blue",
        ),
        MetricCard("Total Users", format_number(metrics.total_users), change=8.2, icon="👥", color="purple"),
        MetricCard("Conversions", format_number(metrics.total_conversions), change=-2.4, icon="🎯", color="green"),
        MetricCard(
            "Avg Growth",
            format_percent(metrics.avg_growth),
            change=metrics.avg_growth,
            icon="📈",
            color="orange",
        ),
    ]


def _render_card(card: MetricCard) -> None:
    accent = CARD_COLORS.get(card.color, CARD_COLORS["blue"])
    st.markdown(
        f"<div style='border-left: 4px solid {accent}; padding-left: 0.5rem'>{card.icon} {card.title}</div>",
        unsafe_allow_html=True,
    )
    change = format_change(card.change)
    st.metric(
        label=card.title,
        value=card.value,
        delta=change,
        label_visibility="collapsed",
    )


def render_metric_cards(cards: Sequence[MetricCard], loading: bool = False, columns: int = 4) -> None:
    """
    Render the summary cards in a grid, with placeholders while data is loading.
    """
    cards = list(cards)
    columns = max(columns, 1)
    for idx in range(0, len(cards), columns):
        row_cards = cards[idx: idx + columns]
        cols = st.columns(len(row_cards))
        for col, card in zip(cols, row_cards):
            with col:
                if loading:
                    st.caption(card.title)
                    st.markdown("⏳ Loading…")
                else:
                    _render_card(card)
