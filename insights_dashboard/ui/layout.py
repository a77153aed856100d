"""
Layout helpers for the Streamlit application (page setup, sidebar controls, header).
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Optional, Tuple

import streamlit as st

from insights_dashboard.data.filters import DateRange
from insights_dashboard.ui.components.charts import DEFAULT_THEME

DATE_PRESETS = ["All", "7D", "30D", "90D", "Custom"]
PRESET_DAYS = {
    "7D": 7,
    "30D": 30,
    "90D": 90,
}
LOADING_POLL_SECONDS = 1.0


@dataclass
class DashboardControls:
    date_range: DateRange
    theme: str
    refresh_requested: bool


def setup_page() -> None:
    """Set Streamlit page configuration and top-level styling."""
    st.set_page_config(
        page_title="Campaign Insights",
        layout="wide",
        page_icon=":bar_chart:",
    )


def _derive_date_range(today: dt.date) -> Tuple[Optional[dt.date], Optional[dt.date]]:
    preset = st.sidebar.selectbox(
        "Date Preset",
        DATE_PRESETS,
        index=0,
        key="ci_date_preset",
        help="Choose a preset or select Custom to pick start and end dates.",
    )

    if preset == "Custom":
        # Either bound may be left empty
        col_start, col_end = st.sidebar.columns(2)
        with col_start:
            start = st.date_input("Start Date", value=None, key="ci_date_start")
        with col_end:
            end = st.date_input("End Date", value=None, key="ci_date_end")
        if start is not None and end is not None and start > end:
            st.sidebar.warning("Start date is after end date; no campaigns will match.")
        return start, end

    days = PRESET_DAYS.get(preset)
    if days is None:
        return None, None
    return today - dt.timedelta(days=days - 1), today


def sidebar_controls(today: Optional[dt.date] = None, refreshing: bool = False) -> DashboardControls:
    """
    Render the sidebar controls and return the selected values.
    """
    st.sidebar.header("Dashboard")

    refresh_requested = st.sidebar.button(
        "🔄 Refreshing…" if refreshing else "🔄 Refresh Data",
        key="ci_refresh",
        disabled=refreshing,
    )

    start, end = _derive_date_range(today or dt.date.today())

    dark = st.sidebar.toggle("Dark charts", value=False, key="ci_dark_theme")
    theme = "dark" if dark else DEFAULT_THEME

    return DashboardControls(
        date_range=DateRange(start, end),
        theme=theme,
        refresh_requested=refresh_requested,
    )


def render_header(loading: bool, store_version: int) -> None:
    st.title("Campaign Insights")
    if loading:
        st.caption("Loading campaign data…")
    else:
        st.caption(f"Data version {store_version} · live updates enabled")


def live_update_cadence(loading: bool, interval: float) -> float:
    """Seconds between live re-renders: poll quickly until data has loaded."""
    return min(LOADING_POLL_SECONDS, interval) if loading else interval
