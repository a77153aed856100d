"""
Reusable helpers for rendering data tables with consistent configuration.
"""

from __future__ import annotations

from typing import Dict, List, Optional

import pandas as pd
import streamlit as st

from insights_dashboard.ui.components.formatting import (
    format_currency,
    format_number,
    format_percent,
    format_signed_percent,
)

CAMPAIGN_COLUMNS: Dict[str, str] = {
    "campaign_name": "Campaign",
    "revenue": "Revenue",
    "users": "Users",
    "conversions": "Conversions",
    "growth": "Growth %",
    "channel": "Channel",
    "status": "Status",
}

CAMPAIGN_COLUMN_CONFIG: Dict[str, Dict[str, str]] = {
    "revenue": {"type": "currency", "currency": "USD"},
    "users": {"type": "number"},
    "conversions": {"type": "number"},
    "growth": {"type": "signed_percent", "decimals": "1"},
}


def format_columns(df: pd.DataFrame, column_config: Dict[str, Dict[str, str]]) -> pd.DataFrame:
    formatted_df = df.copy()
    for column, config in column_config.items():
        if column not in formatted_df.columns:
            continue
        fmt_type = config.get("type")
        decimals = int(config.get("decimals", 0))
        if fmt_type == "currency":
            currency = config.get("currency", "USD")
            formatted_df[column] = formatted_df[column].apply(
                lambda v: format_currency(v, currency=currency, decimals=decimals, compact=False)
            )
        elif fmt_type == "percent":
            formatted_df[column] = formatted_df[column].apply(
                lambda v: format_percent(v, decimals=decimals)
            )
        elif fmt_type == "signed_percent":
            formatted_df[column] = formatted_df[column].apply(
                lambda v: format_signed_percent(v, decimals=decimals)
            )
        elif fmt_type == "number":
            formatted_df[column] = formatted_df[column].apply(
                lambda v: format_number(v, decimals=decimals)
            )
    return formatted_df


def _style_sign(val):
    try:
        if isinstance(val, str):
            val = val.replace("%", "").replace(",", "").replace("+", "")
        num = float(val)
    except (TypeError, ValueError):
        return ""
    if num > 0:
        return "color: #16a34a;"
    if num < 0:
        return "color: #dc2626;"
    return ""


def render_campaign_table(
    df: pd.DataFrame,
    height: int = 400,
    highlight_cols: Optional[List[str]] = None,
) -> None:
    if df.empty:
        st.info("No campaigns match the current filters.")
        return

    visible = [col for col in CAMPAIGN_COLUMNS if col in df.columns]
    formatted_df = format_columns(df[visible], CAMPAIGN_COLUMN_CONFIG)

    dataframe_obj = formatted_df
    highlight_cols = [col for col in (highlight_cols or ["growth"]) if col in formatted_df.columns]
    if highlight_cols:
        dataframe_obj = formatted_df.style.map(_style_sign, subset=highlight_cols)

    st.dataframe(
        dataframe_obj,
        use_container_width=True,
        height=height,
        hide_index=True,
        column_config={key: st.column_config.TextColumn(label) for key, label in CAMPAIGN_COLUMNS.items()},
    )
