"""
Plotly chart factory functions with consistent styling for the dashboard.
"""

from __future__ import annotations

from typing import Dict, List, Optional

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st


THEME_TEMPLATES = {
    "light": "plotly_white",
    "dark": "plotly_dark",
}
DEFAULT_THEME = "light"
DEFAULT_COLOR_SEQUENCE = [
    "#3B82F6",  # revenue
    "#8B5CF6",  # users
    "#10B981",  # conversions
    "#F59E0B",
    "#EF4444",
    "#6B7280",
]


def _configure_layout(
    fig: go.Figure,
    title: Optional[str] = None,
    yaxis_title: Optional[str] = None,
    yaxis_tickformat: Optional[str] = None,
    theme: str = DEFAULT_THEME,
) -> go.Figure:
    fig.update_layout(
        template=THEME_TEMPLATES.get(theme, THEME_TEMPLATES[DEFAULT_THEME]),
        colorway=DEFAULT_COLOR_SEQUENCE,
        title=title,
        hovermode="x unified",
        margin=dict(l=40, r=20, t=60, b=40),
    )
    if yaxis_title:
        fig.update_yaxes(title=yaxis_title)
    if yaxis_tickformat:
        fig.update_yaxes(tickformat=yaxis_tickformat)
    fig.update_xaxes(showgrid=False)
    fig.update_yaxes(showgrid=True, zeroline=True)
    return fig


def render_plotly(fig: go.Figure, key: Optional[str] = None) -> None:
    st.plotly_chart(fig, use_container_width=True, config={"displayModeBar": False}, key=key)


def line_chart(
    df: pd.DataFrame,
    x: str,
    y: List[str],
    title: Optional[str] = None,
    yaxis_title: Optional[str] = None,
    theme: str = DEFAULT_THEME,
) -> go.Figure:
    fig = px.line(df, x=x, y=y, markers=False)
    fig = _configure_layout(fig, title, yaxis_title, theme=theme)
    fig.update_layout(legend_title=None)
    return fig


def donut_chart(
    df: pd.DataFrame,
    names: str,
    values: str,
    colors: Optional[Dict[str, str]] = None,
    title: Optional[str] = None,
    theme: str = DEFAULT_THEME,
) -> go.Figure:
    fig = px.pie(
        df,
        names=names,
        values=values,
        hole=0.6,
        color=names if colors else None,
        color_discrete_map=colors,
    )
    fig = _configure_layout(fig, title, theme=theme)
    fig.update_traces(textinfo="percent", sort=False)
    return fig


def bar_chart(
    df: pd.DataFrame,
    x: str,
    y: List[str],
    barmode: str = "group",
    title: Optional[str] = None,
    yaxis_title: Optional[str] = None,
    theme: str = DEFAULT_THEME,
) -> go.Figure:
    fig = px.bar(df, x=x, y=y, barmode=barmode)
    fig = _configure_layout(fig, title, yaxis_title, theme=theme)
    fig.update_xaxes(tickangle=-45)
    fig.update_layout(legend_title=None)
    return fig
