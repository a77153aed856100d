from __future__ import annotations

import streamlit as st

from insights_dashboard.data.models import chart_points_frame, channel_shares_frame
from insights_dashboard.data.session import DashboardView
from insights_dashboard.ui.components.charts import bar_chart, donut_chart, line_chart, render_plotly
from insights_dashboard.ui.components.kpi import metric_cards, render_metric_cards
from insights_dashboard.ui.pages.context import PageContext
from insights_dashboard.utils.export import (
    BAR_CHART_TITLE,
    DASHBOARD_REGION,
    DONUT_CHART_TITLE,
    LINE_CHART_TITLE,
    chart_region,
    export_region_pdf,
)


def render_pdf_export(region: str, view: DashboardView, label: str = "Export PDF") -> None:
    """Two-step PDF export: build on demand, then offer the download."""
    state_key = f"ci_pdf_{region}"
    if st.button(label, key=f"{state_key}_build"):
        st.session_state[state_key] = export_region_pdf(region, view)

    result = st.session_state.get(state_key)
    if result is None:
        return
    if result.ok:
        st.download_button(
            "Download PDF",
            data=result.data,
            file_name=result.file_name,
            mime=result.mime,
            key=f"{state_key}_download",
        )
    else:
        st.error(f"PDF export failed: {result.error}")


def render(view: DashboardView, context: PageContext) -> None:
    if context.date_range.is_inverted:
        st.info("Start date is after end date; showing an empty selection.")

    render_metric_cards(metric_cards(view.metrics), loading=context.runner.session.loading)

    col_line, col_donut = st.columns([2, 1])
    with col_line:
        points = chart_points_frame(view.chart_points)
        if points.empty:
            st.info("No trend data yet.")
        else:
            fig = line_chart(
                points,
                x="date",
                y=["revenue", "users", "conversions"],
                title=LINE_CHART_TITLE,
                theme=context.theme,
            )
            render_plotly(fig, key="ci_line_chart")
        render_pdf_export(chart_region("line", LINE_CHART_TITLE), view)

    with col_donut:
        shares = channel_shares_frame(view.channel_shares)
        if shares.empty:
            st.info("No channel data yet.")
        else:
            colors = dict(zip(shares["name"], shares["color"]))
            fig = donut_chart(shares, names="name", values="value", colors=colors, title=DONUT_CHART_TITLE, theme=context.theme)
            render_plotly(fig, key="ci_donut_chart")
        render_pdf_export(chart_region("donut", DONUT_CHART_TITLE), view)

    if view.top_campaigns.empty:
        st.info("No campaigns in the selected date range.")
    else:
        fig = bar_chart(
            view.top_campaigns,
            x="name",
            y=["revenue", "conversions"],
            title=BAR_CHART_TITLE,
            theme=context.theme,
        )
        render_plotly(fig, key="ci_bar_chart")
    render_pdf_export(chart_region("bar", BAR_CHART_TITLE), view)

    st.divider()
    render_pdf_export(DASHBOARD_REGION, view, label="Export Dashboard PDF")
