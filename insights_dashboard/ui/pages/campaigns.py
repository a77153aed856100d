from __future__ import annotations

from dataclasses import replace

import streamlit as st

from insights_dashboard.data.query import QueryParams, next_sort
from insights_dashboard.data.session import DashboardView
from insights_dashboard.ui.components.formatting import format_number
from insights_dashboard.ui.components.tables import CAMPAIGN_COLUMNS, render_campaign_table
from insights_dashboard.ui.pages.context import PageContext
from insights_dashboard.ui.pages.overview import render_pdf_export
from insights_dashboard.utils.export import TABLE_REGION, export_csv

ALL_CHANNELS = "All Channels"
ALL_STATUSES = "All Status"
PARAMS_KEY = "ci_query_params"


def current_params(page_size: int) -> QueryParams:
    """Query parameters for this run, built from the table widgets' session state."""
    params = st.session_state.get(PARAMS_KEY) or QueryParams(page_size=page_size)
    channel = st.session_state.get("ci_channel_filter", ALL_CHANNELS)
    status = st.session_state.get("ci_status_filter", ALL_STATUSES)
    return replace(
        params,
        search_term=st.session_state.get("ci_search", "").strip(),
        channel_filter="" if channel == ALL_CHANNELS else channel,
        status_filter="" if status == ALL_STATUSES else status,
        page_size=page_size,
    )


def _store_params(params: QueryParams) -> None:
    st.session_state[PARAMS_KEY] = params


def _reset_page() -> None:
    params = st.session_state.get(PARAMS_KEY)
    if params is not None:
        _store_params(replace(params, page=1))


def _on_sort(params: QueryParams, field: str) -> None:
    _store_params(replace(next_sort(params, field), page=1))


def _on_page(params: QueryParams, page: int) -> None:
    _store_params(replace(params, page=page))


def _render_sort_headers(params: QueryParams) -> None:
    cols = st.columns(len(CAMPAIGN_COLUMNS))
    for col, (field, label) in zip(cols, CAMPAIGN_COLUMNS.items()):
        arrow = ""
        if params.sort_field == field:
            arrow = " ▲" if params.sort_direction == "asc" else " ▼"
        col.button(
            f"{label}{arrow}",
            key=f"ci_sort_{field}",
            on_click=_on_sort,
            args=(params, field),
            use_container_width=True,
        )


def _render_pager(view: DashboardView, params: QueryParams) -> None:
    result = view.page
    first, last, total = result.showing_range()
    info_col, pager_col = st.columns([1, 1])
    info_col.caption(
        f"Showing {format_number(first)} to {format_number(last)} of {format_number(total)} results"
    )

    numbers = result.page_numbers()
    with pager_col:
        buttons = st.columns(len(numbers) + 2)
        buttons[0].button(
            "Previous",
            key="ci_page_prev",
            disabled=result.page <= 1,
            on_click=_on_page,
            args=(params, max(1, result.page - 1)),
        )
        for slot, number in zip(buttons[1:-1], numbers):
            slot.button(
                str(number),
                key=f"ci_page_{number}",
                type="primary" if number == result.page else "secondary",
                on_click=_on_page,
                args=(params, number),
            )
        buttons[-1].button(
            "Next",
            key="ci_page_next",
            disabled=result.page >= result.total_pages,
            on_click=_on_page,
            args=(params, min(result.total_pages, result.page + 1)),
        )


def render(view: DashboardView, context: PageContext, params: QueryParams) -> None:
    st.subheader("Campaign Performance")
    # Keep the stored page aligned with the clamped page actually shown
    _store_params(replace(params, page=view.page.page))

    search_col, channel_col, status_col = st.columns([2, 1, 1])
    with search_col:
        st.text_input("Search campaigns...", key="ci_search", on_change=_reset_page)
    with channel_col:
        channel_options = [ALL_CHANNELS] + view.channels
        if st.session_state.get("ci_channel_filter") not in channel_options:
            st.session_state["ci_channel_filter"] = ALL_CHANNELS
        st.selectbox("Channel", channel_options, key="ci_channel_filter", on_change=_reset_page)
    with status_col:
        status_options = [ALL_STATUSES] + view.statuses
        if st.session_state.get("ci_status_filter") not in status_options:
            st.session_state["ci_status_filter"] = ALL_STATUSES
        st.selectbox("Status", status_options, key="ci_status_filter", on_change=_reset_page)

    _render_sort_headers(params)
    render_campaign_table(view.page.records)
    _render_pager(view, params)

    csv_result = export_csv(view.matching)
    export_cols = st.columns(2)
    with export_cols[0]:
        if csv_result.ok:
            st.download_button(
                "Download CSV",
                data=csv_result.data,
                file_name=csv_result.file_name,
                mime=csv_result.mime,
                key="ci_csv_download",
            )
        else:
            st.error(f"CSV export failed: {csv_result.error}")
    with export_cols[1]:
        render_pdf_export(TABLE_REGION, view)
