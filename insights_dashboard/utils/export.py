"""
Export adapter: CSV text for a record subset and PDF documents for named view regions.

Exports never modify the session; a failed export is logged and reported back
as an unsuccessful `ExportResult` so it can simply be retried.
"""

from __future__ import annotations

import csv
import html
import logging
import re
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Callable, Dict, List, Optional

import pandas as pd

from insights_dashboard.data.models import chart_points_frame, channel_shares_frame
from insights_dashboard.data.session import DashboardView
from insights_dashboard.ui.components.formatting import format_currency, format_number, format_percent

logger = logging.getLogger(__name__)

CSV_HEADERS: List[str] = [
    "Campaign",
    "Revenue",
    "Users",
    "Conversions",
    "Growth %",
    "Channel",
    "Status",
    "CTR %",
    "CPC",
]

DOCUMENT_TITLE = "Campaign Insights Dashboard Report"
DASHBOARD_REGION = "dashboard-content"
TABLE_REGION = "data-table"
LINE_CHART_TITLE = "Revenue Trends (30 Days)"
DONUT_CHART_TITLE = "Channel Breakdown"
BAR_CHART_TITLE = "Top Performing Campaigns"

PdfRenderer = Callable[[str], bytes]


class ExportError(RuntimeError):
    """Raised inside the adapter when a region cannot be serialized."""


@dataclass
class ExportResult:
    ok: bool
    file_name: str
    mime: str
    data: bytes = b""
    error: Optional[str] = None


def slugify(title: str) -> str:
    return re.sub(r"\s+", "-", title.strip().lower())


def chart_region(kind: str, title: str) -> str:
    return f"{kind}-chart-{slugify(title)}"


def _fixed(places: int) -> Callable[[float], Decimal]:
    # Decimal keeps trailing zeros and is written unquoted under QUOTE_NONNUMERIC
    return lambda value: Decimal(f"{value:.{places}f}")


def records_to_csv(df: pd.DataFrame) -> str:
    """CSV text for a record subset, in the order given.

    String fields are quoted (embedded quotes doubled); numbers are written
    bare, growth with one decimal and CTR/CPC with two.
    """
    export_df = pd.DataFrame({
        "Campaign": df["campaign_name"].astype(str),
        "Revenue": df["revenue"].astype("int64"),
        "Users": df["users"].astype("int64"),
        "Conversions": df["conversions"].astype("int64"),
        "Growth %": df["growth"].map(_fixed(1)),
        "Channel": df["channel"].astype(str),
        "Status": df["status"].astype(str),
        "CTR %": df["ctr"].map(_fixed(2)),
        "CPC": df["cpc"].map(_fixed(2)),
    }, columns=CSV_HEADERS)
    body = export_df.to_csv(
        index=False,
        header=False,
        quoting=csv.QUOTE_NONNUMERIC,
        lineterminator="\n",
    )
    return (",".join(CSV_HEADERS) + "\n" + body).rstrip("\n")


def export_csv(df: pd.DataFrame, file_name: str = "campaign-data.csv") -> ExportResult:
    try:
        data = records_to_csv(df).encode("utf-8")
    except (AttributeError, TypeError, ValueError) as exc:
        logger.exception("CSV export failed")
        return ExportResult(ok=False, file_name=file_name, mime="text/csv", error=str(exc))
    return ExportResult(ok=True, file_name=file_name, mime="text/csv", data=data)


# ---------- PDF regions ----------

def _table_html(df: pd.DataFrame) -> str:
    if df.empty:
        return "<p>No data for current filters.</p>"
    return df.to_html(index=False, border=0, classes="data", escape=True)


def _metrics_html(view: DashboardView) -> str:
    metrics = view.metrics
    cards = [
        ("Total Revenue", format_currency(metrics.total_revenue, compact=False)),
        ("Total Users", format_number(metrics.total_users)),
        ("Conversions", format_number(metrics.total_conversions)),
        ("Avg Growth", format_percent(metrics.avg_growth)),
    ]
    cells = "".join(
        f"<td><div class='label'>{html.escape(label)}</div><div class='value'>{html.escape(value)}</div></td>"
        for label, value in cards
    )
    return f"<table class='metrics'><tr>{cells}</tr></table>"


def _campaign_table_frame(view: DashboardView) -> pd.DataFrame:
    working = view.working_set
    if working.empty:
        return pd.DataFrame(columns=["Campaign"])
    return pd.DataFrame({
        "Campaign": working["campaign_name"],
        "Revenue": working["revenue"].map(lambda v: format_currency(v, compact=False)),
        "Users": working["users"].map(format_number),
        "Conversions": working["conversions"].map(format_number),
        "Growth %": working["growth"].map(format_percent),
        "Channel": working["channel"],
        "Status": working["status"],
    })


def _section(title: str, body: str) -> str:
    return f"<section><h2>{html.escape(title)}</h2>{body}</section>"


def _region_sections(view: DashboardView) -> Dict[str, List[str]]:
    line = _section(LINE_CHART_TITLE, _table_html(chart_points_frame(view.chart_points)))
    donut = _section(DONUT_CHART_TITLE, _table_html(channel_shares_frame(view.channel_shares)[["name", "value"]]))
    bar = _section(BAR_CHART_TITLE, _table_html(view.top_campaigns[["name", "revenue", "conversions"]]))
    table = _section("Campaign Performance", _table_html(_campaign_table_frame(view)))
    return {
        DASHBOARD_REGION: [_section("Summary", _metrics_html(view)), line, donut, bar, table],
        TABLE_REGION: [table],
        chart_region("line", LINE_CHART_TITLE): [line],
        chart_region("donut", DONUT_CHART_TITLE): [donut],
        chart_region("bar", BAR_CHART_TITLE): [bar],
    }


def region_file_name(region: str) -> str:
    if region == DASHBOARD_REGION:
        return "campaign-insights-dashboard.pdf"
    if region == TABLE_REGION:
        return "campaign-performance-table.pdf"
    match = re.match(r"^(?:line|donut|bar)-chart-(.+)$", region)
    if match:
        return f"{match.group(1)}-chart.pdf"
    return f"{region}.pdf"


def region_html(region: str, view: DashboardView) -> str:
    sections = _region_sections(view).get(region)
    if sections is None:
        raise ExportError(f"Element not found: {region}")
    generated = datetime.now().strftime("%Y-%m-%d %H:%M")
    return (
        "<html><head><meta charset='utf-8'>"
        f"<title>{html.escape(DOCUMENT_TITLE)}</title>"
        "<style>"
        "@page { size: A4; margin: 12mm; }"
        "body { font-family: sans-serif; font-size: 10pt; color: #111827; }"
        "table { border-collapse: collapse; width: 100%; }"
        "th, td { border-bottom: 1px solid #e5e7eb; padding: 4px 6px; text-align: left; }"
        ".metrics td { border: none; }"
        ".metrics .label { color: #6b7280; } .metrics .value { font-size: 14pt; font-weight: bold; }"
        "</style></head><body>"
        f"<h1>{html.escape(DOCUMENT_TITLE)}</h1>"
        f"<p>Generated {generated}</p>"
        + "".join(sections)
        + "</body></html>"
    )


def weasyprint_renderer(html_text: str) -> bytes:
    from weasyprint import HTML

    return HTML(string=html_text).write_pdf()


def export_region_pdf(
    region: str,
    view: DashboardView,
    renderer: Optional[PdfRenderer] = None,
) -> ExportResult:
    file_name = region_file_name(region)
    render = renderer or weasyprint_renderer
    try:
        data = render(region_html(region, view))
    except Exception as exc:
        logger.exception("PDF export of region %r failed", region)
        return ExportResult(ok=False, file_name=file_name, mime="application/pdf", error=str(exc))
    return ExportResult(ok=True, file_name=file_name, mime="application/pdf", data=data)
