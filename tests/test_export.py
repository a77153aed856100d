"""
Export adapter tests. PDF rendering is exercised with a fake renderer so no
WeasyPrint system libraries are needed.
"""

import csv
import io

import pytest

from insights_dashboard.data.query import QueryParams
from insights_dashboard.data.session import build_view
from insights_dashboard.data.models import empty_frame, records_to_frame
from insights_dashboard.utils.export import (
    BAR_CHART_TITLE,
    CSV_HEADERS,
    DASHBOARD_REGION,
    LINE_CHART_TITLE,
    TABLE_REGION,
    chart_region,
    export_csv,
    export_region_pdf,
    records_to_csv,
    region_file_name,
)
from tests.conftest import make_record


@pytest.fixture
def view(sample_frame):
    return build_view(sample_frame, QueryParams())


class FakeRenderer:
    def __init__(self):
        self.calls = []

    def __call__(self, html_text):
        self.calls.append(html_text)
        return b"%PDF-fake"


def test_csv_header_and_row_format(sample_frame):
    lines = records_to_csv(sample_frame.iloc[:1]).split("\n")
    assert lines[0] == ",".join(CSV_HEADERS)
    assert lines[1] == '"Summer Sale 1",5000,100,10,10.0,"Google Ads","active",2.00,1.00'


def test_csv_escapes_quotes_and_commas_in_names():
    frame = records_to_frame([make_record(7, 'Summer "VIP", Sale 7', channel="Google, Search")])
    rows = list(csv.reader(io.StringIO(records_to_csv(frame))))
    assert len(rows) == 2
    assert len(rows[1]) == len(CSV_HEADERS)
    assert rows[1][0] == 'Summer "VIP", Sale 7'
    assert rows[1][5] == "Google, Search"
    assert rows[1][1:5] == ["1000", "100", "10", "1.0"]


def test_csv_of_empty_subset_is_header_only():
    assert records_to_csv(empty_frame()) == ",".join(CSV_HEADERS)


def test_export_csv_keeps_row_order(view):
    result = export_csv(view.matching)
    assert result.ok
    assert result.file_name == "campaign-data.csv"
    assert result.mime == "text/csv"
    rows = result.data.decode("utf-8").split("\n")[1:]
    assert [row.split(",")[0] for row in rows] == [
        '"Lead Gen 4"',
        '"Black Friday 2"',
        '"Summer Sale 1"',
        '"summer splash 3"',
        '"Summer Sale 5"',
        '"brand awareness 6"',
    ]


def test_table_region_pdf(view):
    renderer = FakeRenderer()
    result = export_region_pdf(TABLE_REGION, view, renderer=renderer)
    assert result.ok
    assert result.data == b"%PDF-fake"
    assert result.file_name == "campaign-performance-table.pdf"
    assert result.mime == "application/pdf"
    assert "Campaign Performance" in renderer.calls[0]
    assert "Summer Sale 1" in renderer.calls[0]


def test_dashboard_region_contains_every_section(view):
    renderer = FakeRenderer()
    result = export_region_pdf(DASHBOARD_REGION, view, renderer=renderer)
    assert result.file_name == "campaign-insights-dashboard.pdf"
    html_text = renderer.calls[0]
    for title in ("Summary", LINE_CHART_TITLE, BAR_CHART_TITLE, "Campaign Performance"):
        assert title in html_text


def test_unknown_region_fails_without_rendering(view):
    renderer = FakeRenderer()
    result = export_region_pdf("pie-chart-missing", view, renderer=renderer)
    assert not result.ok
    assert "Element not found" in result.error
    assert renderer.calls == []


def test_renderer_failure_is_reported(view):
    def broken(html_text):
        raise OSError("cairo missing")

    result = export_region_pdf(TABLE_REGION, view, renderer=broken)
    assert not result.ok
    assert result.error == "cairo missing"
    assert result.data == b""


def test_chart_region_file_names():
    region = chart_region("line", LINE_CHART_TITLE)
    assert region == "line-chart-revenue-trends-(30-days)"
    assert region_file_name(region) == "revenue-trends-(30-days)-chart.pdf"
    assert region_file_name(chart_region("bar", BAR_CHART_TITLE)) == "top-performing-campaigns-chart.pdf"
