"""Quick validation script for the campaign data engine.

Run with `python scripts/validate_pipeline.py` to ensure generated records
flow through date-range selection, the query pipeline and aggregation with
the expected shapes.
"""

from __future__ import annotations

import datetime as dt

import numpy as np

from insights_dashboard.data.aggregation import aggregate
from insights_dashboard.data.filters import select_date_range
from insights_dashboard.data.generator import generate_campaigns
from insights_dashboard.data.query import QueryParams, run_query
from insights_dashboard.utils.export import CSV_HEADERS, records_to_csv


def main() -> None:
    today = dt.date(2024, 3, 31)
    records = generate_campaigns(100, rng=np.random.default_rng(7), today=today)

    working = select_date_range(records, "2024-03-01", "2024-03-31")
    if not (working["date"] >= dt.date(2024, 3, 1)).all():
        raise SystemExit("Date-range selection kept records before the start bound")

    result = run_query(working, QueryParams(search_term="sale", sort_field="revenue", sort_direction="desc"))
    assert len(result.records) <= 10, "Page should hold at most 10 records"
    assert result.records["revenue"].is_monotonic_decreasing, "Revenue should be non-increasing"
    assert result.records["campaign_name"].str.lower().str.contains("sale").all()

    metrics = aggregate(working)
    assert metrics.total_revenue == int(working["revenue"].sum())

    csv_text = records_to_csv(result.records)
    assert csv_text.splitlines()[0] == ",".join(CSV_HEADERS)

    print("Pipeline validation passed. Working set:", len(working), "Matches:", result.total_count)


if __name__ == "__main__":
    main()
