from __future__ import annotations

from dataclasses import dataclass

from insights_dashboard.config import Settings
from insights_dashboard.data.filters import DateRange
from insights_dashboard.ui.session_runner import SessionRunner


@dataclass
class PageContext:
    runner: SessionRunner
    settings: Settings
    date_range: DateRange
    theme: str
