"""
Application-wide configuration constants and the environment-backed settings loader.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, List, Optional, TypeVar

from dotenv import load_dotenv

T = TypeVar("T")

ENV_PREFIX = "DASHBOARD_"
TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class SectionConfig:
    key: str
    label: str


# Ordered sections of the dashboard page
SECTIONS: List[SectionConfig] = [
    SectionConfig("overview", "Overview"),
    SectionConfig("campaigns", "Campaign Performance"),
]


@dataclass(frozen=True)
class Settings:
    page_size: int = 10
    live_update_interval: float = 30.0
    refresh_latency: float = 1.5
    record_count: int = 100
    chart_days: int = 30
    clamp_negative: bool = True
    seed: Optional[int] = None
    log_level: str = "INFO"
    log_dir: Optional[str] = None

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError(f"page_size must be positive, got {self.page_size}")
        if self.live_update_interval <= 0:
            raise ValueError(f"live_update_interval must be positive, got {self.live_update_interval}")
        if self.refresh_latency < 0:
            raise ValueError(f"refresh_latency must be non-negative, got {self.refresh_latency}")
        if self.record_count < 0:
            raise ValueError(f"record_count must be non-negative, got {self.record_count}")
        if self.chart_days < 0:
            raise ValueError(f"chart_days must be non-negative, got {self.chart_days}")


def _parse_bool(raw: str) -> bool:
    value = raw.strip().lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ValueError(f"not a boolean: {raw!r}")


def _env(name: str, parse: Callable[[str], T], default: T) -> T:
    """Read `DASHBOARD_<name>` from the environment, falling back to `default` when unset or blank."""
    key = f"{ENV_PREFIX}{name}"
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    try:
        return parse(raw.strip())
    except ValueError as exc:
        raise ValueError(f"Invalid value for {key}: {raw!r} ({exc})") from exc


def load_settings(load_env_file: bool = True) -> Settings:
    if load_env_file:
        # load_dotenv will not override existing env vars by default
        load_dotenv()
    defaults = Settings()
    return Settings(
        page_size=_env("PAGE_SIZE", int, defaults.page_size),
        live_update_interval=_env("LIVE_UPDATE_INTERVAL", float, defaults.live_update_interval),
        refresh_latency=_env("REFRESH_LATENCY", float, defaults.refresh_latency),
        record_count=_env("RECORD_COUNT", int, defaults.record_count),
        chart_days=_env("CHART_DAYS", int, defaults.chart_days),
        clamp_negative=_env("CLAMP_NEGATIVE", _parse_bool, defaults.clamp_negative),
        seed=_env("SEED", int, defaults.seed),
        log_level=_env("LOG_LEVEL", str.upper, defaults.log_level),
        log_dir=_env("LOG_DIR", str, defaults.log_dir),
    )
