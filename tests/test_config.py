import pytest

from insights_dashboard.config import SECTIONS, Settings, load_settings

ENV_NAMES = [
    "PAGE_SIZE",
    "LIVE_UPDATE_INTERVAL",
    "REFRESH_LATENCY",
    "RECORD_COUNT",
    "CHART_DAYS",
    "CLAMP_NEGATIVE",
    "SEED",
    "LOG_LEVEL",
    "LOG_DIR",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(f"DASHBOARD_{name}", raising=False)


def test_defaults():
    settings = load_settings(load_env_file=False)
    assert settings == Settings()
    assert settings.page_size == 10
    assert settings.live_update_interval == 30.0
    assert settings.clamp_negative is True
    assert settings.seed is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("DASHBOARD_PAGE_SIZE", "25")
    monkeypatch.setenv("DASHBOARD_LIVE_UPDATE_INTERVAL", "2.5")
    monkeypatch.setenv("DASHBOARD_CLAMP_NEGATIVE", "off")
    monkeypatch.setenv("DASHBOARD_SEED", "42")
    monkeypatch.setenv("DASHBOARD_LOG_LEVEL", "debug")
    settings = load_settings(load_env_file=False)
    assert settings.page_size == 25
    assert settings.live_update_interval == 2.5
    assert settings.clamp_negative is False
    assert settings.seed == 42
    assert settings.log_level == "DEBUG"


def test_blank_value_uses_default(monkeypatch):
    monkeypatch.setenv("DASHBOARD_PAGE_SIZE", "  ")
    assert load_settings(load_env_file=False).page_size == 10


def test_unparseable_value_names_the_variable(monkeypatch):
    monkeypatch.setenv("DASHBOARD_PAGE_SIZE", "abc")
    with pytest.raises(ValueError, match="DASHBOARD_PAGE_SIZE"):
        load_settings(load_env_file=False)


def test_out_of_range_value_rejected(monkeypatch):
    monkeypatch.setenv("DASHBOARD_LIVE_UPDATE_INTERVAL", "0")
    with pytest.raises(ValueError, match="live_update_interval"):
        load_settings(load_env_file=False)


def test_sections_order():
    assert [section.key for section in SECTIONS] == ["overview", "campaigns"]
