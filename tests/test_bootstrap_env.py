import os

from insights_dashboard import bootstrap_env


def test_settings_from_section_and_top_level(monkeypatch):
    # setenv first so teardown removes what ensure_env adds
    for name in ("DASHBOARD_PAGE_SIZE", "DASHBOARD_SEED"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.setenv("DASHBOARD_LOG_LEVEL", "WARNING")
    secrets = {
        "dashboard": {"page_size": 25, "log-level": "DEBUG"},
        "seed": 7,
        "other_service": {"token": "x"},
    }
    monkeypatch.setattr(bootstrap_env, "_read_secrets", lambda: secrets)
    monkeypatch.setattr(bootstrap_env, "load_dotenv", lambda: None)

    bootstrap_env.ensure_env()

    assert os.environ["DASHBOARD_PAGE_SIZE"] == "25"
    assert os.environ["DASHBOARD_SEED"] == "7"
    assert os.environ["DASHBOARD_LOG_LEVEL"] == "WARNING"
    assert "DASHBOARD_OTHER_SERVICE_TOKEN" not in os.environ


def test_env_key_is_not_double_prefixed():
    assert bootstrap_env._env_key("dashboard_seed") == "DASHBOARD_SEED"
    assert bootstrap_env._env_key("refresh-latency") == "DASHBOARD_REFRESH_LATENCY"
