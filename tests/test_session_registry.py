"""
Runner registry tests: one runner per browser session, and runners of ended
sessions are closed.
"""

import time

from insights_dashboard.config import Settings
from insights_dashboard.ui.layout import live_update_cadence
from insights_dashboard.ui.session_registry import RunnerRegistry
from insights_dashboard.ui.session_runner import SessionRunner


class FakeRunner:
    def __init__(self, settings):
        self.settings = settings
        self.started = 0
        self.closed = False

    def start(self):
        self.started += 1

    def close(self):
        self.closed = True


def test_one_runner_per_session():
    registry = RunnerRegistry(factory=FakeRunner)
    first = registry.get("a", Settings())
    assert registry.get("a", Settings()) is first
    assert registry.get("b", Settings()) is not first
    assert first.started == 1
    assert len(registry) == 2


def test_closed_runner_is_replaced():
    registry = RunnerRegistry(factory=FakeRunner)
    first = registry.get("a", Settings())
    first.close()
    assert registry.get("a", Settings()) is not first


def test_reap_closes_runners_of_ended_sessions():
    registry = RunnerRegistry(factory=FakeRunner)
    kept = registry.get("open-tab", Settings())
    ended = registry.get("closed-tab", Settings())

    assert registry.reap(lambda sid: sid == "open-tab") == ["closed-tab"]
    assert ended.closed
    assert not kept.closed
    assert len(registry) == 1
    assert registry.reap(lambda sid: sid == "open-tab") == []


def test_background_reaper_stops_live_updates_of_ended_session():
    registry = RunnerRegistry()
    runner = registry.get("closed-tab", Settings(refresh_latency=0, record_count=5, seed=3))
    assert isinstance(runner, SessionRunner)
    active = {"closed-tab"}
    registry.start_reaper(lambda sid: sid in active, interval=0.01)
    try:
        deadline = time.monotonic() + 5
        while not runner.session.scheduler.running and time.monotonic() < deadline:
            time.sleep(0.01)
        assert runner.session.scheduler.running

        active.clear()
        while runner._thread.is_alive() and time.monotonic() < deadline:
            time.sleep(0.01)
        assert runner.closed
        assert runner.session.closed
        assert len(registry) == 0
    finally:
        registry.close_all()


def test_close_all():
    registry = RunnerRegistry(factory=FakeRunner)
    runners = [registry.get(sid, Settings()) for sid in ("a", "b")]
    registry.close_all()
    assert all(runner.closed for runner in runners)
    assert len(registry) == 0


def test_live_update_cadence_follows_loading_state():
    assert live_update_cadence(True, 30.0) == 1.0
    assert live_update_cadence(False, 30.0) == 30.0
    assert live_update_cadence(True, 0.5) == 0.5
