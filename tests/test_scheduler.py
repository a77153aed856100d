"""
Live-update scheduler tests: perturbation bounds, identity preservation and
task lifecycle.
"""

import asyncio

import numpy as np
import pytest

from insights_dashboard.data.generator import generate_campaigns
from insights_dashboard.data.models import IDENTITY_COLUMNS
from insights_dashboard.data.scheduler import (
    DEFAULT_MAGNITUDES,
    LiveUpdateScheduler,
    perturbation_deltas,
)
from insights_dashboard.data.store import RecordStore
from tests.conftest import TODAY


@pytest.fixture
def store(rng):
    store = RecordStore(rng=rng)
    store.replace_all(generate_campaigns(50, rng=rng, today=TODAY))
    return store


def test_deltas_within_half_magnitude(rng):
    deltas = perturbation_deltas(10_000, DEFAULT_MAGNITUDES, rng)
    for column, magnitude in DEFAULT_MAGNITUDES.items():
        assert deltas[column].dtype == np.int64
        assert deltas[column].min() >= -magnitude / 2
        assert deltas[column].max() < magnitude / 2


def test_ticks_preserve_identity_and_bound_drift(store, rng):
    before = store.snapshot()
    scheduler = LiveUpdateScheduler(store, rng=rng, clamp_negative=False)
    for _ in range(100):
        assert scheduler.tick()
    after = store.snapshot()

    assert scheduler.tick_count == 100
    for column in IDENTITY_COLUMNS:
        assert after[column].tolist() == before[column].tolist()
    for column, magnitude in DEFAULT_MAGNITUDES.items():
        drift = (after[column] - before[column]).abs()
        assert (drift <= 100 * magnitude / 2).all()
    for column in ("growth", "ctr", "cpc"):
        assert after[column].tolist() == before[column].tolist()


def test_clamped_ticks_never_go_negative(rng):
    store = RecordStore(rng=rng)
    store.replace_all(generate_campaigns(20, rng=rng, today=TODAY))
    store.perturb(lambda n: {"conversions": np.full(n, -10_000)}, floor=0)
    scheduler = LiveUpdateScheduler(store, rng=rng, clamp_negative=True)
    for _ in range(50):
        scheduler.tick()
    snapshot = store.snapshot()
    for column in DEFAULT_MAGNITUDES:
        assert (snapshot[column] >= 0).all()


def test_tick_skipped_when_requested(store, rng):
    before = store.snapshot()
    scheduler = LiveUpdateScheduler(store, rng=rng, skip_when=lambda: True)
    assert scheduler.tick() is False
    assert scheduler.tick_count == 0
    assert store.snapshot().equals(before)


def test_tick_on_empty_store(rng):
    scheduler = LiveUpdateScheduler(RecordStore(rng=rng), rng=rng)
    assert scheduler.tick()


def test_non_positive_interval_rejected(store):
    with pytest.raises(ValueError):
        LiveUpdateScheduler(store, interval=0)


@pytest.mark.asyncio
async def test_scheduler_ticks_on_interval_until_stopped(store, rng):
    scheduler = LiveUpdateScheduler(store, interval=0.01, rng=rng)
    scheduler.start()
    assert scheduler.running
    await asyncio.sleep(0.1)
    await scheduler.stop_and_wait()

    ticks = scheduler.tick_count
    assert ticks >= 1
    assert not scheduler.running
    await asyncio.sleep(0.05)
    assert scheduler.tick_count == ticks


@pytest.mark.asyncio
async def test_stop_is_idempotent_and_final(store, rng):
    scheduler = LiveUpdateScheduler(store, interval=0.01, rng=rng)
    scheduler.start()
    scheduler.start()
    scheduler.stop()
    scheduler.stop()
    await scheduler.stop_and_wait()
    with pytest.raises(RuntimeError):
        scheduler.start()


@pytest.mark.asyncio
async def test_stop_before_start(store):
    scheduler = LiveUpdateScheduler(store)
    await scheduler.stop_and_wait()
    assert not scheduler.running


@pytest.mark.asyncio
async def test_failed_tick_is_logged_and_feed_continues(store, rng, monkeypatch, caplog):
    original_perturb = store.perturb
    failures = []

    def flaky_perturb(*args, **kwargs):
        if not failures:
            failures.append(1)
            raise RuntimeError("bad tick")
        return original_perturb(*args, **kwargs)

    monkeypatch.setattr(store, "perturb", flaky_perturb)
    scheduler = LiveUpdateScheduler(store, interval=0.01, rng=rng)
    with caplog.at_level("ERROR", logger="insights_dashboard.data.scheduler"):
        scheduler.start()
        await asyncio.sleep(0.1)
        assert scheduler.running
        await scheduler.stop_and_wait()

    assert failures == [1]
    assert scheduler.tick_count >= 1
    assert "Live update tick failed" in caplog.text
