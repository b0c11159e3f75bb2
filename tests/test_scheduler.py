"""Clock scheduler behaviour."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from fzbarber.config import BaseConfig
from fzbarber.desktop.context import create_app_context
from fzbarber.scheduler import CLOCK_JOB_ID, ClockScheduler, create_scheduler


@pytest.fixture
def ctx(app_env):
    return create_app_context(BaseConfig())


def test_tick_refreshes_now_and_notifies(ctx):
    ctx.now = ctx.now - timedelta(days=2)
    stale_today = ctx.today()
    seen: list[datetime] = []

    scheduler = ClockScheduler(ctx, on_tick=seen.append)
    now = scheduler.tick()

    assert ctx.now == now
    assert ctx.today() != stale_today
    assert seen == [now]


def test_tick_survives_failing_callback(ctx):
    def boom(_now):
        raise RuntimeError("render failed")

    scheduler = ClockScheduler(ctx, on_tick=boom)
    now = scheduler.tick()
    assert ctx.now == now


def test_tick_does_not_touch_records(ctx):
    ctx.records = ["sentinel"]
    ClockScheduler(ctx).tick()
    assert ctx.records == ["sentinel"]


def test_interval_defaults_to_config(ctx):
    assert ClockScheduler(ctx).interval_seconds == ctx.config.CLOCK_INTERVAL_SECONDS == 60
    assert ClockScheduler(ctx, interval_seconds=5).interval_seconds == 5


def test_start_and_stop(ctx):
    scheduler = create_scheduler(ctx, auto_start=False)
    assert not scheduler.running

    scheduler.interval_seconds = 3600
    scheduler.start()
    try:
        assert scheduler.running
        assert scheduler.scheduler.get_job(CLOCK_JOB_ID) is not None
        scheduler.start()  # second start is a no-op
        assert scheduler.running
    finally:
        scheduler.stop()

    assert not scheduler.running
    scheduler.stop()
