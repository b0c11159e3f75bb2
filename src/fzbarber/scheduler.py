"""Background clock that keeps the dashboard's "now" current."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Callable, Optional

from apscheduler.schedulers.background import BackgroundScheduler as APScheduler
from apscheduler.triggers.interval import IntervalTrigger

from .logging_config import get_logger

if TYPE_CHECKING:
    from .desktop.context import AppContext

logger = get_logger("scheduler")

CLOCK_JOB_ID = "clock_refresh"


class ClockScheduler:
    """Refreshes ``AppContext.now`` on a fixed interval.

    The job only moves the reference instant forward and asks the UI to
    re-render; it never reads or writes the record store.
    """

    def __init__(
        self,
        ctx: AppContext,
        *,
        on_tick: Optional[Callable[[datetime], None]] = None,
        interval_seconds: Optional[int] = None,
    ):
        """Initialize the scheduler.

        Args:
            ctx: Application context whose ``now`` is refreshed
            on_tick: Called with the new instant after each refresh
            interval_seconds: Overrides ``CLOCK_INTERVAL_SECONDS`` from config
        """
        self.ctx = ctx
        self.on_tick = on_tick
        self.interval_seconds = interval_seconds or ctx.config.CLOCK_INTERVAL_SECONDS
        self.scheduler: Optional[APScheduler] = None

    @property
    def running(self) -> bool:
        return self.scheduler is not None

    def start(self) -> None:
        """Start the background scheduler."""
        if self.scheduler is not None:
            logger.warning("Scheduler already running")
            return

        self.scheduler = APScheduler()
        self.scheduler.add_job(
            func=self.tick,
            trigger=IntervalTrigger(seconds=self.interval_seconds),
            id=CLOCK_JOB_ID,
            name="Dashboard clock refresh",
            replace_existing=True,
            coalesce=True,
            max_instances=1,
        )
        self.scheduler.start()
        logger.info("Clock scheduler started", extra={"interval_seconds": self.interval_seconds})

    def stop(self) -> None:
        """Stop the background scheduler gracefully."""
        if self.scheduler is not None:
            self.scheduler.shutdown(wait=False)
            self.scheduler = None
            logger.info("Clock scheduler stopped")

    def tick(self) -> datetime:
        """Refresh ``now`` once; also the body of the scheduled job."""
        previous_day = self.ctx.today()
        now = self.ctx.refresh_now()
        if self.ctx.today() != previous_day:
            logger.info("Day rolled over", extra={"today": self.ctx.today().isoformat()})
        if self.on_tick is not None:
            try:
                self.on_tick(now)
            except Exception as exc:
                logger.error(f"Clock tick callback failed: {exc}", exc_info=True)
        return now


def create_scheduler(
    ctx: AppContext,
    *,
    on_tick: Optional[Callable[[datetime], None]] = None,
    auto_start: bool = False,
) -> ClockScheduler:
    """Create and optionally start the clock scheduler.

    Args:
        ctx: Application context
        on_tick: Re-render hook invoked after each refresh
        auto_start: Whether to start the scheduler immediately

    Returns:
        ClockScheduler instance
    """
    scheduler = ClockScheduler(ctx, on_tick=on_tick)
    if auto_start:
        scheduler.start()
    return scheduler
