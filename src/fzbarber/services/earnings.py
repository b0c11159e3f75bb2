"""Earnings rollups over an in-memory snapshot of service records.

Everything here is pure: callers pass the records, the reference instant
``now`` and the viewing timezone, and get plain values back. ``tz=None``
means the host's local timezone. Naive timestamps are read as wall time in
the viewing timezone, aware ones are converted into it; the same conversion
is used for day comparisons and for display.

The four windows overlap on purpose. Each answers "how much since X", so
this week's figure already contains today's and the four never add up to a
grand total.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, tzinfo
from typing import Iterable, NamedTuple, Optional, Protocol, Sequence, TypeVar


class PricedRecord(Protocol):
    price: int
    timestamp: datetime


R = TypeVar("R", bound=PricedRecord)


class Totals(NamedTuple):
    total: int
    count: int


class WindowTotals(NamedTuple):
    today: Totals
    week: Totals
    month: Totals
    year: Totals


def to_viewing_time(ts: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Return ``ts`` as an aware datetime in the viewing timezone."""

    if tz is None:
        # astimezone() with no argument reads naive values as local time
        return ts.astimezone()
    if ts.tzinfo is None:
        return ts.replace(tzinfo=tz)
    return ts.astimezone(tz)


def local_date(ts: datetime, tz: Optional[tzinfo] = None) -> date:
    return to_viewing_time(ts, tz).date()


def local_midnight(day: date, tz: Optional[tzinfo] = None) -> datetime:
    """Start of ``day`` in the viewing timezone, as an aware datetime."""

    if tz is None:
        return datetime.combine(day, time.min).astimezone()
    return datetime.combine(day, time.min, tzinfo=tz)


def sum_and_count(records: Iterable[PricedRecord]) -> Totals:
    """Total price and number of records; no filtering, no clamping."""

    total = 0
    count = 0
    for record in records:
        total += record.price
        count += 1
    return Totals(total, count)


def filter_by_day(records: Iterable[R], day: date, tz: Optional[tzinfo] = None) -> list[R]:
    """Records whose timestamp falls on ``day`` in the viewing timezone."""

    return [r for r in records if local_date(r.timestamp, tz) == day]


def filter_from_instant(
    records: Iterable[R], start: datetime, tz: Optional[tzinfo] = None
) -> list[R]:
    """Records stamped at or after ``start`` (inclusive lower bound)."""

    start_at = to_viewing_time(start, tz)
    return [r for r in records if to_viewing_time(r.timestamp, tz) >= start_at]


def today_window(now: datetime, tz: Optional[tzinfo] = None) -> datetime:
    return local_midnight(local_date(now, tz), tz)


def week_window(now: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Midnight of the most recent Sunday, today included."""

    today = local_date(now, tz)
    # date.weekday(): Monday=0 .. Sunday=6
    days_since_sunday = (today.weekday() + 1) % 7
    return local_midnight(today - timedelta(days=days_since_sunday), tz)


def month_window(now: datetime, tz: Optional[tzinfo] = None) -> datetime:
    return local_midnight(local_date(now, tz).replace(day=1), tz)


def year_window(now: datetime, tz: Optional[tzinfo] = None) -> datetime:
    return local_midnight(local_date(now, tz).replace(month=1, day=1), tz)


def earnings_for_date(records: Iterable[PricedRecord], day: date, tz: Optional[tzinfo] = None) -> int:
    return sum_and_count(filter_by_day(records, day, tz)).total


def window_totals(
    records: Sequence[PricedRecord], now: datetime, tz: Optional[tzinfo] = None
) -> WindowTotals:
    """The four "since X" figures, all evaluated at the same ``now``."""

    return WindowTotals(
        today=sum_and_count(filter_from_instant(records, today_window(now, tz), tz)),
        week=sum_and_count(filter_from_instant(records, week_window(now, tz), tz)),
        month=sum_and_count(filter_from_instant(records, month_window(now, tz), tz)),
        year=sum_and_count(filter_from_instant(records, year_window(now, tz), tz)),
    )


__all__ = [
    "Totals",
    "WindowTotals",
    "earnings_for_date",
    "filter_by_day",
    "filter_from_instant",
    "local_date",
    "local_midnight",
    "month_window",
    "sum_and_count",
    "to_viewing_time",
    "today_window",
    "week_window",
    "window_totals",
    "year_window",
]
