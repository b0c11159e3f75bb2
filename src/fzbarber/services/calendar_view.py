"""Month grid and per-day detail helpers for the earnings calendar."""

from __future__ import annotations

from calendar import monthrange
from datetime import date, tzinfo
from typing import Iterable, NamedTuple, Optional, Sequence, TypeVar

from .earnings import PricedRecord, earnings_for_date, filter_by_day

R = TypeVar("R", bound=PricedRecord)

WEEKDAY_LABELS = ["Dom", "Lun", "Mar", "Mié", "Jue", "Vie", "Sáb"]


class YearMonth(NamedTuple):
    year: int
    month: int

    @classmethod
    def from_date(cls, day: date) -> "YearMonth":
        return cls(day.year, day.month)

    def first_day(self) -> date:
        return date(self.year, self.month, 1)


class CalendarCell(NamedTuple):
    date: date
    earnings_total: int


def leading_blanks(year: int, month: int) -> int:
    """Weekday of day 1 with Sunday as 0, i.e. padding cells before it."""

    # monthrange() weekday is Monday=0
    return (monthrange(year, month)[0] + 1) % 7


def days_in_month(year: int, month: int) -> int:
    return monthrange(year, month)[1]


def month_grid(
    records: Sequence[PricedRecord],
    year: int,
    month: int,
    tz: Optional[tzinfo] = None,
) -> list[Optional[CalendarCell]]:
    """Sunday-first grid: ``None`` padding followed by one cell per day."""

    cells: list[Optional[CalendarCell]] = [None] * leading_blanks(year, month)
    for day_number in range(1, days_in_month(year, month) + 1):
        day = date(year, month, day_number)
        cells.append(CalendarCell(day, earnings_for_date(records, day, tz)))
    return cells


def select_date(records: Iterable[R], day: date, tz: Optional[tzinfo] = None) -> list[R]:
    """Records logged on ``day``, in the order the store returned them."""

    return filter_by_day(records, day, tz)


def previous_month(year: int, month: int) -> YearMonth:
    if month == 1:
        return YearMonth(year - 1, 12)
    return YearMonth(year, month - 1)


def next_month(year: int, month: int) -> YearMonth:
    if month == 12:
        return YearMonth(year + 1, 1)
    return YearMonth(year, month + 1)


__all__ = [
    "CalendarCell",
    "WEEKDAY_LABELS",
    "YearMonth",
    "days_in_month",
    "leading_blanks",
    "month_grid",
    "next_month",
    "previous_month",
    "select_date",
]
