"""Spanish display strings for amounts, dates and times."""

from __future__ import annotations

from datetime import date, datetime, tzinfo
from typing import Optional

from .earnings import to_viewing_time

MONTH_NAMES = [
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
]
# Indexed by date.weekday(), Monday first
WEEKDAY_NAMES = ["lunes", "martes", "miércoles", "jueves", "viernes", "sábado", "domingo"]


def format_currency(amount: int) -> str:
    """Whole pesos with dot thousands separators: ``6500 -> "$6.500"``."""

    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,}".replace(",", ".")


def format_compact_amount(amount: int) -> str:
    """Calendar-cell label: digits only, no symbol or separators."""

    return str(amount)


def format_long_date(day: date, *, with_weekday: bool = True) -> str:
    text = f"{day.day} de {MONTH_NAMES[day.month - 1]} de {day.year}"
    if with_weekday:
        return f"{WEEKDAY_NAMES[day.weekday()]}, {text}"
    return text


def format_month_title(year: int, month: int) -> str:
    return f"{MONTH_NAMES[month - 1]} de {year}"


def format_time(ts: datetime, tz: Optional[tzinfo] = None) -> str:
    """``HH:MM`` in the viewing timezone, matching the day the record is binned on."""

    return to_viewing_time(ts, tz).strftime("%H:%M")


def format_count(count: int) -> str:
    return f"{count} servicio" if count == 1 else f"{count} servicios"
