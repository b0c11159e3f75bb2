"""Dashboard-facing helpers: log and remove services, assemble render data."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Optional, Sequence

from ..constants.services import ServiceType
from ..domain.repositories.service_record import DeleteOutcome, ServiceRecordRepository
from ..models.service_record import ServiceRecord
from .calendar_view import CalendarCell, YearMonth, month_grid, select_date
from .earnings import Totals, WindowTotals, local_date, sum_and_count, window_totals


@dataclass(frozen=True)
class DashboardData:
    """Everything the dashboard renders, computed from one snapshot."""

    now: datetime
    windows: WindowTotals
    displayed_month: YearMonth
    grid: list[Optional[CalendarCell]]
    today: date
    selected_date: date
    selected_records: list[ServiceRecord]
    selected_totals: Totals
    todays_records: list[ServiceRecord]


def record_service(
    repo: ServiceRecordRepository,
    service_type: ServiceType,
    *,
    user_id: int,
    timestamp: Optional[datetime] = None,
) -> ServiceRecord:
    """Log one catalog service for ``user_id``."""

    return repo.insert(service_type.name, service_type.price, user_id=user_id, timestamp=timestamp)


def remove_service(
    repo: ServiceRecordRepository, record_id: int, *, user_id: int
) -> DeleteOutcome:
    return repo.delete(record_id, user_id=user_id)


def build_dashboard_data(
    records: Sequence[ServiceRecord],
    *,
    now: datetime,
    displayed_month: YearMonth,
    selected_date: date,
    tz: Optional[tzinfo] = None,
) -> DashboardData:
    """Recompute every figure from scratch; nothing is cached between renders."""

    today = local_date(now, tz)
    selected = select_date(records, selected_date, tz)
    return DashboardData(
        now=now,
        windows=window_totals(records, now, tz),
        displayed_month=displayed_month,
        grid=month_grid(records, displayed_month.year, displayed_month.month, tz),
        today=today,
        selected_date=selected_date,
        selected_records=selected,
        selected_totals=sum_and_count(selected),
        todays_records=select_date(records, today, tz),
    )
