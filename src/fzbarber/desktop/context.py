"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo
from typing import Optional

import flet as ft

from ..config import BaseConfig
from ..infra.database import SessionFactory, bootstrap_database
from ..infra.repositories import SQLModelServiceRecordRepository
from ..models.service_record import ServiceRecord
from ..models.user import User
from ..services.calendar_view import YearMonth
from ..services.earnings import local_date


@dataclass
class AppContext:
    """Centralized application context with services and state."""

    config: BaseConfig
    session_factory: SessionFactory
    record_repo: SQLModelServiceRecordRepository

    # Viewing timezone shared by day boundaries and display; None is host local
    tz: Optional[tzinfo]

    # Refreshed by the clock job
    now: datetime
    displayed_month: YearMonth
    selected_date: date

    # Snapshot from the store, most recent first; replaced wholesale on reload
    records: list[ServiceRecord] = field(default_factory=list)

    page: Optional[ft.Page] = None
    dev_mode: bool = False
    current_user: Optional[User] = None

    def require_user_id(self) -> int:
        """Return the current user id or raise if not set."""

        if self.current_user is None or self.current_user.id is None:
            raise RuntimeError("User is not authenticated")
        return self.current_user.id

    def current_identity(self) -> Optional[User]:
        return self.current_user

    def today(self) -> date:
        return local_date(self.now, self.tz)

    def refresh_now(self) -> datetime:
        """Advance the reference instant to the wall clock."""

        self.now = datetime.now(self.tz) if self.tz is not None else datetime.now().astimezone()
        return self.now

    def sign_out(self) -> None:
        self.current_user = None
        self.records = []


def create_app_context(config: Optional[BaseConfig] = None) -> AppContext:
    """Create and initialize the application context."""

    if config is None:
        config = BaseConfig()

    _engine, session_factory = bootstrap_database(config)

    tz = config.viewing_timezone()
    now = datetime.now(tz) if tz is not None else datetime.now().astimezone()
    today = local_date(now, tz)

    return AppContext(
        config=config,
        dev_mode=config.DEV_MODE,
        session_factory=session_factory,
        record_repo=SQLModelServiceRecordRepository(session_factory),
        tz=tz,
        now=now,
        displayed_month=YearMonth.from_date(today),
        selected_date=today,
    )
