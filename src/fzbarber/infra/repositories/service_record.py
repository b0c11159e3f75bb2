"""SQLModel implementation of the service record store."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlmodel import select

from ...domain.repositories.service_record import DeleteOutcome
from ...logging_config import get_logger
from ...models.service_record import NAME_MAX_LENGTH, ServiceRecord
from ..database import SessionFactory

logger = get_logger(__name__)


def validate_service(name: object, price: object) -> tuple[str, int]:
    """Reject malformed input at the write boundary; returns the cleaned pair."""

    if not isinstance(name, str) or not name.strip():
        raise ValueError("Service name is required")
    cleaned = name.strip()
    if len(cleaned) > NAME_MAX_LENGTH:
        raise ValueError(f"Service name must be at most {NAME_MAX_LENGTH} characters")
    # bool is an int subclass; a checkbox value is never a price
    if isinstance(price, bool) or not isinstance(price, int):
        raise ValueError(f"Price must be a whole number, got {price!r}")
    if price < 0:
        raise ValueError("Price cannot be negative")
    return cleaned, price


def _as_utc(record: ServiceRecord) -> ServiceRecord:
    # SQLite hands back naive datetimes; stored values are UTC.
    if record.timestamp is not None and record.timestamp.tzinfo is None:
        record.timestamp = record.timestamp.replace(tzinfo=timezone.utc)
    return record


class SQLModelServiceRecordRepository:
    """SQLModel-based service record repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, record_id: int, *, user_id: int) -> Optional[ServiceRecord]:
        """Retrieve one of the owner's records by ID."""
        with self.session_factory() as session:
            obj = session.exec(
                select(ServiceRecord)
                .where(ServiceRecord.id == record_id)
                .where(ServiceRecord.user_id == user_id)
            ).first()
            if obj:
                session.expunge(obj)
                _as_utc(obj)
            return obj

    def list_all(self, *, user_id: int) -> list[ServiceRecord]:
        """List every record of the owner, most recent first."""
        with self.session_factory() as session:
            statement = (
                select(ServiceRecord)
                .where(ServiceRecord.user_id == user_id)
                .order_by(ServiceRecord.timestamp.desc(), ServiceRecord.id.desc())  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
        return [_as_utc(row) for row in rows]

    def insert(
        self,
        name: str,
        price: int,
        *,
        user_id: int,
        timestamp: Optional[datetime] = None,
    ) -> ServiceRecord:
        """Validate and persist a new record.

        ``timestamp`` defaults to now and must be timezone-aware; a naive value
        has no fixed instant until a viewing timezone is applied, which is the
        caller's job. Stored values are normalized to UTC.
        """
        cleaned_name, cleaned_price = validate_service(name, price)
        if timestamp is not None and timestamp.tzinfo is None:
            raise ValueError("Timestamp must be timezone-aware")
        stamped = (timestamp or datetime.now(timezone.utc)).astimezone(timezone.utc)
        with self.session_factory() as session:
            record = ServiceRecord(
                user_id=user_id,
                name=cleaned_name,
                price=cleaned_price,
                timestamp=stamped,
            )
            session.add(record)
            session.commit()
            session.refresh(record)
            session.expunge(record)
        logger.info(
            "Service recorded",
            extra={"record_id": record.id, "user_id": user_id, "price": cleaned_price},
        )
        return _as_utc(record)

    def delete(self, record_id: int, *, user_id: int) -> DeleteOutcome:
        """Delete a record only when it belongs to ``user_id``."""
        with self.session_factory() as session:
            record = session.get(ServiceRecord, record_id)
            if record is None:
                outcome = DeleteOutcome.NOT_FOUND
            elif record.user_id != user_id:
                outcome = DeleteOutcome.FORBIDDEN
            else:
                session.delete(record)
                session.commit()
                outcome = DeleteOutcome.DELETED

        if outcome is DeleteOutcome.FORBIDDEN:
            logger.warning(
                "Delete rejected for non-owner",
                extra={"record_id": record_id, "user_id": user_id},
            )
        else:
            logger.info(
                "Delete finished",
                extra={"record_id": record_id, "user_id": user_id, "outcome": outcome.value},
            )
        return outcome
