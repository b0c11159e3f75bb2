"""Service record repository protocol."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional, Protocol

from ...models.service_record import ServiceRecord


class DeleteOutcome(str, Enum):
    """Result of an owner-scoped delete."""

    DELETED = "deleted"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"


class ServiceRecordRepository(Protocol):
    """Store of service records keyed by owning user."""

    def get_by_id(self, record_id: int, *, user_id: int) -> Optional[ServiceRecord]:
        """Retrieve one of the owner's records by ID."""
        ...

    def list_all(self, *, user_id: int) -> list[ServiceRecord]:
        """List every record of the owner, most recent first."""
        ...

    def insert(
        self,
        name: str,
        price: int,
        *,
        user_id: int,
        timestamp: Optional[datetime] = None,
    ) -> ServiceRecord:
        """Validate and persist a new record, assigning id and timestamp."""
        ...

    def delete(self, record_id: int, *, user_id: int) -> DeleteOutcome:
        """Delete a record only when it belongs to ``user_id``."""
        ...
