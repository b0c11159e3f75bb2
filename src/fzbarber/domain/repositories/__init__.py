"""Repository protocol definitions for domain layer."""

from .service_record import DeleteOutcome, ServiceRecordRepository

__all__ = [
    "DeleteOutcome",
    "ServiceRecordRepository",
]
