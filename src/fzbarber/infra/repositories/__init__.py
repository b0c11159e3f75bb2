"""Concrete repository implementations using SQLModel."""

from .service_record import SQLModelServiceRecordRepository

__all__ = [
    "SQLModelServiceRecordRepository",
]
