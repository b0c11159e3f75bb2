"""Service module exports."""

from . import (
    auth,
    calendar_view,
    earnings,
    formatting,
    service_log,
)

__all__ = [
    "auth",
    "calendar_view",
    "earnings",
    "formatting",
    "service_log",
]
