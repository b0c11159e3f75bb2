"""SQLModel table exports."""

from .service_record import ServiceRecord
from .user import User

__all__ = [
    "ServiceRecord",
    "User",
]
