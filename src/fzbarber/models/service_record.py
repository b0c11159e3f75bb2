"""SQLModel definition for logged services."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:  # pragma: no cover - import guard for circular dependency
    from .user import User

NAME_MAX_LENGTH = 64


class ServiceRecord(SQLModel, table=True):
    """One completed service: what was done, what it cost, and when.

    Rows are written once and only ever deleted; ``timestamp`` is stamped by
    the store in UTC at insert time.
    """

    __tablename__: ClassVar[str] = "service_record"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=NAME_MAX_LENGTH)
    price: int = Field(nullable=False, ge=0, description="Whole currency units, never negative")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True,
    )

    user: "User" = Relationship(
        sa_relationship=relationship("User", back_populates="service_records")
    )
