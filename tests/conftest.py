"""Pytest configuration and shared fixtures for fzbarber tests.

Database fixtures run against a throwaway SQLite file per test so repositories,
auth and the desktop context never touch the real app database.
"""

from __future__ import annotations

import tempfile
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from sqlmodel import SQLModel, create_engine

# Import all models to ensure they're registered with SQLModel metadata
from fzbarber.infra.database import create_session_factory
from fzbarber.infra.repositories import SQLModelServiceRecordRepository
from fzbarber.models import ServiceRecord, User  # noqa: F401

# Fixed offset so day boundaries do not depend on the machine running the tests
SANTIAGO_SUMMER = timezone(timedelta(hours=-3), "CLST")


@dataclass(frozen=True)
class Rec:
    """Minimal priced record for pure engine tests."""

    price: int
    timestamp: datetime
    name: str = "Corte"


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine with all tables created
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory with two bootstrapped owners.

    ``factory.user_id`` is the default owner, ``factory.other_user_id`` a second
    account used for ownership checks.
    """
    factory = create_session_factory(db_engine)

    with factory() as session:
        owner = User(username="tester", password_hash="dummy-hash")
        stranger = User(username="stranger", password_hash="dummy-hash")
        session.add(owner)
        session.add(stranger)
        session.commit()
        session.refresh(owner)
        session.refresh(stranger)
        factory.user_id = owner.id  # type: ignore[attr-defined]
        factory.other_user_id = stranger.id  # type: ignore[attr-defined]

    return factory


@pytest.fixture
def record_repo(session_factory) -> SQLModelServiceRecordRepository:
    return SQLModelServiceRecordRepository(session_factory)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def record_factory(record_repo, session_factory):
    """Factory for persisting service records through the repository.

    Returns:
        Callable: Function that inserts and returns ServiceRecord instances
    """

    def _create_record(
        price: int = 6500,
        name: str = "Corte",
        timestamp: datetime | None = None,
        user_id: int | None = None,
    ) -> ServiceRecord:
        return record_repo.insert(
            name,
            price,
            user_id=user_id or session_factory.user_id,
            timestamp=timestamp,
        )

    return _create_record


@pytest.fixture
def app_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Point config at a temporary data dir and database; returns the data dir."""

    data_dir = tmp_path / "instance"
    monkeypatch.setenv("FZBARBER_DATA_DIR", str(data_dir))
    monkeypatch.setenv("FZBARBER_DATABASE_URL", f"sqlite:///{tmp_path / 'app.db'}")
    monkeypatch.setenv("FZBARBER_DEV_MODE", "true")
    monkeypatch.delenv("FZBARBER_TIMEZONE", raising=False)
    monkeypatch.delenv("FZBARBER_CLOCK_INTERVAL_SECONDS", raising=False)
    monkeypatch.delenv("FZBARBER_LOG_LEVEL", raising=False)
    return data_dir
