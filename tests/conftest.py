"""Shared test fixtures."""
from datetime import date, datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from booking_api.database import get_db
from booking_api.main import app
from booking_api.models import Base, BusinessHours
from booking_api.redis_client import get_redis
from booking_api.services.availability import (
    Appointment,
    AvailabilityConfig,
    HolidayRule,
    SnapshotProvider,
    SpecialDayRule,
    WeeklyHours,
)


# Monday 2025-06-02 … Sunday 2025-06-08
MONDAY = date(2025, 6, 2)
SATURDAY = date(2025, 6, 7)
FIXED_NOW = datetime(2025, 6, 1, 8, 0)


@pytest.fixture
def config() -> AvailabilityConfig:
    return AvailabilityConfig(min_slot_minutes=5, default_slot_minutes=30)


@pytest.fixture
def weekdays_9_to_5() -> tuple[WeeklyHours, ...]:
    """Mon-Fri 09:00-17:00, Sat closed, Sun has no row."""
    open_days = tuple(WeeklyHours(d, True, "09:00", "17:00") for d in range(1, 6))
    return open_days + (WeeklyHours(6, False, "09:00", "17:00"),)


@pytest.fixture
def make_provider(weekdays_9_to_5):
    """Build a SnapshotProvider; weekly hours default to Mon-Fri 09-17."""
    def _create(
        special_days: list[SpecialDayRule] = (),
        holidays: list[HolidayRule] = (),
        appointments: list[Appointment] = (),
        weekly_hours: list[WeeklyHours] | None = None,
    ) -> SnapshotProvider:
        return SnapshotProvider(
            special_days=tuple(special_days),
            holidays=tuple(holidays),
            weekly_hours=tuple(weekdays_9_to_5 if weekly_hours is None else weekly_hours),
            appointments=tuple(appointments),
        )
    return _create


# ── Database / API ───────────────────────────────────────────────────────


@pytest.fixture
def db_session():
    """In-memory SQLite shared across threads, seeded with Mon-Fri 09-17."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    db = TestingSession()
    for week_day in range(1, 8):
        db.add(BusinessHours(
            week_day=week_day,
            start_time="09:00:00",
            end_time="17:00:00",
            is_open=1 if week_day <= 5 else 0,
        ))
    db.commit()

    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def client(db_session, monkeypatch):
    """TestClient with the test session, no Redis and a fixed clock."""
    from booking_api.routers import appointments, availability

    def _get_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_redis] = lambda: None
    monkeypatch.setattr(availability, "local_now", lambda tz=None: FIXED_NOW)
    monkeypatch.setattr(appointments, "local_now", lambda tz=None: FIXED_NOW)

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
