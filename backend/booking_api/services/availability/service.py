# backend/booking_api/services/availability/service.py
"""
Request-level wiring: SQL provider + optional plan cache + engine.
"""

import logging
import threading
from datetime import date, datetime, time
from zoneinfo import ZoneInfo

from redis import Redis
from sqlalchemy.orm import Session

from .config import AvailabilityConfig, get_availability_config
from .conflicts import find_conflict
from .domain import AvailabilityResult, DayPlan
from .engine import availability_for_plan, validate_request
from .errors import BookingConflict, InvalidInput
from .providers import AvailabilityProvider, SqlAvailabilityProvider
from .redis_store import DayPlanRedisStore
from .resolver import resolve_day_plan
from .timeutils import time_str_to_minutes

logger = logging.getLogger(__name__)

# Serializes the conflict check and insert of bookings within this process
_booking_lock = threading.Lock()


def local_now(timezone: str | None = None) -> datetime:
    """Naive wall-clock time of the business (system local time if no zone)."""
    if timezone:
        return datetime.now(ZoneInfo(timezone)).replace(tzinfo=None)
    return datetime.now()


def get_availability(
    db: Session,
    target_date: str | date,
    slot_minutes: int,
    now: datetime,
    redis: Redis | None = None,
    config: AvailabilityConfig | None = None,
) -> AvailabilityResult:
    """Availability for one date, using the Redis plan cache when available."""
    config = config or get_availability_config()
    day, slot_minutes = validate_request(target_date, slot_minutes, config)

    provider = SqlAvailabilityProvider(db, timezone=config.timezone)
    plan = _get_day_plan(provider, day, config, redis)

    return availability_for_plan(plan, day, slot_minutes, provider.fetch_appointments, now)


def _get_day_plan(
    provider: AvailabilityProvider,
    day: date,
    config: AvailabilityConfig,
    redis: Redis | None,
) -> DayPlan:
    if redis is None:
        return resolve_day_plan(provider, day)

    store = DayPlanRedisStore(redis, config)
    cached = store.get_plan(day)
    if cached is not None:
        return cached

    # Cache miss: resolve and store
    plan = resolve_day_plan(provider, day)
    store.store_plan(day, plan)
    return plan


def book_appointment(db: Session, data, now: datetime):
    """
    Store a new appointment.

    The conflict check and insert run under a process-wide lock, so two
    requests served by the same worker cannot both claim a slot. Separate
    worker processes are not coordinated.

    Raises:
        InvalidInput: start is in the past
        BookingConflict: overlaps an existing appointment
    """
    from ...models.tables import Appointments

    start_min = time_str_to_minutes(data.time)
    starts_at = datetime.combine(data.date, time(start_min // 60, start_min % 60))
    if starts_at < now:
        raise InvalidInput("Appointment cannot be in the past")

    provider = SqlAvailabilityProvider(db)
    with _booking_lock:
        clash = find_conflict(start_min, data.duration, provider.fetch_appointments(data.date))
        if clash is not None:
            logger.warning(
                f"Booking rejected: {data.date} {data.time} overlaps appointment {clash.id}"
            )
            raise BookingConflict("Time conflict with another appointment")

        obj = Appointments(
            name=data.name,
            phone_number=data.phone_number,
            email=data.email,
            date=data.date.isoformat(),
            time=f"{data.time}:00",
            duration=data.duration,
            type=data.type,
            comments=data.comments,
            active=1,
            paid=0,
        )
        db.add(obj)
        db.commit()
    db.refresh(obj)

    logger.info(f"Appointment {obj.id} booked for {obj.date} {data.time} ({data.duration} min)")
    return obj
