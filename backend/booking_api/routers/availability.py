# backend/booking_api/routers/availability.py
"""
Availability API endpoints.

GET  /availability             - bookable start times for a date
GET  /holiday-info             - holiday rule governing a date
POST /availability/invalidate  - drop cached day plans
"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from redis import Redis
from sqlalchemy.orm import Session

from ..config import settings
from ..database import get_db
from ..redis_client import get_redis
from ..schemas.availability import (
    AvailabilityResponse,
    HolidayInfoResponse,
    PlanCacheInvalidateResponse,
)
from ..services.availability import (
    InvalidInput,
    SqlAvailabilityProvider,
    holiday_info,
    parse_slot_minutes,
)
from ..services.availability.invalidator import get_affected_dates, invalidate_plan_cache
from ..services.availability.service import get_availability, local_now

router = APIRouter(tags=["availability"])


@router.get("/availability", response_model=AvailabilityResponse)
def get_day_availability(
    target_date: str = Query("", alias="date"),
    slot_minutes: str | None = Query(None, alias="slotMinutes"),
    db: Session = Depends(get_db),
    redis: Redis | None = Depends(get_redis),
):
    """Bookable start times for a date, with the override that decided it."""
    try:
        slot = parse_slot_minutes(slot_minutes)
        result = get_availability(
            db=db,
            target_date=target_date,
            slot_minutes=slot,
            now=local_now(settings.timezone),
            redis=redis,
        )
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=str(e))

    return AvailabilityResponse.from_result(result)


@router.get("/holiday-info", response_model=HolidayInfoResponse)
def get_holiday_info(
    target_date: str = Query("", alias="date"),
    db: Session = Depends(get_db),
):
    try:
        rule = holiday_info(target_date, SqlAvailabilityProvider(db))
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=str(e))

    return HolidayInfoResponse.from_rule(rule)


@router.post("/availability/invalidate", response_model=PlanCacheInvalidateResponse)
def invalidate_availability_cache(
    start_date: date | None = None,
    end_date: date | None = None,
    redis: Redis | None = Depends(get_redis),
):
    """
    Drop cached day plans for [start_date, end_date], or all when no date is given.

    A single bound (either one) invalidates just that date.
    """
    first = start_date or end_date
    dates = get_affected_dates(first, end_date) if first else None

    if redis is None:
        return PlanCacheInvalidateResponse(deleted_keys=0, dates=dates or "all")

    deleted = invalidate_plan_cache(redis, dates)
    return PlanCacheInvalidateResponse(deleted_keys=deleted, dates=dates or "all")
