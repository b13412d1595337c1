# backend/booking_api/services/availability/invalidator.py
"""
Cache invalidation for resolved day plans.

Triggers:
✓ Weekly business hours changed → invalidate all dates
✓ Special day / holiday changed → invalidate affected dates

Does NOT trigger:
✗ Appointment booked or cancelled (conflicts are never cached)
"""

import logging
from datetime import date, timedelta

from redis import Redis

from .redis_store import DayPlanRedisStore

logger = logging.getLogger(__name__)


def invalidate_plan_cache(
    redis: Redis,
    dates: list[date] | None = None,
) -> int:
    """
    Invalidate cached day plans.

    Args:
        redis: Redis client
        dates: Specific dates to invalidate, or None for all cached dates

    Returns:
        Number of deleted cache keys
    """
    store = DayPlanRedisStore(redis)
    deleted = store.delete_plans(dates)
    logger.info(f"Invalidated {deleted} cached day plan(s) for {dates or 'all dates'}")
    return deleted


def get_affected_dates(date_start: date, date_end: date | None = None) -> list[date]:
    """
    Dates in [date_start, date_end] (inclusive), e.g. a special day's range.
    """
    date_end = date_end or date_start
    if date_start > date_end:
        date_start, date_end = date_end, date_start

    dates = []
    current = date_start
    while current <= date_end:
        dates.append(current)
        current += timedelta(days=1)
    return dates
