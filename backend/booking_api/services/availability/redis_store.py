# backend/booking_api/services/availability/redis_store.py
"""
Redis cache for resolved day plans.

Key format: availability:plan:{date}
Value: JSON DayPlan, expires after plan_cache_ttl_seconds.

Appointments are never cached: conflicts are checked on every request.
Any Redis failure degrades to a cache miss.
"""

import json
import logging
from datetime import date

from redis import Redis
from redis.exceptions import RedisError

from .config import AvailabilityConfig, get_availability_config
from .domain import DayPlan

logger = logging.getLogger(__name__)


class DayPlanRedisStore:
    """Redis storage wrapper for DayPlan snapshots."""

    KEY_PREFIX = "availability:plan"

    def __init__(self, redis: Redis, config: AvailabilityConfig | None = None):
        self.redis = redis
        self.config = config or get_availability_config()

    def _key(self, dt: date) -> str:
        return f"{self.KEY_PREFIX}:{dt.isoformat()}"

    # ── Write ────────────────────────────────────────────────────────────

    def store_plan(self, dt: date, plan: DayPlan) -> None:
        try:
            self.redis.set(
                self._key(dt),
                json.dumps(plan.to_dict()),
                ex=self.config.plan_cache_ttl_seconds,
            )
        except RedisError:
            logger.exception("Failed to cache day plan for %s", dt)

    # ── Read ─────────────────────────────────────────────────────────────

    def get_plan(self, dt: date) -> DayPlan | None:
        """Cached plan, or None on cache miss."""
        try:
            raw = self.redis.get(self._key(dt))
        except RedisError:
            logger.exception("Failed to read cached day plan for %s", dt)
            return None

        if raw is None:
            return None
        if isinstance(raw, bytes):
            raw = raw.decode()

        try:
            return DayPlan.from_dict(json.loads(raw))
        except (ValueError, KeyError, TypeError):
            logger.warning(f"Discarding malformed cached day plan for {dt}")
            return None

    # ── Delete ───────────────────────────────────────────────────────────

    def delete_plans(self, dates: list[date] | None = None) -> int:
        """
        Delete cached plans.

        Args:
            dates: Specific dates, or None for every cached date

        Returns:
            Number of deleted keys
        """
        if dates:
            keys = [self._key(dt) for dt in dates]
        else:
            keys = list(self.redis.scan_iter(match=f"{self.KEY_PREFIX}:*"))

        if not keys:
            return 0
        return self.redis.delete(*keys)
