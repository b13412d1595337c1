"""Test the Redis day-plan cache and its invalidation helpers."""
import json
from datetime import date
from unittest.mock import MagicMock

from redis.exceptions import ConnectionError as RedisConnectionError

from booking_api.services.availability import AvailabilityConfig, DayPlan, SourceKind
from booking_api.services.availability.intervals import TimeWindow
from booking_api.services.availability.invalidator import (
    get_affected_dates,
    invalidate_plan_cache,
)
from booking_api.services.availability.redis_store import DayPlanRedisStore
from booking_api.services.availability.service import _get_day_plan

from tests.conftest import MONDAY


OPEN_PLAN = DayPlan.opened(TimeWindow(540, 1020), SourceKind.HOLIDAY, "Fair", "Booth 4")


class TestDayPlanSerialization:

    def test_open_plan_round_trip(self):
        assert DayPlan.from_dict(OPEN_PLAN.to_dict()) == OPEN_PLAN

    def test_closed_plan_round_trip(self):
        plan = DayPlan.closed(SourceKind.SPECIAL_DAY, "Closed", None)
        assert DayPlan.from_dict(plan.to_dict()) == plan


class TestDayPlanRedisStore:

    def test_store_sets_key_with_ttl(self):
        redis = MagicMock()
        store = DayPlanRedisStore(redis, AvailabilityConfig(plan_cache_ttl_seconds=120))

        store.store_plan(MONDAY, OPEN_PLAN)

        key, payload = redis.set.call_args.args
        assert key == "availability:plan:2025-06-02"
        assert json.loads(payload)["window"] == [540, 1020]
        assert redis.set.call_args.kwargs == {"ex": 120}

    def test_get_decodes_bytes(self):
        redis = MagicMock()
        redis.get.return_value = json.dumps(OPEN_PLAN.to_dict()).encode()

        assert DayPlanRedisStore(redis, AvailabilityConfig()).get_plan(MONDAY) == OPEN_PLAN

    def test_miss_returns_none(self):
        redis = MagicMock()
        redis.get.return_value = None

        assert DayPlanRedisStore(redis, AvailabilityConfig()).get_plan(MONDAY) is None

    def test_malformed_payload_is_a_miss(self):
        redis = MagicMock()
        redis.get.return_value = b"{not json"

        assert DayPlanRedisStore(redis, AvailabilityConfig()).get_plan(MONDAY) is None

    def test_redis_errors_degrade_to_miss(self):
        redis = MagicMock()
        redis.get.side_effect = RedisConnectionError("down")
        redis.set.side_effect = RedisConnectionError("down")
        store = DayPlanRedisStore(redis, AvailabilityConfig())

        assert store.get_plan(MONDAY) is None
        store.store_plan(MONDAY, OPEN_PLAN)  # must not raise

    def test_delete_specific_dates(self):
        redis = MagicMock()
        redis.delete.return_value = 2

        deleted = DayPlanRedisStore(redis, AvailabilityConfig()).delete_plans(
            [MONDAY, date(2025, 6, 3)]
        )

        assert deleted == 2
        redis.delete.assert_called_once_with(
            "availability:plan:2025-06-02", "availability:plan:2025-06-03"
        )

    def test_delete_all_scans_prefix(self):
        redis = MagicMock()
        redis.scan_iter.return_value = iter([b"availability:plan:2025-06-02"])
        redis.delete.return_value = 1

        assert DayPlanRedisStore(redis, AvailabilityConfig()).delete_plans() == 1
        redis.scan_iter.assert_called_once_with(match="availability:plan:*")

    def test_delete_all_with_empty_cache(self):
        redis = MagicMock()
        redis.scan_iter.return_value = iter([])

        assert DayPlanRedisStore(redis, AvailabilityConfig()).delete_plans() == 0
        redis.delete.assert_not_called()


class TestCachedResolution:

    def test_cache_hit_skips_provider(self):
        redis = MagicMock()
        redis.get.return_value = json.dumps(OPEN_PLAN.to_dict())
        provider = MagicMock()

        plan = _get_day_plan(provider, MONDAY, AvailabilityConfig(), redis)

        assert plan == OPEN_PLAN
        provider.fetch_special_days.assert_not_called()

    def test_cache_miss_resolves_and_stores(self, make_provider):
        redis = MagicMock()
        redis.get.return_value = None

        plan = _get_day_plan(make_provider(), MONDAY, AvailabilityConfig(), redis)

        assert plan.source_kind == SourceKind.BUSINESS_HOURS
        redis.set.assert_called_once()


class TestInvalidator:

    def test_affected_dates_inclusive(self):
        assert get_affected_dates(date(2025, 12, 30), date(2026, 1, 1)) == [
            date(2025, 12, 30), date(2025, 12, 31), date(2026, 1, 1),
        ]

    def test_affected_dates_single_and_swapped(self):
        assert get_affected_dates(MONDAY) == [MONDAY]
        assert get_affected_dates(date(2025, 6, 3), MONDAY) == [MONDAY, date(2025, 6, 3)]

    def test_invalidate_plan_cache(self):
        redis = MagicMock()
        redis.delete.return_value = 1

        assert invalidate_plan_cache(redis, [MONDAY]) == 1
