"""Test the SQL provider's row mapping."""
from datetime import datetime

import pytest

from booking_api.config import Settings
from booking_api.models import BusinessHours, HolidayHours, SpecialDays
from booking_api.services.availability import SqlAvailabilityProvider, StoredDataError
from booking_api.services.availability.intervals import TimeWindow

from tests.conftest import MONDAY


class TestSpecialDayTimestamps:

    def test_offset_converted_to_business_zone(self, db_session):
        db_session.add(SpecialDays(
            id=1,
            label="Pop-up",
            start_date="2025-06-02",
            is_open=1,
            start_time="2025-06-02T10:00:00+02:00",
            end_time="2025-06-02T16:00:00+02:00",
        ))
        db_session.commit()

        (rule,) = SqlAvailabilityProvider(db_session, timezone="UTC").fetch_special_days(MONDAY)

        assert rule.start_at == datetime(2025, 6, 2, 8, 0)
        assert rule.end_at == datetime(2025, 6, 2, 14, 0)
        assert rule.start_at.tzinfo is None

    def test_naive_timestamp_kept_as_is(self, db_session):
        db_session.add(SpecialDays(
            id=1,
            label="Pop-up",
            start_date="2025-06-02",
            is_open=1,
            start_time="2025-06-02 10:00:00",
            end_time="2025-06-02 16:00:00",
        ))
        db_session.commit()

        (rule,) = SqlAvailabilityProvider(db_session, timezone="UTC").fetch_special_days(MONDAY)

        assert rule.start_at == datetime(2025, 6, 2, 10, 0)

    def test_unparseable_timestamp(self, db_session):
        db_session.add(SpecialDays(
            id=1, label="Broken", start_date="2025-06-02", is_open=1, start_time="soon",
        ))
        db_session.commit()

        with pytest.raises(StoredDataError):
            SqlAvailabilityProvider(db_session).fetch_special_days(MONDAY)


class TestClockColumns:

    def test_business_hours_may_end_at_midnight(self, db_session):
        row = db_session.get(BusinessHours, 1)
        row.end_time = "24:00:00"
        db_session.commit()

        weekly = SqlAvailabilityProvider(db_session).fetch_weekly_hours(1)

        assert weekly.end_time == "24:00"
        assert weekly.window == TimeWindow(540, 1440)

    def test_holiday_may_end_at_midnight(self, db_session):
        db_session.add(HolidayHours(
            id=1, holiday="Late night", start_md=602, end_md=602, is_open=1,
            start_time="18:00:00", end_time="24:00:00",
        ))
        db_session.commit()

        (rule,) = SqlAvailabilityProvider(db_session).fetch_holidays(MONDAY)

        assert rule.window == TimeWindow(1080, 1440)

    def test_midnight_is_not_a_start_time(self, db_session):
        row = db_session.get(BusinessHours, 1)
        row.start_time = "24:00:00"
        db_session.commit()

        with pytest.raises(StoredDataError):
            SqlAvailabilityProvider(db_session).fetch_weekly_hours(1)


class TestSettings:

    def test_log_level_is_upper_cased(self):
        assert Settings(_env_file=None, log_level="info").log_level == "INFO"
