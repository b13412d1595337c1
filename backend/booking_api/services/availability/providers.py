# backend/booking_api/services/availability/providers.py
"""
Read-only data providers for the availability engine.

The engine only sees the AvailabilityProvider protocol:
✓ SqlAvailabilityProvider: reads the SQL tables through a Session
✓ SnapshotProvider: immutable in-memory snapshot
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Protocol
from zoneinfo import ZoneInfo

from sqlalchemy import and_, func, or_
from sqlalchemy.orm import Session

from .domain import Appointment, HolidayRule, SpecialDayRule, WeeklyHours
from .errors import StoredDataError
from .timeutils import month_day, normalize_end_time, normalize_time


class AvailabilityProvider(Protocol):
    def fetch_special_days(self, target_date: date) -> list[SpecialDayRule]: ...

    def fetch_holidays(self, target_date: date) -> list[HolidayRule]: ...

    def fetch_weekly_hours(self, weekday: int) -> WeeklyHours | None: ...

    def fetch_appointments(self, target_date: date) -> list[Appointment]: ...


# ── SQL ──────────────────────────────────────────────────────────────────


class SqlAvailabilityProvider:
    """
    Provider backed by a SQLAlchemy session (one per request).

    timezone names the business zone that offset-carrying special-day
    timestamps are converted to.
    """

    def __init__(self, db: Session, timezone: str | None = None):
        self.db = db
        self.timezone = timezone

    def fetch_special_days(self, target_date: date) -> list[SpecialDayRule]:
        from ...models.tables import SpecialDays

        date_str = target_date.isoformat()
        end_date = func.coalesce(SpecialDays.end_date, SpecialDays.start_date)

        rows = (
            self.db.query(SpecialDays)
            .filter(
                SpecialDays.start_date <= date_str,
                end_date >= date_str,
            )
            .order_by(SpecialDays.id)
            .all()
        )
        return [special_day_from_row(r, self.timezone) for r in rows]

    def fetch_holidays(self, target_date: date) -> list[HolidayRule]:
        from ...models.tables import HolidayHours

        md = month_day(target_date)
        start_md, end_md = HolidayHours.start_md, HolidayHours.end_md

        rows = (
            self.db.query(HolidayHours)
            .filter(
                or_(
                    and_(start_md <= end_md, start_md <= md, end_md >= md),
                    and_(start_md > end_md, or_(start_md <= md, end_md >= md)),
                )
            )
            .order_by(HolidayHours.id)
            .all()
        )
        return [holiday_from_row(r) for r in rows]

    def fetch_weekly_hours(self, weekday: int) -> WeeklyHours | None:
        from ...models.tables import BusinessHours

        row = (
            self.db.query(BusinessHours)
            .filter(BusinessHours.week_day == weekday)
            .first()
        )
        return weekly_from_row(row) if row else None

    def fetch_appointments(self, target_date: date) -> list[Appointment]:
        from ...models.tables import Appointments

        rows = (
            self.db.query(Appointments)
            .filter(Appointments.date == target_date.isoformat())
            .order_by(Appointments.time)
            .all()
        )
        return [appointment_from_row(r) for r in rows]


# ── Row mappers ──────────────────────────────────────────────────────────


def _parse_date(value, column: str) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        raise StoredDataError(f"{column}: invalid date {value!r}")


def _parse_timestamp(value, column: str, timezone: str | None = None) -> datetime | None:
    """
    Parse a stored timestamp into naive business wall-clock time.

    Values carrying an offset are converted to `timezone` (system local
    time when None) before the offset is dropped.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value))
        except ValueError:
            raise StoredDataError(f"{column}: invalid timestamp {value!r}")

    if parsed.tzinfo is not None:
        zone = ZoneInfo(timezone) if timezone else None
        parsed = parsed.astimezone(zone).replace(tzinfo=None)
    return parsed


def _parse_time(value, column: str, end_of_day: bool = False) -> str | None:
    if value is None or value == "":
        return None
    normalized = normalize_end_time(value) if end_of_day else normalize_time(value)
    if normalized is None:
        raise StoredDataError(f"{column}: invalid time {value!r}")
    return normalized


def special_day_from_row(row, timezone: str | None = None) -> SpecialDayRule:
    return SpecialDayRule(
        id=row.id,
        start_date=_parse_date(row.start_date, "special_days.start_date"),
        end_date=_parse_date(row.end_date, "special_days.end_date"),
        is_open=bool(row.is_open),
        start_at=_parse_timestamp(row.start_time, "special_days.start_time", timezone),
        end_at=_parse_timestamp(row.end_time, "special_days.end_time", timezone),
        label=row.label,
        comment=row.comment,
    )


def holiday_from_row(row) -> HolidayRule:
    start_month, start_day = divmod(int(row.start_md), 100)
    end_month, end_day = divmod(int(row.end_md), 100)
    return HolidayRule(
        id=row.id,
        start_month=start_month,
        start_day=start_day,
        end_month=end_month,
        end_day=end_day,
        is_open=bool(row.is_open),
        start_time=_parse_time(row.start_time, "holiday_hours.start_time"),
        end_time=_parse_time(row.end_time, "holiday_hours.end_time", end_of_day=True),
        label=row.holiday,
        comment=row.comment,
    )


def weekly_from_row(row) -> WeeklyHours:
    return WeeklyHours(
        week_day=row.week_day,
        is_open=bool(row.is_open),
        start_time=_parse_time(row.start_time, "business_hours.start_time"),
        end_time=_parse_time(row.end_time, "business_hours.end_time", end_of_day=True),
    )


def appointment_from_row(row) -> Appointment:
    return Appointment(
        id=row.id,
        date=_parse_date(row.date, "appointments.date"),
        time=_parse_time(row.time, "appointments.time"),
        duration_minutes=int(row.duration or 0),
    )


# ── Snapshot ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class SnapshotProvider:
    """Immutable in-memory rule/booking snapshot."""
    special_days: tuple[SpecialDayRule, ...] = field(default_factory=tuple)
    holidays: tuple[HolidayRule, ...] = field(default_factory=tuple)
    weekly_hours: tuple[WeeklyHours, ...] = field(default_factory=tuple)
    appointments: tuple[Appointment, ...] = field(default_factory=tuple)

    def fetch_special_days(self, target_date: date) -> list[SpecialDayRule]:
        return [r for r in self.special_days if r.date_range.contains(target_date)]

    def fetch_holidays(self, target_date: date) -> list[HolidayRule]:
        md = month_day(target_date)
        return [r for r in self.holidays if r.md_range.contains(md)]

    def fetch_weekly_hours(self, weekday: int) -> WeeklyHours | None:
        for row in self.weekly_hours:
            if row.week_day == weekday:
                return row
        return None

    def fetch_appointments(self, target_date: date) -> list[Appointment]:
        return sorted(
            (a for a in self.appointments if a.date == target_date),
            key=lambda a: a.time,
        )
