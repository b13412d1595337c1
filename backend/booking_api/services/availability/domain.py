# backend/booking_api/services/availability/domain.py
"""
Immutable records the availability engine works on.

Rule records are snapshots handed over by a provider; the engine never
mutates them. DayPlan is the tagged result of override resolution.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from .intervals import DateRange, MonthDayRange, TimeWindow
from .timeutils import time_str_to_minutes


class SourceKind(str, Enum):
    SPECIAL_DAY = "special_day"
    HOLIDAY = "holiday"
    BUSINESS_HOURS = "business_hours"
    NONE = "none"


@dataclass(frozen=True)
class SpecialDayRule:
    """One-off override for an explicit date range."""
    id: int
    start_date: date
    is_open: bool
    end_date: date | None = None
    start_at: datetime | None = None
    end_at: datetime | None = None
    label: str | None = None
    comment: str | None = None

    @property
    def date_range(self) -> DateRange:
        return DateRange(self.start_date, self.end_date or self.start_date)

    @property
    def has_timestamps(self) -> bool:
        return self.start_at is not None and self.end_at is not None


@dataclass(frozen=True)
class HolidayRule:
    """Annually recurring override keyed by month/day."""
    id: int
    start_month: int
    start_day: int
    end_month: int
    end_day: int
    is_open: bool
    start_time: str | None = None
    end_time: str | None = None
    label: str | None = None
    comment: str | None = None

    @property
    def md_range(self) -> MonthDayRange:
        return MonthDayRange.from_parts(
            self.start_month, self.start_day, self.end_month, self.end_day
        )

    @property
    def window(self) -> TimeWindow | None:
        if not self.start_time or not self.end_time:
            return None
        return TimeWindow.from_clock(self.start_time, self.end_time)


@dataclass(frozen=True)
class WeeklyHours:
    week_day: int  # Monday = 1 ... Sunday = 7
    is_open: bool
    start_time: str | None = None
    end_time: str | None = None

    @property
    def window(self) -> TimeWindow | None:
        if not self.start_time or not self.end_time:
            return None
        return TimeWindow.from_clock(self.start_time, self.end_time)


@dataclass(frozen=True)
class Appointment:
    date: date
    time: str
    duration_minutes: int
    id: int | None = None

    @property
    def interval(self) -> TimeWindow:
        start = time_str_to_minutes(self.time)
        return TimeWindow(start, start + max(self.duration_minutes, 0))


@dataclass(frozen=True)
class DayPlan:
    """
    Resolved operating status for one date.

    window is set iff the day is open; source_kind tells which override
    tier decided the day.
    """
    is_open: bool
    source_kind: SourceKind
    window: TimeWindow | None = None
    label: str | None = None
    comment: str | None = None

    def __post_init__(self):
        if self.is_open and (self.window is None or self.window.is_empty):
            raise ValueError("open DayPlan requires a non-empty window")
        if not self.is_open and self.window is not None:
            raise ValueError("closed DayPlan cannot carry a window")

    @classmethod
    def closed(
        cls,
        source_kind: SourceKind = SourceKind.NONE,
        label: str | None = None,
        comment: str | None = None,
    ) -> "DayPlan":
        return cls(False, source_kind, None, label, comment)

    @classmethod
    def opened(
        cls,
        window: TimeWindow,
        source_kind: SourceKind,
        label: str | None = None,
        comment: str | None = None,
    ) -> "DayPlan":
        if window.is_empty:
            return cls.closed(source_kind, label, comment)
        return cls(True, source_kind, window, label, comment)

    @property
    def is_open_override(self) -> bool:
        return self.source_kind in (SourceKind.SPECIAL_DAY, SourceKind.HOLIDAY)

    def to_dict(self) -> dict:
        return {
            "is_open": self.is_open,
            "source_kind": self.source_kind.value,
            "window": [self.window.start, self.window.end] if self.window else None,
            "label": self.label,
            "comment": self.comment,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DayPlan":
        window = data.get("window")
        return cls(
            is_open=bool(data["is_open"]),
            source_kind=SourceKind(data["source_kind"]),
            window=TimeWindow(window[0], window[1]) if window else None,
            label=data.get("label"),
            comment=data.get("comment"),
        )


@dataclass(frozen=True)
class AvailabilityResult:
    date: date
    slot_minutes: int
    source_kind: SourceKind
    times: tuple[str, ...] = field(default_factory=tuple)
    label: str | None = None
    comment: str | None = None
    is_open_override: bool = False
