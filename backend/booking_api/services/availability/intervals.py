# backend/booking_api/services/availability/intervals.py
"""
Interval model.

- TimeWindow: half-open [start, end) in minutes since midnight
- DateRange: inclusive [start, end] calendar dates
- MonthDayRange: annual month/day range, may wrap past Dec 31
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from math import ceil, floor

from .timeutils import MINUTES_PER_DAY, minutes_to_time_str, time_str_to_minutes


def overlaps(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    """Half-open overlap. Touching endpoints (a_end == b_start) do not overlap."""
    return a_start < b_end and a_end > b_start


@dataclass(frozen=True)
class TimeWindow:
    start: int
    end: int

    @classmethod
    def from_clock(cls, start: str, end: str) -> "TimeWindow":
        return cls(time_str_to_minutes(start), time_str_to_minutes(end, end_of_day=True))

    @property
    def is_empty(self) -> bool:
        return self.start >= self.end

    @property
    def start_str(self) -> str:
        return minutes_to_time_str(self.start)

    @property
    def end_str(self) -> str:
        return minutes_to_time_str(self.end)

    def overlaps(self, other: "TimeWindow") -> bool:
        return overlaps(self.start, self.end, other.start, other.end)


@dataclass(frozen=True)
class DateRange:
    start: date
    end: date

    def contains(self, target_date: date) -> bool:
        return self.start <= target_date <= self.end

    @property
    def days(self) -> int:
        """Number of calendar days covered (inclusive)."""
        return (self.end - self.start).days + 1

    @property
    def is_single_day(self) -> bool:
        return self.start == self.end


@dataclass(frozen=True)
class MonthDayRange:
    """
    Annual range keyed by month*100 + day.

    start > end means the range wraps the year boundary
    (1220..105 covers Dec 20 - Jan 5).
    """
    start: int
    end: int

    @classmethod
    def from_parts(
        cls, start_month: int, start_day: int, end_month: int, end_day: int
    ) -> "MonthDayRange":
        return cls(start_month * 100 + start_day, end_month * 100 + end_day)

    @property
    def wraps(self) -> bool:
        return self.start > self.end

    @property
    def is_single_day(self) -> bool:
        return self.start == self.end

    def contains(self, md: int) -> bool:
        if self.wraps:
            return md >= self.start or md <= self.end
        return self.start <= md <= self.end


def clip_to_day(
    start_at: datetime,
    end_at: datetime,
    target_date: date,
) -> TimeWindow | None:
    """
    Intersect a timestamp window with target_date's 00:00-24:00 span.

    Returns None when the intersection is empty or inverted. Seconds are
    rounded inward: start up to the next minute, end down.
    """
    day_start = datetime.combine(target_date, time.min)
    day_end = day_start + timedelta(days=1)

    window_start = max(start_at, day_start)
    window_end = min(end_at, day_end)
    if window_start >= window_end:
        return None

    start_min = ceil((window_start - day_start).total_seconds() / 60)
    end_min = floor((window_end - day_start).total_seconds() / 60)
    end_min = min(end_min, MINUTES_PER_DAY)
    if start_min >= end_min:
        return None

    return TimeWindow(start_min, end_min)
