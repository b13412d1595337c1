# backend/booking_api/services/availability/timeutils.py
"""
Clock-time and calendar helpers.

Clock times travel as "HH:MM" strings at the edges and as minutes since
midnight inside the engine.
"""

import re
from datetime import date, datetime

from .errors import InvalidInput


ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
CLOCK_TIME_RE = re.compile(r"^(\d{2}):(\d{2})(?::(\d{2}))?$")
END_OF_DAY_RE = re.compile(r"^24:00(?::00)?$")

MINUTES_PER_DAY = 24 * 60


def is_iso_date(value) -> bool:
    """True for a zero-padded "YYYY-MM-DD" string naming a real date."""
    if not isinstance(value, str) or not ISO_DATE_RE.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def parse_iso_date(value) -> date:
    """Parse a CalendarDate or raise InvalidInput."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not is_iso_date(value):
        raise InvalidInput("date must be YYYY-MM-DD")
    return date.fromisoformat(value)


def normalize_time(value) -> str | None:
    """
    Normalize "HH:MM" or "HH:MM:SS" to "HH:MM".

    Returns None for empty or malformed input.
    """
    if value is None or value == "":
        return None
    match = CLOCK_TIME_RE.match(str(value).strip())
    if not match:
        return None
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        return None
    return f"{hour:02d}:{minute:02d}"


def normalize_end_time(value) -> str | None:
    """Like normalize_time, but also accepts "24:00" as the end of a day."""
    if value is not None and END_OF_DAY_RE.match(str(value).strip()):
        return "24:00"
    return normalize_time(value)


def time_str_to_minutes(value: str, end_of_day: bool = False) -> int:
    """Convert "HH:MM[:SS]" to minutes since midnight ("24:00" allowed as an end)."""
    normalized = normalize_end_time(value) if end_of_day else normalize_time(value)
    if normalized is None:
        raise InvalidInput(f"invalid clock time: {value!r}")
    hour, minute = normalized.split(":")
    return int(hour) * 60 + int(minute)


def minutes_to_time_str(minutes: int) -> str:
    """Convert minutes since midnight to "HH:MM" (1440 renders as "24:00")."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def add_minutes(value: str, minutes: int) -> str:
    return minutes_to_time_str(time_str_to_minutes(value) + minutes)


def iso_weekday(target_date: date) -> int:
    """Monday = 1 ... Sunday = 7."""
    return target_date.isoweekday()


def month_day(target_date: date) -> int:
    """Encode a date's month/day as month*100 + day (e.g. Dec 20 -> 1220)."""
    return target_date.month * 100 + target_date.day


def only_digits(value) -> str:
    return re.sub(r"\D", "", "" if value is None else str(value))


def normalize_nanp_to_10(raw) -> str | None:
    """
    Normalize a North American phone number to its 10 digits.

    "+1 (555) 123-4567" -> "5551234567". Returns None if it cannot be done.
    """
    digits = only_digits(raw)
    if len(digits) == 10:
        return digits
    if len(digits) == 11 and digits.startswith("1"):
        return digits[1:]
    return None
