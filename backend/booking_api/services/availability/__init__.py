# backend/booking_api/services/availability/__init__.py
"""
Availability resolution.

Override tiers (special days → holidays → business hours) decide the day's
window; slots are generated in it and filtered against appointments.
"""

from .config import AvailabilityConfig, get_availability_config
from .domain import (
    Appointment,
    AvailabilityResult,
    DayPlan,
    HolidayRule,
    SourceKind,
    SpecialDayRule,
    WeeklyHours,
)
from .engine import holiday_info, parse_slot_minutes, resolve_availability
from .errors import AvailabilityError, BookingConflict, InvalidInput, StoredDataError
from .providers import AvailabilityProvider, SnapshotProvider, SqlAvailabilityProvider
from .resolver import resolve_day_plan

__all__ = [
    "AvailabilityConfig",
    "get_availability_config",
    "Appointment",
    "AvailabilityResult",
    "DayPlan",
    "HolidayRule",
    "SourceKind",
    "SpecialDayRule",
    "WeeklyHours",
    "holiday_info",
    "parse_slot_minutes",
    "resolve_availability",
    "AvailabilityError",
    "BookingConflict",
    "InvalidInput",
    "StoredDataError",
    "AvailabilityProvider",
    "SnapshotProvider",
    "SqlAvailabilityProvider",
    "resolve_day_plan",
]
