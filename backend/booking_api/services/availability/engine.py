# backend/booking_api/services/availability/engine.py
"""
Availability engine.

resolve date → day plan → candidate slots → drop past → drop conflicts.

Pure over its inputs: rules and appointments come from a provider, the
clock comes from the caller.
"""

from datetime import date, datetime
from typing import Callable

from .config import AvailabilityConfig, get_availability_config
from .conflicts import filter_conflicts
from .domain import Appointment, AvailabilityResult, DayPlan, HolidayRule
from .errors import InvalidInput
from .providers import AvailabilityProvider
from .resolver import resolve_day_plan, select_holiday
from .slots import drop_past_slots, generate_slots
from .timeutils import minutes_to_time_str, parse_iso_date


def parse_slot_minutes(
    raw: str | int | None,
    config: AvailabilityConfig | None = None,
) -> int:
    """
    Parse a caller-supplied slot size.

    Missing → default; below the floor → clamped to the floor;
    not an integer → InvalidInput.
    """
    config = config or get_availability_config()
    if raw is None or raw == "":
        return config.default_slot_minutes
    if isinstance(raw, bool):
        raise InvalidInput("slotMinutes must be an integer")
    if isinstance(raw, int):
        value = raw
    else:
        try:
            value = int(str(raw).strip())
        except ValueError:
            raise InvalidInput("slotMinutes must be an integer")
    return config.clamp_slot_minutes(value)


def validate_request(
    target_date: str | date,
    slot_minutes: int,
    config: AvailabilityConfig | None = None,
) -> tuple[date, int]:
    """Check date and slot size before anything is computed."""
    config = config or get_availability_config()
    day = parse_iso_date(target_date)
    if isinstance(slot_minutes, bool) or not isinstance(slot_minutes, int):
        raise InvalidInput("slotMinutes must be an integer")
    if slot_minutes < config.min_slot_minutes:
        raise InvalidInput(f"slotMinutes must be at least {config.min_slot_minutes}")
    return day, slot_minutes


def availability_for_plan(
    plan: DayPlan,
    target_date: date,
    slot_minutes: int,
    fetch_appointments: Callable[[date], list[Appointment]],
    now: datetime,
) -> AvailabilityResult:
    """
    Slots for an already-resolved day plan.

    Appointments are only fetched when the day still has candidate slots.
    """
    times: tuple[str, ...] = ()

    if plan.is_open:
        candidates = generate_slots(plan.window, slot_minutes)
        candidates = drop_past_slots(candidates, target_date, now)
        if candidates:
            free = filter_conflicts(
                candidates, slot_minutes, fetch_appointments(target_date)
            )
            times = tuple(minutes_to_time_str(t) for t in free)

    return AvailabilityResult(
        date=target_date,
        slot_minutes=slot_minutes,
        source_kind=plan.source_kind,
        times=times,
        label=plan.label,
        comment=plan.comment,
        is_open_override=plan.is_open_override,
    )


def resolve_availability(
    target_date: str | date,
    slot_minutes: int,
    provider: AvailabilityProvider,
    now: datetime,
    config: AvailabilityConfig | None = None,
) -> AvailabilityResult:
    """
    Bookable start times for target_date.

    Raises:
        InvalidInput: malformed date or slot size below the floor.
    """
    day, slot_minutes = validate_request(target_date, slot_minutes, config)
    plan = resolve_day_plan(provider, day)
    return availability_for_plan(plan, day, slot_minutes, provider.fetch_appointments, now)


def holiday_info(
    target_date: str | date,
    provider: AvailabilityProvider,
) -> HolidayRule | None:
    """Holiday rule governing target_date's month/day, ignoring special days."""
    day = parse_iso_date(target_date)
    return select_holiday(provider.fetch_holidays(day), day)
