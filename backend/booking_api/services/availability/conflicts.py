# backend/booking_api/services/availability/conflicts.py
"""
Appointment conflict checks. Intervals are half-open, so back-to-back
bookings (one ends at 10:00, next starts at 10:00) never conflict.
"""

from .domain import Appointment
from .intervals import overlaps


def filter_conflicts(
    slots: list[int],
    slot_minutes: int,
    appointments: list[Appointment],
) -> list[int]:
    """Drop slots whose [t, t + slot_minutes) overlaps any appointment. Order kept."""
    if not appointments:
        return list(slots)

    booked = [a.interval for a in appointments]
    return [
        t
        for t in slots
        if not any(overlaps(t, t + slot_minutes, b.start, b.end) for b in booked)
    ]


def find_conflict(
    start: int,
    duration_minutes: int,
    appointments: list[Appointment],
) -> Appointment | None:
    """First appointment overlapping [start, start + duration), or None."""
    end = start + duration_minutes
    for appointment in appointments:
        booked = appointment.interval
        if overlaps(start, end, booked.start, booked.end):
            return appointment
    return None
