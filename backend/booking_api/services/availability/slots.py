# backend/booking_api/services/availability/slots.py
"""
Candidate slot generation.

A slot must fit entirely inside the window: no partial trailing slot.
"""

from datetime import date, datetime, time, timedelta

from .intervals import TimeWindow


def generate_slots(window: TimeWindow, slot_minutes: int) -> list[int]:
    """
    Candidate start times (minutes since midnight) inside window.

    Window 09:00-09:50 with 30 min slots → [09:00] only.
    """
    if slot_minutes <= 0 or window.is_empty:
        return []

    slots = []
    t = window.start
    while t + slot_minutes <= window.end:
        slots.append(t)
        t += slot_minutes
    return slots


def drop_past_slots(
    slots: list[int],
    target_date: date,
    now: datetime,
) -> list[int]:
    """
    Keep only slots strictly after now when target_date is today.

    Other dates pass through untouched; now is naive local wall-clock time.
    """
    if target_date != now.date():
        return slots

    day_start = datetime.combine(target_date, time.min)
    return [t for t in slots if day_start + timedelta(minutes=t) > now]
