# backend/booking_api/services/availability/resolver.py
"""
Override resolution: which rule decides a date's operating window.

Tiers, first match wins:
  1. special days (explicit date ranges)
  2. holidays (annual month/day ranges, wraparound-aware)
  3. weekly business hours

A special day or holiday that is open but carries no explicit window
keeps its label/comment and takes its timing from business hours.
"""

import logging
from datetime import date

from .domain import DayPlan, HolidayRule, SourceKind, SpecialDayRule, WeeklyHours
from .intervals import clip_to_day
from .providers import AvailabilityProvider
from .timeutils import iso_weekday, month_day

logger = logging.getLogger(__name__)


# ── Rule selection ───────────────────────────────────────────────────────


def select_special_day(
    rules: list[SpecialDayRule],
    target_date: date,
) -> SpecialDayRule | None:
    """
    Most specific special day containing target_date.

    Single-day ranges beat multi-day ones, then fewer days, then lower id.
    """
    matching = [r for r in rules if r.date_range.contains(target_date)]
    if not matching:
        return None
    return min(
        matching,
        key=lambda r: (not r.date_range.is_single_day, r.date_range.days, r.id),
    )


def select_holiday(
    rules: list[HolidayRule],
    target_date: date,
) -> HolidayRule | None:
    """Holiday containing target_date's month/day; single-day first, then lower id."""
    md = month_day(target_date)
    matching = [r for r in rules if r.md_range.contains(md)]
    if not matching:
        return None
    return min(matching, key=lambda r: (not r.md_range.is_single_day, r.id))


# ── Tiers ────────────────────────────────────────────────────────────────


def resolve_weekly(weekly: WeeklyHours | None) -> DayPlan:
    """Tier 3. Always produces a plan."""
    if weekly is None:
        return DayPlan.closed(SourceKind.NONE)
    if not weekly.is_open or weekly.window is None:
        return DayPlan.closed(SourceKind.BUSINESS_HOURS)
    return DayPlan.opened(weekly.window, SourceKind.BUSINESS_HOURS)


def _defer_to_weekly(
    weekly: WeeklyHours | None,
    source_kind: SourceKind,
    label: str | None,
    comment: str | None,
) -> DayPlan:
    """Override metadata, business-hours timing."""
    base = resolve_weekly(weekly)
    if not base.is_open:
        return DayPlan.closed(source_kind, label, comment)
    return DayPlan.opened(base.window, source_kind, label, comment)


def resolve_special_day(
    rules: list[SpecialDayRule],
    target_date: date,
    weekly: WeeklyHours | None,
) -> DayPlan | None:
    """Tier 1."""
    rule = select_special_day(rules, target_date)
    if rule is None:
        return None

    kind = SourceKind.SPECIAL_DAY
    if not rule.is_open:
        return DayPlan.closed(kind, rule.label, rule.comment)

    if rule.has_timestamps:
        window = clip_to_day(rule.start_at, rule.end_at, target_date)
        if window is None:
            return DayPlan.closed(kind, rule.label, rule.comment)
        return DayPlan.opened(window, kind, rule.label, rule.comment)

    return _defer_to_weekly(weekly, kind, rule.label, rule.comment)


def resolve_holiday(
    rules: list[HolidayRule],
    target_date: date,
    weekly: WeeklyHours | None,
) -> DayPlan | None:
    """Tier 2."""
    rule = select_holiday(rules, target_date)
    if rule is None:
        return None

    kind = SourceKind.HOLIDAY
    if not rule.is_open:
        return DayPlan.closed(kind, rule.label, rule.comment)

    window = rule.window
    if window is not None:
        return DayPlan.opened(window, kind, rule.label, rule.comment)

    return _defer_to_weekly(weekly, kind, rule.label, rule.comment)


def resolve_day_plan(provider: AvailabilityProvider, target_date: date) -> DayPlan:
    """
    Resolve the single authoritative DayPlan for target_date.

    Holidays are only fetched when no special day matched.
    """
    weekly = provider.fetch_weekly_hours(iso_weekday(target_date))

    plan = (
        resolve_special_day(provider.fetch_special_days(target_date), target_date, weekly)
        or resolve_holiday(provider.fetch_holidays(target_date), target_date, weekly)
        or resolve_weekly(weekly)
    )
    logger.debug(f"Day plan for {target_date}: {plan}")
    return plan
