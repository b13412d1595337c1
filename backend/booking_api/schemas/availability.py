"""
Pydantic schemas for availability API.
"""

from datetime import date
from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ..services.availability import AvailabilityResult, HolidayRule


class AvailabilityResponse(BaseModel):
    """Bookable start times for one date, serialized in camelCase."""
    date: date
    slot_minutes: int
    times: list[str]  # "HH:MM", ascending

    # Which override tier decided the day
    source_kind: str
    holiday_label: Optional[str] = None
    holiday_comment: Optional[str] = None
    is_open_override: bool

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_result(cls, result: AvailabilityResult) -> "AvailabilityResponse":
        return cls(
            date=result.date,
            slot_minutes=result.slot_minutes,
            times=list(result.times),
            source_kind=result.source_kind.value,
            holiday_label=result.label,
            holiday_comment=result.comment,
            is_open_override=result.is_open_override,
        )


class HolidayInfoResponse(BaseModel):
    """Holiday rule governing a date, if any."""
    exists: bool
    holiday: Optional[str] = None
    comment: Optional[str] = None
    is_open: Optional[bool] = None
    start_time: Optional[str] = None  # "HH:MM"
    end_time: Optional[str] = None

    @classmethod
    def from_rule(cls, rule: HolidayRule | None) -> "HolidayInfoResponse":
        if rule is None:
            return cls(exists=False)
        return cls(
            exists=True,
            holiday=rule.label,
            comment=rule.comment,
            is_open=rule.is_open,
            start_time=rule.start_time,
            end_time=rule.end_time,
        )


class PlanCacheInvalidateResponse(BaseModel):
    deleted_keys: int
    dates: list[date] | str  # "all" when no range was given
