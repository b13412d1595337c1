# backend/booking_api/schemas/appointments.py

from datetime import date as date_type
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from ..services.availability.timeutils import normalize_nanp_to_10, normalize_time

ALLOWED_DURATIONS = (30, 60)


class AppointmentCreate(BaseModel):
    name: str = Field(min_length=1)
    phone_number: Optional[str] = Field(None, alias="phoneNumber")
    email: Optional[str] = None

    date: date_type
    time: str  # "HH:MM" or "HH:MM:SS", stored as HH:MM
    duration: int
    type: str = Field(min_length=1)

    comments: Optional[str] = None

    model_config = {"populate_by_name": True}

    @field_validator("name", "type")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("phone_number")
    @classmethod
    def normalize_phone(cls, v: Optional[str]) -> Optional[str]:
        if v is None or v == "":
            return None
        phone = normalize_nanp_to_10(v)
        if phone is None:
            raise ValueError("Invalid phone number")
        return phone

    @field_validator("time")
    @classmethod
    def normalize_start(cls, v: str) -> str:
        normalized = normalize_time(v)
        if normalized is None:
            raise ValueError("time must be HH:MM")
        return normalized

    @field_validator("duration")
    @classmethod
    def check_duration(cls, v: int) -> int:
        if v not in ALLOWED_DURATIONS:
            raise ValueError("Duration must be 30 or 60 minutes")
        return v


class AppointmentRead(BaseModel):
    id: int

    name: str
    phone_number: Optional[str] = None
    email: Optional[str] = None

    date: str
    time: str
    duration: int
    type: str
    comments: Optional[str] = None

    active: int
    paid: int

    model_config = {"from_attributes": True}
