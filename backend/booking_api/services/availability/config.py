# backend/booking_api/services/availability/config.py
"""
Availability engine configuration.
"""

from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class AvailabilityConfig:
    """
    Configuration for availability resolution.

    Attributes:
        min_slot_minutes: Smallest slot size; smaller requests are clamped at the HTTP edge
        default_slot_minutes: Slot size when the caller sends none
        plan_cache_ttl_seconds: Redis TTL for resolved day plans
        timezone: IANA business zone for stored timestamps with an offset
    """
    min_slot_minutes: int = 5
    default_slot_minutes: int = 30
    plan_cache_ttl_seconds: int = 300
    timezone: str | None = None

    def __post_init__(self):
        """Validate configuration."""
        if self.min_slot_minutes < 1:
            raise ValueError(f"min_slot_minutes must be positive, got {self.min_slot_minutes}")
        if self.default_slot_minutes < self.min_slot_minutes:
            raise ValueError(
                f"default_slot_minutes ({self.default_slot_minutes}) "
                f"is below min_slot_minutes ({self.min_slot_minutes})"
            )

    def clamp_slot_minutes(self, slot_minutes: int) -> int:
        return max(self.min_slot_minutes, slot_minutes)


@lru_cache
def get_availability_config() -> AvailabilityConfig:
    """Availability configuration built from application settings (singleton)."""
    from ...config import settings

    return AvailabilityConfig(
        min_slot_minutes=settings.min_slot_minutes,
        default_slot_minutes=settings.default_slot_minutes,
        plan_cache_ttl_seconds=settings.plan_cache_ttl_seconds,
        timezone=settings.timezone,
    )
