# backend/booking_api/services/availability/errors.py


class AvailabilityError(Exception):
    """Base error for the availability engine."""


class InvalidInput(AvailabilityError):
    """Malformed date, clock time or slot size supplied by the caller."""


class BookingConflict(AvailabilityError):
    """Requested appointment overlaps an existing one."""


class StoredDataError(AvailabilityError):
    """A stored rule or appointment row holds a value that cannot be parsed."""
