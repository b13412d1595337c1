from .tables import Appointments, Base, BusinessHours, HolidayHours, Services, SpecialDays

__all__ = ["Appointments", "Base", "BusinessHours", "HolidayHours", "Services", "SpecialDays"]
