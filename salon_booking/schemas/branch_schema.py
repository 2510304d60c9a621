"""Branch, operating-hours, and staff roster data models."""

from typing import Optional

from pydantic import field_validator, model_validator

from salon_booking.schemas.store_model import StoreModel
from salon_booking.utils import is_valid_time, time_to_minutes

WEEKDAYS: list[str] = [
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
]


class DaySchedule(StoreModel):
    """Opening window for one weekday."""

    is_open: bool = False
    open: str = "09:00"
    close: str = "18:00"

    @field_validator("open", "close", mode="before")
    @classmethod
    def missing_time_as_blank(cls, value: Optional[str]) -> str:
        return "" if value is None else value

    @model_validator(mode="after")
    def check_window(self) -> "DaySchedule":
        # Times on a closed day are never read, so they are kept as stored.
        if not self.is_open:
            return self
        for value in (self.open, self.close):
            if not is_valid_time(value):
                raise ValueError(f"time must be HH:MM, got {value!r}")
        self.open = self.open.strip()
        self.close = self.close.strip()
        if time_to_minutes(self.close) <= time_to_minutes(self.open):
            raise ValueError(
                f"close ({self.close}) must be after open ({self.open}) on an open day"
            )
        return self


class OperatingHours(StoreModel):
    """Weekly operating hours keyed by lowercase weekday name."""

    monday: Optional[DaySchedule] = None
    tuesday: Optional[DaySchedule] = None
    wednesday: Optional[DaySchedule] = None
    thursday: Optional[DaySchedule] = None
    friday: Optional[DaySchedule] = None
    saturday: Optional[DaySchedule] = None
    sunday: Optional[DaySchedule] = None

    def for_day(self, day: str) -> Optional[DaySchedule]:
        """Return the schedule for ``day``, or None when not configured."""
        day = day.lower()
        if day not in WEEKDAYS:
            return None
        return getattr(self, day)


class Branch(StoreModel):
    """A salon branch as read from storage."""

    id: str
    name: str = ""
    operating_hours: Optional[OperatingHours] = None


class StaffSchedule(StoreModel):
    """One weekly roster entry: an employee's shift on a named weekday."""

    employee_id: str
    day_of_week: str
    start_time: str
    end_time: str

    @field_validator("start_time", "end_time")
    @classmethod
    def check_time_format(cls, value: str) -> str:
        if not is_valid_time(value):
            raise ValueError(f"time must be HH:MM, got {value!r}")
        return value.strip()


class StaffMember(StoreModel):
    """Minimal staff record. Older documents carry ``uid``, newer ones ``id``."""

    id: Optional[str] = None
    uid: Optional[str] = None
    name: str = ""

    @property
    def key(self) -> Optional[str]:
        return self.uid or self.id
