"""
Schedule calculator: slot enumeration and operating-hours checks.

Everything here ignores bookings. Dates are plain calendar dates; no
timezone conversion happens anywhere, so "2024-01-01" is a Monday for
every caller regardless of where the process runs.
"""

import logging
from dataclasses import dataclass
from typing import Optional, TypedDict

from salon_booking.config import settings
from salon_booking.schemas.branch_schema import WEEKDAYS, Branch, DaySchedule, OperatingHours
from salon_booking.utils import format_time_12h, minutes_to_time, parse_date, time_to_minutes

logger = logging.getLogger(__name__)

# Sunday = 0, matching the calendar index used by the booking screens.
DAYS_SUNDAY_FIRST: list[str] = [
    "sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday",
]


@dataclass(frozen=True)
class TimeValidation:
    """Outcome of checking one time against a branch's operating hours."""

    is_valid: bool
    message: str


class FormattedDayHours(TypedDict):
    """Display row for one weekday."""

    day: str
    is_open: bool
    hours: str


def day_of_week(date_string: str) -> str:
    """Map a ``YYYY-MM-DD`` date to its lowercase weekday name."""
    weekday = parse_date(date_string).weekday()  # Monday = 0
    return DAYS_SUNDAY_FIRST[(weekday + 1) % 7]


def enumerate_slots(
    day_schedule: Optional[DaySchedule], slot_duration_minutes: Optional[int] = None
) -> list[str]:
    """
    List every slot start time for a day, ignoring bookings.

    Slots start at ``open`` and step by ``slot_duration_minutes`` while the
    start is strictly before ``close``. A slot starting at ``close`` is not
    offered, but the last slot's service may still run past closing.
    """
    if slot_duration_minutes is None:
        slot_duration_minutes = settings.scheduling.default_slot_minutes
    if slot_duration_minutes <= 0:
        raise ValueError(f"slot_duration_minutes must be > 0, got {slot_duration_minutes}")

    if day_schedule is None or not day_schedule.is_open:
        return []

    open_minutes = time_to_minutes(day_schedule.open)
    close_minutes = time_to_minutes(day_schedule.close)
    return [
        minutes_to_time(minutes)
        for minutes in range(open_minutes, close_minutes, slot_duration_minutes)
    ]


def get_day_schedule(
    operating_hours: Optional[OperatingHours], date_string: str
) -> Optional[DaySchedule]:
    """Return the schedule that applies on ``date_string``, if any."""
    if operating_hours is None:
        return None
    return operating_hours.for_day(day_of_week(date_string))


def is_branch_open_on_day(operating_hours: Optional[OperatingHours], day: str) -> bool:
    if operating_hours is None:
        return False
    schedule = operating_hours.for_day(day)
    return schedule is not None and schedule.is_open


def is_time_within_operating_hours(
    operating_hours: Optional[OperatingHours], day: str, time: str
) -> bool:
    """Check ``open <= time <= close`` on ``day``. Closed days never match."""
    if not is_branch_open_on_day(operating_hours, day):
        return False
    schedule = operating_hours.for_day(day)  # type: ignore[union-attr]
    minutes = time_to_minutes(time)
    return time_to_minutes(schedule.open) <= minutes <= time_to_minutes(schedule.close)


def validate_appointment_time(
    branch: Optional[Branch], appointment_date: str, appointment_time: str
) -> TimeValidation:
    """Check a prospective date and time against the branch's operating hours."""
    if branch is None or branch.operating_hours is None:
        return TimeValidation(False, "Branch operating hours not available")

    day = day_of_week(appointment_date)
    day_name = day.capitalize()

    if not is_branch_open_on_day(branch.operating_hours, day):
        logger.debug("Branch %s closed on %s", branch.id, day)
        return TimeValidation(False, f"Branch is closed on {day_name}")

    if not is_time_within_operating_hours(branch.operating_hours, day, appointment_time):
        schedule = branch.operating_hours.for_day(day)
        return TimeValidation(
            False,
            f"Appointment time must be between {schedule.open} and {schedule.close} "
            f"on {day_name}",
        )

    return TimeValidation(True, "Appointment time is valid")


def get_formatted_operating_hours(
    operating_hours: Optional[OperatingHours],
) -> list[FormattedDayHours]:
    """Build Monday-first display rows such as ``9:00 AM - 6:00 PM`` or ``Closed``."""
    if operating_hours is None:
        return []

    rows: list[FormattedDayHours] = []
    for day in WEEKDAYS:
        schedule = operating_hours.for_day(day)
        is_open = bool(schedule and schedule.is_open)
        hours = (
            f"{format_time_12h(schedule.open)} - {format_time_12h(schedule.close)}"
            if is_open
            else "Closed"
        )
        rows.append({"day": day.capitalize(), "is_open": is_open, "hours": hours})
    return rows
