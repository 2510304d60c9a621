"""Weekly staff roster lookups used when offering stylists for a day."""

import logging
from typing import Optional, Sequence, TypedDict

from salon_booking.config import settings
from salon_booking.schemas.branch_schema import StaffMember, StaffSchedule
from salon_booking.utils import minutes_to_time, time_to_minutes

logger = logging.getLogger(__name__)


class ShiftSlot(TypedDict):
    """A slot inside an employee's shift."""

    start: str
    end: str
    duration: int


def _same_day(left: str, right: str) -> bool:
    return left.strip().lower() == right.strip().lower()


def get_staff_availability(
    schedules: Sequence[StaffSchedule], employee_id: str, day: str
) -> Optional[StaffSchedule]:
    """Return the employee's roster entry for ``day``, or None if not rostered."""
    for schedule in schedules:
        if schedule.employee_id == employee_id and _same_day(schedule.day_of_week, day):
            return schedule
    return None


def is_staff_available(
    schedules: Sequence[StaffSchedule], employee_id: str, day: str
) -> bool:
    return get_staff_availability(schedules, employee_id, day) is not None


def get_available_staff_for_day(
    schedules: Sequence[StaffSchedule], staff: Sequence[StaffMember], day: str
) -> list[StaffMember]:
    """Filter ``staff`` down to members rostered on ``day``."""
    return [
        member
        for member in staff
        if member.key and is_staff_available(schedules, member.key, day)
    ]


def is_staff_available_at_time(
    schedules: Sequence[StaffSchedule], employee_id: str, day: str, time: str
) -> bool:
    """True when ``time`` falls inside the shift, both ends inclusive."""
    shift = get_staff_availability(schedules, employee_id, day)
    if shift is None:
        return False
    minutes = time_to_minutes(time)
    return time_to_minutes(shift.start_time) <= minutes <= time_to_minutes(shift.end_time)


def get_staff_time_slots(
    schedules: Sequence[StaffSchedule],
    employee_id: str,
    day: str,
    slot_duration_minutes: Optional[int] = None,
) -> list[ShiftSlot]:
    """
    Split an employee's shift into slots.

    The last slot ends at the shift end even when that makes it shorter;
    ``duration`` still reports the nominal slot length.
    """
    if slot_duration_minutes is None:
        slot_duration_minutes = settings.scheduling.default_slot_minutes
    if slot_duration_minutes <= 0:
        raise ValueError(f"slot_duration_minutes must be > 0, got {slot_duration_minutes}")

    shift = get_staff_availability(schedules, employee_id, day)
    if shift is None:
        logger.debug("Employee %s not rostered on %s", employee_id, day)
        return []

    start = time_to_minutes(shift.start_time)
    end = time_to_minutes(shift.end_time)
    return [
        {
            "start": minutes_to_time(minutes),
            "end": minutes_to_time(min(minutes + slot_duration_minutes, end)),
            "duration": slot_duration_minutes,
        }
        for minutes in range(start, end, slot_duration_minutes)
    ]
