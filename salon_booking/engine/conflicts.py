"""
Conflict detector and schedule-aware availability.

Given a snapshot of existing appointments, decides whether a
(branch, date, time[, stylist]) slot is already taken and which slots of a
day are still free. The snapshot is supplied by the caller and is never
modified here.

Usage:
    result = check_time_slot_conflict(appointments, "b1", "2024-01-01", "10:00")
    if result.has_conflict:
        ...
"""

from dataclasses import dataclass, field
from typing import Optional, Sequence

from salon_booking.engine.schedule import enumerate_slots, get_day_schedule
from salon_booking.logging_context import get_request_logger
from salon_booking.schemas.appointment_schema import (
    ACTIVE_STATUSES,
    TERMINAL_STATUSES,
    Appointment,
    AppointmentStatus,
)
from salon_booking.schemas.branch_schema import OperatingHours

logger = get_request_logger(__name__)

_KNOWN_STATUSES = frozenset(s.value for s in AppointmentStatus)


@dataclass(frozen=True)
class ConflictResult:
    """Active appointments occupying a candidate slot, in input order."""

    conflicts: list[Appointment] = field(default_factory=list)

    @property
    def has_conflict(self) -> bool:
        return len(self.conflicts) > 0

    @property
    def conflict_count(self) -> int:
        return len(self.conflicts)


def _occupies_slot(
    appointment: Appointment,
    branch_id: Optional[str],
    appointment_date: str,
    appointment_time: str,
    stylist_id: Optional[str],
    exclude_appointment_id: Optional[str],
) -> bool:
    if exclude_appointment_id and appointment.id == exclude_appointment_id:
        return False
    # branch_id=None means a branch-agnostic (stylist-wide) check.
    if branch_id is not None and appointment.branch_id != branch_id:
        return False
    if appointment.appointment_date != appointment_date:
        return False
    if appointment.appointment_time != appointment_time:
        return False
    if stylist_id and not appointment.has_stylist(stylist_id):
        return False
    if appointment.status not in ACTIVE_STATUSES:
        if appointment.status in _KNOWN_STATUSES and appointment.status not in TERMINAL_STATUSES:
            logger.debug(
                "Appointment %s has status '%s', which does not block slots",
                appointment.id, appointment.status,
            )
        return False
    return True


def check_time_slot_conflict(
    existing_appointments: Sequence[Appointment],
    branch_id: Optional[str],
    appointment_date: str,
    appointment_time: str,
    stylist_id: Optional[str] = None,
    exclude_appointment_id: Optional[str] = None,
) -> ConflictResult:
    """
    Find active appointments already holding a slot.

    Args:
        existing_appointments: Snapshot of appointments to check against.
        branch_id: Branch to restrict to, or None to check across all branches.
        appointment_date: ``YYYY-MM-DD``.
        appointment_time: ``HH:MM`` slot start.
        stylist_id: When given, only appointments using this stylist count.
        exclude_appointment_id: Appointment being edited; never conflicts with itself.

    Returns:
        A ConflictResult listing every conflicting appointment.
    """
    conflicts = [
        appointment
        for appointment in existing_appointments
        if _occupies_slot(
            appointment,
            branch_id,
            appointment_date,
            appointment_time,
            stylist_id,
            exclude_appointment_id,
        )
    ]
    return ConflictResult(conflicts=conflicts)


def get_available_time_slots(
    existing_appointments: Sequence[Appointment],
    operating_hours: Optional[OperatingHours],
    branch_id: Optional[str],
    appointment_date: str,
    stylist_id: Optional[str] = None,
    exclude_appointment_id: Optional[str] = None,
    slot_duration_minutes: Optional[int] = None,
) -> list[str]:
    """Return the day's slots, in chronological order, that nobody holds yet."""
    day_schedule = get_day_schedule(operating_hours, appointment_date)
    all_slots = enumerate_slots(day_schedule, slot_duration_minutes)

    available = [
        slot
        for slot in all_slots
        if not check_time_slot_conflict(
            existing_appointments,
            branch_id,
            appointment_date,
            slot,
            stylist_id,
            exclude_appointment_id,
        ).has_conflict
    ]
    logger.debug(
        "%d of %d slots free on %s (branch=%s, stylist=%s)",
        len(available), len(all_slots), appointment_date, branch_id, stylist_id,
    )
    return available


def is_stylist_available(
    existing_appointments: Sequence[Appointment],
    stylist_id: str,
    appointment_date: str,
    appointment_time: str,
    exclude_appointment_id: Optional[str] = None,
) -> bool:
    """A stylist is busy if any branch has them booked at that date and time."""
    return not check_time_slot_conflict(
        existing_appointments,
        None,
        appointment_date,
        appointment_time,
        stylist_id,
        exclude_appointment_id,
    ).has_conflict


def get_stylist_available_slots(
    existing_appointments: Sequence[Appointment],
    stylist_id: str,
    appointment_date: str,
    operating_hours: Optional[OperatingHours],
    exclude_appointment_id: Optional[str] = None,
    slot_duration_minutes: Optional[int] = None,
) -> list[str]:
    """Free slots for one stylist, checked across every branch."""
    return get_available_time_slots(
        existing_appointments,
        operating_hours,
        None,
        appointment_date,
        stylist_id,
        exclude_appointment_id,
        slot_duration_minutes,
    )
