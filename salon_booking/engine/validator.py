"""
Booking validator: full verdict for a multi-service booking request.

Problems are collected, never short-circuited, so the booking form can
show every error in one pass. The verdict is advisory: it is computed
against a snapshot, and only the persistence layer can guarantee that a
slot is still free at write time.
"""

from dataclasses import dataclass, field
from typing import Optional, Sequence

from salon_booking.engine.conflicts import check_time_slot_conflict
from salon_booking.engine.schedule import validate_appointment_time
from salon_booking.logging_context import get_request_logger
from salon_booking.schemas.appointment_schema import Appointment, BookingCandidate
from salon_booking.schemas.branch_schema import Branch
from salon_booking.utils import is_valid_time, parse_date

logger = get_request_logger(__name__)


@dataclass
class ValidationResult:
    """Outcome of validating a booking candidate."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    conflicts: list[Appointment] = field(default_factory=list)


def validate_appointment_booking(
    candidate: BookingCandidate,
    existing_appointments: Sequence[Appointment],
    exclude_appointment_id: Optional[str] = None,
) -> ValidationResult:
    """
    Check a booking against existing appointments.

    Reports the slot as taken if any active appointment holds the branch
    slot, and adds one error per service line whose stylist is already
    booked at that time. ``conflicts`` carries only the branch-level list.
    """
    branch_id = candidate.branch_id
    appointment_date = candidate.appointment_date
    appointment_time = candidate.appointment_time
    errors: list[str] = []
    warnings: list[str] = []

    time_conflict = check_time_slot_conflict(
        existing_appointments,
        branch_id,
        appointment_date,
        appointment_time,
        None,
        exclude_appointment_id,
    )
    if time_conflict.has_conflict:
        errors.append(f"Time slot {appointment_time} is already booked")

    # "any_available" is checked like any other stylist id, no bypass.
    for pair in candidate.service_stylist_pairs:
        if not pair.stylist_id:
            continue
        stylist_conflict = check_time_slot_conflict(
            existing_appointments,
            branch_id,
            appointment_date,
            appointment_time,
            pair.stylist_id,
            exclude_appointment_id,
        )
        if stylist_conflict.has_conflict:
            errors.append(
                f"Stylist {pair.display_name} is not available at {appointment_time}"
            )

    return ValidationResult(
        is_valid=not errors,
        errors=errors,
        warnings=warnings,
        conflicts=time_conflict.conflicts,
    )


def _is_valid_date(value: str) -> bool:
    try:
        parse_date(value)
    except ValueError:
        return False
    return True


def validate_required_fields(candidate: BookingCandidate) -> list[str]:
    """Return a message for every required booking field that is missing or malformed."""
    errors: list[str] = []

    if not candidate.branch_id:
        errors.append("Please select a branch")

    if not candidate.appointment_date:
        errors.append("Please select an appointment date")
    elif not _is_valid_date(candidate.appointment_date):
        errors.append("Appointment date must be in YYYY-MM-DD format")

    if not candidate.appointment_time:
        errors.append("Please select an appointment time")
    elif not is_valid_time(candidate.appointment_time):
        errors.append("Appointment time must be in HH:MM format")

    if not candidate.service_stylist_pairs:
        errors.append("Please select at least one service")
    elif any(not pair.stylist_id for pair in candidate.service_stylist_pairs):
        errors.append("Please assign a stylist to each selected service")

    return errors


def validate_booking_request(
    candidate: BookingCandidate,
    branch: Optional[Branch],
    existing_appointments: Sequence[Appointment],
    exclude_appointment_id: Optional[str] = None,
) -> ValidationResult:
    """
    Run every pre-submission check on a booking.

    Combines required-field presence, operating-hours validity, and slot
    conflicts. A check is skipped only when the fields it needs are
    missing or malformed, which the required-field errors already report.
    ``branch`` must be the document for ``candidate.branch_id``; when it is
    not, the mismatch is reported and the hours check is skipped, while
    conflicts are still checked against the selected branch.
    """
    errors = validate_required_fields(candidate)
    conflicts: list[Appointment] = []

    branch_mismatch = False
    if branch is not None and candidate.branch_id and branch.id != candidate.branch_id:
        branch_mismatch = True
        errors.append(
            f"Branch {branch.id} does not match the selected branch {candidate.branch_id}"
        )

    has_date = bool(candidate.appointment_date) and _is_valid_date(candidate.appointment_date)
    has_time = bool(candidate.appointment_time) and is_valid_time(candidate.appointment_time)

    if has_date and has_time and not branch_mismatch:
        hours_check = validate_appointment_time(
            branch, candidate.appointment_date, candidate.appointment_time
        )
        if not hours_check.is_valid:
            errors.append(hours_check.message)

    if candidate.branch_id and has_date and has_time:
        booking_check = validate_appointment_booking(
            candidate, existing_appointments, exclude_appointment_id
        )
        errors.extend(booking_check.errors)
        conflicts = booking_check.conflicts

    result = ValidationResult(is_valid=not errors, errors=errors, conflicts=conflicts)
    logger.info(
        "Booking check for branch=%s %s %s: %s (%d error(s))",
        candidate.branch_id,
        candidate.appointment_date,
        candidate.appointment_time,
        "valid" if result.is_valid else "rejected",
        len(errors),
    )
    return result
