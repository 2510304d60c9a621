from salon_booking.engine.conflicts import (
    ConflictResult,
    check_time_slot_conflict,
    get_available_time_slots,
    get_stylist_available_slots,
    is_stylist_available,
)
from salon_booking.engine.schedule import (
    TimeValidation,
    day_of_week,
    enumerate_slots,
    validate_appointment_time,
)
from salon_booking.engine.status_flow import (
    AppointmentStatusMachine,
    InvalidStatusTransitionError,
    is_valid_status_transition,
)
from salon_booking.engine.validator import (
    ValidationResult,
    validate_appointment_booking,
    validate_booking_request,
    validate_required_fields,
)

__all__ = [
    "ConflictResult",
    "check_time_slot_conflict",
    "get_available_time_slots",
    "get_stylist_available_slots",
    "is_stylist_available",
    "TimeValidation",
    "day_of_week",
    "enumerate_slots",
    "validate_appointment_time",
    "AppointmentStatusMachine",
    "InvalidStatusTransitionError",
    "is_valid_status_transition",
    "ValidationResult",
    "validate_appointment_booking",
    "validate_booking_request",
    "validate_required_fields",
]
