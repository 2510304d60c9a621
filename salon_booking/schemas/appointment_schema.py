"""Appointment, booking candidate, and stylist assignment data models."""

from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from salon_booking.schemas.store_model import StoreModel

# Wire value the booking form stores when the client has no stylist preference.
ANY_AVAILABLE_STYLIST = "any_available"


class AppointmentStatus(str, Enum):
    """Every status value written by some part of the system.

    The booking UI writes ``pending``; the appointment service writes
    ``scheduled`` and ``in_progress``; the conflict engine treats
    ``in_service`` as active. Only ``ACTIVE_STATUSES`` block a slot.
    """

    PENDING = "pending"
    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    IN_SERVICE = "in_service"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


ACTIVE_STATUSES: frozenset[str] = frozenset({
    AppointmentStatus.SCHEDULED.value,
    AppointmentStatus.CONFIRMED.value,
    AppointmentStatus.IN_SERVICE.value,
})

TERMINAL_STATUSES: frozenset[str] = frozenset({
    AppointmentStatus.COMPLETED.value,
    AppointmentStatus.CANCELLED.value,
})


class StylistAssignment(str, Enum):
    """How a service line is staffed."""

    UNASSIGNED = "unassigned"
    ANY_AVAILABLE = "any_available"
    SPECIFIC = "specific"


class ServiceStylistPair(StoreModel):
    """One service on an appointment and the stylist assigned to it."""

    service_id: str = ""
    stylist_id: Optional[str] = None
    stylist_name: Optional[str] = None

    @property
    def assignment(self) -> StylistAssignment:
        if not self.stylist_id:
            return StylistAssignment.UNASSIGNED
        if self.stylist_id == ANY_AVAILABLE_STYLIST:
            return StylistAssignment.ANY_AVAILABLE
        return StylistAssignment.SPECIFIC

    @property
    def display_name(self) -> str:
        return self.stylist_name or self.stylist_id or ""


class Appointment(StoreModel):
    """Persisted appointment as read from storage. Never mutated by the engine."""

    id: str
    branch_id: str
    appointment_date: str
    appointment_time: str
    status: str
    service_stylist_pairs: list[ServiceStylistPair] = Field(default_factory=list)

    @field_validator("service_stylist_pairs", mode="before")
    @classmethod
    def missing_pairs_as_empty(cls, value: Optional[list]) -> list:
        return [] if value is None else value

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES

    def has_stylist(self, stylist_id: str) -> bool:
        return any(pair.stylist_id == stylist_id for pair in self.service_stylist_pairs)


class BookingCandidate(StoreModel):
    """
    A proposed booking under validation.

    Fields are optional so partially filled form state can be checked for
    missing values before the conflict check runs.
    """

    branch_id: Optional[str] = None
    appointment_date: Optional[str] = None
    appointment_time: Optional[str] = None
    service_stylist_pairs: list[ServiceStylistPair] = Field(default_factory=list)

    @field_validator("service_stylist_pairs", mode="before")
    @classmethod
    def missing_pairs_as_empty(cls, value: Optional[list]) -> list:
        return [] if value is None else value
