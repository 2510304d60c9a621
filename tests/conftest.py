"""Shared test fixtures and helpers."""

from typing import Optional

import pytest

from salon_booking.schemas.appointment_schema import (
    Appointment,
    BookingCandidate,
    ServiceStylistPair,
)
from salon_booking.schemas.branch_schema import Branch, DaySchedule, OperatingHours

MONDAY = "2024-01-01"
SATURDAY = "2024-01-06"
SUNDAY = "2024-01-07"


def make_appointment(
    appointment_id: str,
    time: str,
    status: str = "confirmed",
    stylist_id: Optional[str] = "stylist1",
    stylist_name: Optional[str] = None,
    branch_id: str = "branch1",
    date: str = MONDAY,
) -> Appointment:
    """Helper to create an Appointment with a single service line."""
    pairs = []
    if stylist_id is not None:
        pairs.append(ServiceStylistPair(
            service_id="svc-cut", stylist_id=stylist_id, stylist_name=stylist_name,
        ))
    return Appointment(
        id=appointment_id,
        branch_id=branch_id,
        appointment_date=date,
        appointment_time=time,
        status=status,
        service_stylist_pairs=pairs,
    )


def make_candidate(
    time: str,
    stylists: Optional[list[tuple[str, Optional[str]]]] = None,
    branch_id: Optional[str] = "branch1",
    date: Optional[str] = MONDAY,
) -> BookingCandidate:
    """Create a BookingCandidate from (stylist_id, stylist_name) tuples."""
    pairs = [
        ServiceStylistPair(service_id=f"svc-{i}", stylist_id=sid, stylist_name=name)
        for i, (sid, name) in enumerate(stylists or [])
    ]
    return BookingCandidate(
        branch_id=branch_id,
        appointment_date=date,
        appointment_time=time,
        service_stylist_pairs=pairs,
    )


@pytest.fixture
def operating_hours() -> OperatingHours:
    weekday = {"isOpen": True, "open": "09:00", "close": "18:00"}
    return OperatingHours.model_validate({
        "monday": weekday,
        "tuesday": weekday,
        "wednesday": weekday,
        "thursday": weekday,
        "friday": weekday,
        "saturday": {"isOpen": True, "open": "09:00", "close": "17:00"},
        "sunday": {"isOpen": False, "open": "10:00", "close": "16:00"},
    })


@pytest.fixture
def branch(operating_hours) -> Branch:
    return Branch(id="branch1", name="Makati", operating_hours=operating_hours)


@pytest.fixture
def appointments() -> list[Appointment]:
    return [
        make_appointment("apt1", "10:00", "confirmed", "stylist1", "John"),
        make_appointment("apt2", "11:00", "scheduled", "stylist2", "Jane"),
        make_appointment("apt3", "12:00", "cancelled", "stylist1", "John"),
    ]


@pytest.fixture
def open_monday() -> DaySchedule:
    return DaySchedule(is_open=True, open="09:00", close="18:00")
