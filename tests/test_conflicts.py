"""Tests for conflict detection and schedule-aware availability."""

import pytest

from salon_booking.engine.conflicts import (
    ConflictResult,
    check_time_slot_conflict,
    get_available_time_slots,
    get_stylist_available_slots,
    is_stylist_available,
)
from salon_booking.schemas.appointment_schema import ANY_AVAILABLE_STYLIST, Appointment
from tests.conftest import MONDAY, SUNDAY, make_appointment


class TestCheckTimeSlotConflict:
    def test_detects_conflict_for_same_slot(self, appointments):
        result = check_time_slot_conflict(appointments, "branch1", MONDAY, "10:00")
        assert result.has_conflict is True
        assert result.conflict_count == 1
        assert result.conflicts[0].id == "apt1"

    def test_conflicts_hold_full_records(self, appointments):
        result = check_time_slot_conflict(appointments, "branch1", MONDAY, "10:00")
        assert result.conflicts[0] is appointments[0]

    def test_no_conflict_for_free_slot(self, appointments):
        result = check_time_slot_conflict(appointments, "branch1", MONDAY, "09:00")
        assert result.has_conflict is False
        assert result.conflicts == []
        assert result.conflict_count == 0

    def test_cancelled_never_conflicts(self, appointments):
        result = check_time_slot_conflict(appointments, "branch1", MONDAY, "12:00")
        assert result.has_conflict is False

    def test_excluded_appointment_ignored(self, appointments):
        result = check_time_slot_conflict(
            appointments, "branch1", MONDAY, "10:00", None, "apt1"
        )
        assert result.has_conflict is False

    def test_same_stylist_conflicts(self, appointments):
        result = check_time_slot_conflict(appointments, "branch1", MONDAY, "10:00", "stylist1")
        assert result.has_conflict is True

    def test_different_stylist_does_not_conflict(self, appointments):
        result = check_time_slot_conflict(appointments, "branch1", MONDAY, "10:00", "stylist3")
        assert result.has_conflict is False

    def test_other_branch_ignored(self, appointments):
        result = check_time_slot_conflict(appointments, "branch2", MONDAY, "10:00")
        assert result.has_conflict is False

    def test_other_date_ignored(self, appointments):
        result = check_time_slot_conflict(appointments, "branch1", "2024-01-02", "10:00")
        assert result.has_conflict is False

    def test_branch_none_checks_every_branch(self):
        appts = [make_appointment("x1", "10:00", branch_id="branch9")]
        result = check_time_slot_conflict(appts, None, MONDAY, "10:00", "stylist1")
        assert result.has_conflict is True

    def test_stylist_filter_skips_appointment_without_pairs(self):
        appts = [make_appointment("x1", "10:00", stylist_id=None)]
        assert check_time_slot_conflict(appts, "branch1", MONDAY, "10:00").has_conflict is True
        assert check_time_slot_conflict(
            appts, "branch1", MONDAY, "10:00", "stylist1"
        ).has_conflict is False

    def test_multi_service_appointment_matches_any_pair(self):
        appt = Appointment.model_validate({
            "id": "multi", "branchId": "branch1", "appointmentDate": MONDAY,
            "appointmentTime": "14:00", "status": "in_service",
            "serviceStylistPairs": [
                {"serviceId": "cut", "stylistId": "stylist1"},
                {"serviceId": "color", "stylistId": "stylist7"},
            ],
        })
        result = check_time_slot_conflict([appt], "branch1", MONDAY, "14:00", "stylist7")
        assert result.has_conflict is True

    def test_preserves_input_order(self):
        appts = [
            make_appointment("b", "10:00", stylist_id="s2"),
            make_appointment("a", "10:00", stylist_id="s1"),
        ]
        result = check_time_slot_conflict(appts, "branch1", MONDAY, "10:00")
        assert [a.id for a in result.conflicts] == ["b", "a"]

    def test_any_available_conflicts_with_itself(self):
        appts = [make_appointment("x1", "10:00", stylist_id=ANY_AVAILABLE_STYLIST)]
        result = check_time_slot_conflict(
            appts, "branch1", MONDAY, "10:00", ANY_AVAILABLE_STYLIST
        )
        assert result.has_conflict is True

    def test_empty_snapshot(self):
        assert check_time_slot_conflict([], "branch1", MONDAY, "10:00") == ConflictResult()


class TestConflictInvariants:
    @pytest.mark.parametrize("status", ["completed", "cancelled"])
    @pytest.mark.parametrize("stylist", [None, "stylist1"])
    def test_inert_statuses_never_conflict(self, status, stylist):
        appts = [make_appointment("x1", "10:00", status=status)]
        result = check_time_slot_conflict(appts, "branch1", MONDAY, "10:00", stylist)
        assert result.conflicts == []

    @pytest.mark.parametrize("status", ["scheduled", "confirmed", "in_service"])
    def test_active_statuses_conflict(self, status):
        appts = [make_appointment("x1", "10:00", status=status)]
        assert check_time_slot_conflict(appts, "branch1", MONDAY, "10:00").has_conflict

    @pytest.mark.parametrize("status", ["pending", "in_progress", "no_show", ""])
    def test_unlisted_statuses_fail_closed(self, status):
        appts = [make_appointment("x1", "10:00", status=status)]
        assert not check_time_slot_conflict(appts, "branch1", MONDAY, "10:00").has_conflict

    @pytest.mark.parametrize("appt_id", ["apt1", "apt2"])
    def test_exclusion_never_reports_self(self, appointments, appt_id):
        target = next(a for a in appointments if a.id == appt_id)
        stylist = target.service_stylist_pairs[0].stylist_id
        result = check_time_slot_conflict(
            appointments, target.branch_id, target.appointment_date,
            target.appointment_time, stylist, appt_id,
        )
        assert target not in result.conflicts

    def test_idempotent(self, appointments):
        first = check_time_slot_conflict(appointments, "branch1", MONDAY, "10:00")
        second = check_time_slot_conflict(appointments, "branch1", MONDAY, "10:00")
        assert first == second


class TestGetAvailableTimeSlots:
    def test_excludes_booked_slots(self, appointments, operating_hours):
        slots = get_available_time_slots(appointments, operating_hours, "branch1", MONDAY)
        assert "10:00" not in slots
        assert "11:00" not in slots
        assert "09:00" in slots
        assert "12:00" in slots  # cancelled appointment

    def test_closed_day_empty(self, appointments, operating_hours):
        assert get_available_time_slots(appointments, operating_hours, "branch1", SUNDAY) == []

    def test_missing_hours_empty(self, appointments):
        assert get_available_time_slots(appointments, None, "branch1", MONDAY) == []

    def test_chronological(self, appointments, operating_hours):
        slots = get_available_time_slots(appointments, operating_hours, "branch1", MONDAY)
        assert slots == sorted(slots)
        assert len(slots) == 16

    def test_stylist_filter(self, appointments, operating_hours):
        slots = get_available_time_slots(
            appointments, operating_hours, "branch1", MONDAY, "stylist2"
        )
        assert "10:00" in slots
        assert "11:00" not in slots

    def test_exclude_own_appointment_frees_slot(self, appointments, operating_hours):
        slots = get_available_time_slots(
            appointments, operating_hours, "branch1", MONDAY, None, "apt1"
        )
        assert "10:00" in slots

    def test_custom_duration(self, operating_hours):
        slots = get_available_time_slots([], operating_hours, "branch1", MONDAY, slot_duration_minutes=60)
        assert slots[:2] == ["09:00", "10:00"]
        assert len(slots) == 9


class TestStylistAvailability:
    def test_booked_stylist_unavailable(self, appointments):
        assert is_stylist_available(appointments, "stylist1", MONDAY, "10:00") is False

    def test_free_stylist_available(self, appointments):
        assert is_stylist_available(appointments, "stylist1", MONDAY, "09:00") is True

    def test_cancelled_booking_keeps_stylist_available(self, appointments):
        assert is_stylist_available(appointments, "stylist1", MONDAY, "12:00") is True

    def test_busy_at_another_branch(self):
        appts = [make_appointment("x1", "15:00", branch_id="branch2")]
        assert is_stylist_available(appts, "stylist1", MONDAY, "15:00") is False

    def test_exclusion(self, appointments):
        assert is_stylist_available(appointments, "stylist1", MONDAY, "10:00", "apt1") is True

    def test_stylist_slots(self, appointments, operating_hours):
        slots = get_stylist_available_slots(appointments, "stylist1", MONDAY, operating_hours)
        assert "10:00" not in slots
        assert "09:00" in slots
        assert "11:00" in slots  # different stylist

    def test_stylist_slots_span_branches(self, operating_hours):
        appts = [make_appointment("x1", "13:00", branch_id="branch2")]
        slots = get_stylist_available_slots(appts, "stylist1", MONDAY, operating_hours)
        assert "13:00" not in slots

    def test_stylist_slots_closed_day(self, appointments, operating_hours):
        assert get_stylist_available_slots(appointments, "stylist1", SUNDAY, operating_hours) == []
