"""
Appointment status lifecycle.

Defines the allowed status moves and a small tracker that applies them
to one appointment's status, keeping a history of every move. Nothing is
persisted here; callers write the new status themselves.

Usage:
    machine = AppointmentStatusMachine(AppointmentStatus.SCHEDULED)
    machine.transition(AppointmentStatus.CONFIRMED)
    assert machine.current_status == AppointmentStatus.CONFIRMED
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Union

from salon_booking.schemas.appointment_schema import AppointmentStatus

logger = logging.getLogger(__name__)

# The appointment service writes in_progress for a client in the chair and the
# conflict engine reads in_service. Both spellings move the same way until
# one vocabulary is chosen.
STATUS_FLOW: dict[AppointmentStatus, list[AppointmentStatus]] = {
    AppointmentStatus.SCHEDULED: [AppointmentStatus.CONFIRMED, AppointmentStatus.CANCELLED],
    AppointmentStatus.CONFIRMED: [
        AppointmentStatus.IN_PROGRESS,
        AppointmentStatus.IN_SERVICE,
        AppointmentStatus.CANCELLED,
    ],
    AppointmentStatus.IN_PROGRESS: [AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED],
    AppointmentStatus.IN_SERVICE: [AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED],
    AppointmentStatus.COMPLETED: [],
    AppointmentStatus.CANCELLED: [],
}


class InvalidStatusTransitionError(Exception):
    """Raised when a status move is not allowed from the current status."""


@dataclass
class StatusEntry:
    """Recorded history entry for a status change."""
    status: AppointmentStatus
    entered_at: datetime
    previous: Optional[AppointmentStatus] = None


def _coerce(status: Union[AppointmentStatus, str]) -> Optional[AppointmentStatus]:
    try:
        return AppointmentStatus(status)
    except ValueError:
        return None


def is_valid_status_transition(
    current: Union[AppointmentStatus, str], new: Union[AppointmentStatus, str]
) -> bool:
    """Unknown or unmapped statuses allow no moves."""
    current_status = _coerce(current)
    new_status = _coerce(new)
    if current_status is None or new_status is None:
        return False
    return new_status in STATUS_FLOW.get(current_status, [])


class AppointmentStatusMachine:
    """Tracks one appointment's status and rejects moves outside STATUS_FLOW."""

    def __init__(self, status: Union[AppointmentStatus, str] = AppointmentStatus.SCHEDULED) -> None:
        initial = _coerce(status)
        if initial is None:
            raise InvalidStatusTransitionError(f"Unknown appointment status: {status!r}")
        self._current_status = initial
        self._history: list[StatusEntry] = [
            StatusEntry(status=initial, entered_at=datetime.now(timezone.utc))
        ]

    @property
    def current_status(self) -> AppointmentStatus:
        return self._current_status

    def transition(self, new_status: Union[AppointmentStatus, str]) -> AppointmentStatus:
        """
        Move to ``new_status``.

        Raises:
            InvalidStatusTransitionError: If the move is not allowed.
        """
        if not is_valid_status_transition(self._current_status, new_status):
            valid = [s.value for s in self.get_allowed_statuses()]
            requested = getattr(new_status, "value", new_status)
            raise InvalidStatusTransitionError(
                f"Cannot move from '{self._current_status.value}' to '{requested}'. "
                f"Allowed: {valid}"
            )

        previous = self._current_status
        self._current_status = AppointmentStatus(new_status)
        self._history.append(StatusEntry(
            status=self._current_status,
            entered_at=datetime.now(timezone.utc),
            previous=previous,
        ))
        logger.debug(
            "Status transition: %s -> %s", previous.value, self._current_status.value
        )
        return self._current_status

    def get_allowed_statuses(self) -> list[AppointmentStatus]:
        return list(STATUS_FLOW.get(self._current_status, []))

    def get_history(self) -> list[StatusEntry]:
        return list(self._history)

    def is_terminal(self) -> bool:
        return not self.get_allowed_statuses()
