"""
Command-line entry point for the booking availability engine.

Reads a branch document and an appointment snapshot from JSON files (as
exported from storage) and prints free slots, a booking verdict, or the
branch's formatted opening hours.

Usage:
    python main.py slots --branch branch.json --appointments appts.json --date 2024-01-01
    python main.py slots --branch branch.json --appointments appts.json --date 2024-01-01 --stylist s1
    python main.py validate --branch branch.json --appointments appts.json --booking booking.json
    python main.py hours --branch branch.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from pydantic import TypeAdapter, ValidationError

from salon_booking.config import settings
from salon_booking.engine.conflicts import get_available_time_slots, get_stylist_available_slots
from salon_booking.engine.schedule import get_formatted_operating_hours
from salon_booking.engine.validator import validate_booking_request
from salon_booking.logging_context import request_scope
from salon_booking.schemas.appointment_schema import Appointment, BookingCandidate
from salon_booking.schemas.branch_schema import Branch

logger = logging.getLogger(__name__)

_appointment_list = TypeAdapter(list[Appointment])


class InputError(Exception):
    """Raised when an input file is missing or does not match its schema."""


def _read_json(path_str: str) -> Any:
    path = Path(path_str)
    if not path.exists():
        raise InputError(f"Input file not found: {path}")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise InputError(f"Invalid JSON in {path}: {exc}") from exc


def _load_branch(path_str: str) -> Branch:
    try:
        return Branch.model_validate(_read_json(path_str))
    except ValidationError as exc:
        raise InputError(f"Invalid branch document in {path_str}: {exc}") from exc


def _load_appointments(path_str: Optional[str]) -> list[Appointment]:
    if path_str is None:
        return []
    try:
        return _appointment_list.validate_python(_read_json(path_str))
    except ValidationError as exc:
        raise InputError(f"Invalid appointments in {path_str}: {exc}") from exc


def _load_booking(path_str: str) -> BookingCandidate:
    try:
        return BookingCandidate.model_validate(_read_json(path_str))
    except ValidationError as exc:
        raise InputError(f"Invalid booking in {path_str}: {exc}") from exc


def _cmd_slots(args: argparse.Namespace) -> int:
    branch = _load_branch(args.branch)
    appointments = _load_appointments(args.appointments)
    if args.stylist:
        slots = get_stylist_available_slots(
            appointments, args.stylist, args.date, branch.operating_hours,
            args.exclude, args.slot_minutes,
        )
    else:
        slots = get_available_time_slots(
            appointments, branch.operating_hours, branch.id, args.date,
            None, args.exclude, args.slot_minutes,
        )
    _emit({"branchId": branch.id, "date": args.date, "stylistId": args.stylist, "slots": slots})
    return 0


def _cmd_validate(args: argparse.Namespace) -> int:
    branch = _load_branch(args.branch)
    appointments = _load_appointments(args.appointments)
    candidate = _load_booking(args.booking)

    with request_scope(args.request_id):
        result = validate_booking_request(candidate, branch, appointments, args.exclude)
    _emit({
        "isValid": result.is_valid,
        "errors": result.errors,
        "warnings": result.warnings,
        "conflicts": [a.id for a in result.conflicts],
    })
    return 0 if result.is_valid else 1


def _cmd_hours(args: argparse.Namespace) -> int:
    branch = _load_branch(args.branch)
    _emit(get_formatted_operating_hours(branch.operating_hours))
    return 0


def _emit(payload: Any) -> None:
    sys.stdout.write(json.dumps(payload, indent=2) + "\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Check salon appointment availability and validate bookings."
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging output.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    slots = sub.add_parser("slots", help="List free time slots for a date.")
    slots.add_argument("--branch", required=True, help="Path to the branch JSON document.")
    slots.add_argument("--appointments", default=None, help="Path to the appointments JSON list.")
    slots.add_argument("--date", required=True, help="Date in YYYY-MM-DD format.")
    slots.add_argument("--stylist", default=None, help="Only show slots free for this stylist.")
    slots.add_argument("--exclude", default=None, help="Appointment ID being rescheduled.")
    slots.add_argument(
        "--slot-minutes",
        type=int,
        default=settings.scheduling.default_slot_minutes,
        help="Slot length in minutes.",
    )
    slots.set_defaults(handler=_cmd_slots)

    validate = sub.add_parser("validate", help="Validate a booking request.")
    validate.add_argument("--branch", required=True, help="Path to the branch JSON document.")
    validate.add_argument("--appointments", default=None, help="Path to the appointments JSON list.")
    validate.add_argument("--booking", required=True, help="Path to the booking JSON document.")
    validate.add_argument("--exclude", default=None, help="Appointment ID being rescheduled.")
    validate.add_argument("--request-id", default="CLI", help="Correlation ID for log lines.")
    validate.set_defaults(handler=_cmd_validate)

    hours = sub.add_parser("hours", help="Show formatted operating hours.")
    hours.add_argument("--branch", required=True, help="Path to the branch JSON document.")
    hours.set_defaults(handler=_cmd_hours)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        return args.handler(args)
    except (InputError, ValueError) as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
