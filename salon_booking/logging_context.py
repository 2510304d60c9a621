"""Correlation IDs for log lines produced while checking one booking.

A booking form submission may trigger several slot lookups and a
validation verdict. Tagging each record with the submission's request id
lets them be grouped in the log stream. ``LOG_FORMAT`` renders the id;
``install_request_id_filter`` makes sure every record a handler formats
carries one, including records from loggers outside this package.

Usage:
    from salon_booking.logging_context import request_scope

    with request_scope("BOOK-abc123"):
        validate_booking_request(candidate, branch, appointments)
"""

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

NO_REQUEST_ID = "-"

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s [%(request_id)s]: %(message)s"

_request_id: ContextVar[str] = ContextVar("request_id", default=NO_REQUEST_ID)


def set_request_id(request_id: str) -> None:
    _request_id.set(request_id)


def get_request_id() -> str:
    return _request_id.get()


@contextmanager
def request_scope(request_id: str) -> Iterator[str]:
    """Tag log records with ``request_id`` for the duration of the block."""
    token = _request_id.set(request_id)
    try:
        yield request_id
    finally:
        _request_id.reset(token)


class RequestIdFilter(logging.Filter):
    """Stamps ``record.request_id``; keeps an id already set upstream."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "request_id", None):
            record.request_id = _request_id.get()  # type: ignore[attr-defined]
        return True


def _has_filter(target: "logging.Filterer") -> bool:
    return any(isinstance(f, RequestIdFilter) for f in target.filters)


def install_request_id_filter(logger: Optional[logging.Logger] = None) -> None:
    """Attach a RequestIdFilter to every handler on ``logger`` (root by default).

    Handler filters see records propagated from any logger, so a format
    string using ``%(request_id)s`` never fails on a foreign record.
    """
    logger = logger or logging.getLogger()
    for handler in logger.handlers:
        if not _has_filter(handler):
            handler.addFilter(RequestIdFilter())


def get_request_logger(name: str) -> logging.Logger:
    """Module logger whose records carry the request id even under capture handlers."""
    logger = logging.getLogger(name)
    if not _has_filter(logger):
        logger.addFilter(RequestIdFilter())
    return logger
