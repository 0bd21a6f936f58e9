"""
Service layer for session scheduling.
Services are framework-agnostic pure functions over the DTOs in types.py.
"""

import logging
from datetime import date, datetime, timedelta
from typing import AbstractSet, FrozenSet, Iterator, Tuple

from .types import (
    BookingRequest,
    InvalidRequest,
    SessionOccurrence,
    SessionReport,
    Weekday,
    weekday_of,
)

logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7


def next_preferred_day(current_date: date, allowed: AbstractSet[int]) -> date:
    """
    Find the next date strictly after current_date on an allowed weekday.

    Args:
        current_date: Date to advance from
        allowed: Non-empty set of weekdays (0=Sunday, 6=Saturday)

    Returns:
        The first date after current_date whose weekday is in allowed

    Raises:
        ValueError: If allowed contains no valid weekday
    """
    if not allowed:
        raise ValueError("At least one allowed weekday is required")

    for offset in range(1, DAYS_PER_WEEK + 1):
        candidate = current_date + timedelta(days=offset)
        if weekday_of(candidate) in allowed:
            return candidate

    raise ValueError(f"No valid weekday in {sorted(allowed)!r}")


def generate_session_report(request: BookingRequest) -> SessionReport:
    """
    Generate the ordered list of sessions for a booking request.

    The first session is always on start_date. Each following session is
    interval_days after the previous one, moved forward to the next
    preferred weekday when the advanced date misses the preferred set.

    Args:
        request: BookingRequest to schedule

    Returns:
        SessionReport with exactly request.total_sessions occurrences

    Raises:
        InvalidRequest: If the request fails validation
    """
    start_date, preferred = _validate_request(request)

    occurrences = tuple(
        SessionOccurrence(
            date=session_date,
            time=request.time,
            duration_minutes=request.duration_minutes,
            weekday_label=weekday_of(session_date).label,
        )
        for session_date in _iter_session_dates(start_date, request, preferred)
    )

    logger.info(
        "Generated %d session(s) from %s to %s",
        len(occurrences), occurrences[0].date, occurrences[-1].date
    )
    return SessionReport(occurrences=occurrences)


def _iter_session_dates(
    start_date: date,
    request: BookingRequest,
    preferred: FrozenSet[int]
) -> Iterator[date]:
    """Yield session dates, advancing the cursor after every emitted date."""
    cursor = start_date

    for index in range(request.total_sessions):
        yield cursor

        if index == request.total_sessions - 1:
            return

        cursor += timedelta(days=request.interval_days)
        if preferred and weekday_of(cursor) not in preferred:
            corrected = next_preferred_day(cursor, preferred)
            logger.debug("Moved session from %s to preferred day %s", cursor, corrected)
            cursor = corrected


def _validate_request(request: BookingRequest) -> Tuple[date, FrozenSet[int]]:
    """Validate request data and return the start date and preferred weekdays."""
    start_date = request.start_date
    if isinstance(start_date, datetime):
        start_date = start_date.date()
    if not isinstance(start_date, date):
        raise InvalidRequest("Start date is required")

    _validate_positive(request.total_sessions, "Total sessions")
    _validate_positive(request.duration_minutes, "Duration")
    _validate_positive(request.interval_days, "Interval")

    preferred = frozenset(request.preferred_weekdays or ())
    invalid = [day for day in preferred if day not in Weekday.values]
    if invalid:
        raise InvalidRequest(
            f"Preferred weekdays must be between 0 (Sunday) and 6 (Saturday), got {invalid}"
        )

    _validate_span(start_date, request, preferred)
    return start_date, preferred


def _validate_span(
    start_date: date,
    request: BookingRequest,
    preferred: FrozenSet[int]
) -> None:
    """Validate the last possible session date is still a representable date."""
    max_step = request.interval_days + (DAYS_PER_WEEK - 1 if preferred else 0)
    max_span = (request.total_sessions - 1) * max_step
    if max_span > (date.max - start_date).days:
        raise InvalidRequest("Sessions would extend past the last supported date")


def _validate_positive(value: int, name: str) -> None:
    """Validate value is a positive integer."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidRequest(f"{name} must be a positive integer")
