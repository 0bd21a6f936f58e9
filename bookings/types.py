"""
Data types and constants for the session booking system.

This module contains:
- The Weekday enumeration (0=Sunday, 6=Saturday)
- Immutable DTOs passed into and returned from the service layer
- The InvalidRequest error raised on bad booking input
- Form defaults used across the application
"""

from dataclasses import dataclass, field
from datetime import date
from typing import FrozenSet, Iterator, List, Optional, Tuple

from django.db import models


DEFAULT_TOTAL_SESSIONS = 1
DEFAULT_DURATION_MINUTES = 15
DEFAULT_INTERVAL_DAYS = 2
DURATION_CHOICES = (15, 30, 60)


class InvalidRequest(ValueError):
    """Raised when a booking request violates a scheduling precondition."""


class Weekday(models.IntegerChoices):
    SUNDAY = 0, 'Sunday'
    MONDAY = 1, 'Monday'
    TUESDAY = 2, 'Tuesday'
    WEDNESDAY = 3, 'Wednesday'
    THURSDAY = 4, 'Thursday'
    FRIDAY = 5, 'Friday'
    SATURDAY = 6, 'Saturday'


def weekday_of(day: date) -> Weekday:
    """Get the Weekday of a calendar date (Sunday-based numbering)."""
    return Weekday(day.isoweekday() % 7)


@dataclass(frozen=True)
class BookingRequest:
    """DTO for a scheduling request, built fresh from the submitted form."""
    start_date: Optional[date]
    time: str
    total_sessions: int = DEFAULT_TOTAL_SESSIONS
    duration_minutes: int = DEFAULT_DURATION_MINUTES
    interval_days: int = DEFAULT_INTERVAL_DAYS
    preferred_weekdays: FrozenSet[int] = frozenset()


@dataclass(frozen=True)
class SessionOccurrence:
    """One scheduled session of a report."""
    date: date
    time: str
    duration_minutes: int
    weekday_label: str

    @property
    def weekday(self) -> Weekday:
        return weekday_of(self.date)

    def describe(self, date_text: Optional[str] = None) -> str:
        """
        Render the occurrence as a single report line.

        Args:
            date_text: Pre-formatted date; ISO format is used when omitted
        """
        date_text = date_text or self.date.isoformat()
        return (
            f"{date_text} at {self.time} for {self.duration_minutes} minutes "
            f"on {self.weekday_label}"
        )

    def __str__(self):
        return self.describe()


@dataclass(frozen=True)
class SessionReport:
    """Ordered, immutable sequence of session occurrences."""
    occurrences: Tuple[SessionOccurrence, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[SessionOccurrence]:
        return iter(self.occurrences)

    def __len__(self) -> int:
        return len(self.occurrences)

    def __getitem__(self, index):
        return self.occurrences[index]

    @property
    def dates(self) -> List[date]:
        return [occurrence.date for occurrence in self.occurrences]

    def lines(self) -> List[str]:
        return [occurrence.describe() for occurrence in self.occurrences]
