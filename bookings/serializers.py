"""
Serializers for the session booking system.
"""

from django.utils import formats
from rest_framework import serializers

from .types import (
    DEFAULT_DURATION_MINUTES,
    DEFAULT_INTERVAL_DAYS,
    DEFAULT_TOTAL_SESSIONS,
    DURATION_CHOICES,
    BookingRequest,
    Weekday,
)


class BookingRequestSerializer(serializers.Serializer):
    """Serializer for the booking form (input)."""

    session_date = serializers.DateField()
    session_time = serializers.CharField(max_length=20)
    total_sessions = serializers.IntegerField(min_value=1, default=DEFAULT_TOTAL_SESSIONS)
    session_duration = serializers.ChoiceField(
        choices=DURATION_CHOICES,
        default=DEFAULT_DURATION_MINUTES
    )
    session_interval = serializers.IntegerField(
        min_value=1,
        required=False,
        default=DEFAULT_INTERVAL_DAYS
    )
    preferred_days = serializers.MultipleChoiceField(
        choices=Weekday.choices,
        required=False,
        default=set
    )

    def to_internal_value(self, data):
        """Drop interval and preferred days when only one session is booked."""
        if _is_single_session(data):
            data = data.copy()
            data.pop('session_interval', None)
            data.pop('preferred_days', None)
        return super().to_internal_value(data)

    def to_booking_request(self) -> BookingRequest:
        """Build an immutable BookingRequest from validated data."""
        data = self.validated_data
        return BookingRequest(
            start_date=data['session_date'],
            time=data['session_time'],
            total_sessions=data['total_sessions'],
            duration_minutes=int(data['session_duration']),
            interval_days=data['session_interval'],
            preferred_weekdays=frozenset(int(day) for day in data['preferred_days']),
        )


class SessionOccurrenceSerializer(serializers.Serializer):
    """Serializer for reading/displaying a SessionOccurrence (output)."""

    date = serializers.DateField()
    time = serializers.CharField()
    duration_minutes = serializers.IntegerField()
    weekday = serializers.IntegerField()
    day = serializers.CharField(source='weekday_label')
    summary = serializers.SerializerMethodField()

    def get_summary(self, occurrence):
        return occurrence.describe(
            formats.date_format(occurrence.date, 'SHORT_DATE_FORMAT')
        )


class SessionReportSerializer(serializers.Serializer):
    """Serializer for a full SessionReport (output)."""

    total_sessions = serializers.SerializerMethodField()
    sessions = SessionOccurrenceSerializer(source='occurrences', many=True)

    def get_total_sessions(self, report):
        return len(report)


def _is_single_session(data) -> bool:
    """Check whether the submitted form books at most one session."""
    try:
        return int(data.get('total_sessions', DEFAULT_TOTAL_SESSIONS)) <= 1
    except (TypeError, ValueError):
        return False
