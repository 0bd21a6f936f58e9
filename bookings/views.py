"""Views for the session booking system."""

import logging

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import BookingRequestSerializer, SessionReportSerializer
from . import services
from .types import (
    DEFAULT_DURATION_MINUTES,
    DEFAULT_INTERVAL_DAYS,
    DEFAULT_TOTAL_SESSIONS,
    DURATION_CHOICES,
    InvalidRequest,
    Weekday,
)

logger = logging.getLogger(__name__)


class SessionReportView(APIView):
    """
    Generate a session report from the booking form.

    POST /api/bookings/report/
    """

    def post(self, request):
        """Validate the booking form and return the scheduled sessions."""
        serializer = BookingRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        booking = serializer.to_booking_request()
        try:
            report = services.generate_session_report(booking)
        except InvalidRequest as exc:
            logger.warning("Rejected booking request: %s", exc)
            raise ValidationError({'detail': str(exc)}) from exc

        response_serializer = SessionReportSerializer(report)
        return Response(response_serializer.data, status=status.HTTP_200_OK)


class BookingOptionsView(APIView):
    """
    Describe the booking form: defaults and available choices.

    GET /api/bookings/options/
    """

    def get(self, request):
        """Return form defaults, duration choices and weekday choices."""
        return Response({
            'defaults': {
                'total_sessions': DEFAULT_TOTAL_SESSIONS,
                'session_duration': DEFAULT_DURATION_MINUTES,
                'session_interval': DEFAULT_INTERVAL_DAYS,
                'preferred_days': [],
            },
            'durations': list(DURATION_CHOICES),
            'weekdays': [
                {'value': value, 'label': label}
                for value, label in Weekday.choices
            ],
        })
