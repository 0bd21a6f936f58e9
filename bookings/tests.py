"""
Tests for the session booking system.

Tests cover:
- Weekday mapping and the report DTOs
- Service layer (next_preferred_day, generate_session_report)
- API endpoints (report and options)
- Management commands
"""

from datetime import date, datetime, timedelta
from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import SimpleTestCase
from rest_framework import status
from rest_framework.test import APIClient, APISimpleTestCase

from .services import generate_session_report, next_preferred_day
from .types import (
    BookingRequest,
    InvalidRequest,
    SessionOccurrence,
    Weekday,
    weekday_of,
)


def make_request(**overrides):
    """Build a BookingRequest with sensible defaults."""
    data = {
        'start_date': date(2024, 1, 1),
        'time': '10:00',
        'total_sessions': 3,
        'duration_minutes': 30,
        'interval_days': 2,
        'preferred_weekdays': frozenset(),
    }
    data.update(overrides)
    return BookingRequest(**data)


class WeekdayTests(SimpleTestCase):
    """Test the Sunday-based Weekday enumeration."""

    def test_weekday_of(self):
        """Test mapping dates onto weekdays."""
        self.assertEqual(weekday_of(date(2023, 12, 31)), Weekday.SUNDAY)
        self.assertEqual(weekday_of(date(2024, 1, 1)), Weekday.MONDAY)
        self.assertEqual(weekday_of(date(2024, 1, 6)), Weekday.SATURDAY)

    def test_labels(self):
        """Test weekday display labels."""
        self.assertEqual(Weekday.WEDNESDAY, 3)
        self.assertEqual(Weekday.WEDNESDAY.label, 'Wednesday')
        self.assertEqual(len(Weekday.choices), 7)


class SessionOccurrenceTests(SimpleTestCase):
    """Test SessionOccurrence rendering."""

    def test_describe(self):
        """Test the human-readable report line."""
        occurrence = SessionOccurrence(
            date=date(2024, 1, 3),
            time='14:30',
            duration_minutes=60,
            weekday_label='Wednesday'
        )

        self.assertEqual(
            occurrence.describe(),
            '2024-01-03 at 14:30 for 60 minutes on Wednesday'
        )
        self.assertEqual(
            occurrence.describe('03/01/2024'),
            '03/01/2024 at 14:30 for 60 minutes on Wednesday'
        )
        self.assertEqual(occurrence.weekday, Weekday.WEDNESDAY)


class NextPreferredDayTests(SimpleTestCase):
    """Test next_preferred_day."""

    def test_returns_next_allowed_day(self):
        """Test scanning forward to the next allowed weekday."""
        # Wednesday -> next Monday
        self.assertEqual(
            next_preferred_day(date(2024, 1, 3), {Weekday.MONDAY}),
            date(2024, 1, 8)
        )

    def test_is_strictly_after_input(self):
        """Test that a date already on an allowed weekday still advances."""
        # Monday -> following Monday
        self.assertEqual(
            next_preferred_day(date(2024, 1, 1), {1}),
            date(2024, 1, 8)
        )

    def test_picks_nearest_of_several(self):
        """Test the nearest allowed weekday wins."""
        self.assertEqual(
            next_preferred_day(date(2024, 1, 1), {Weekday.FRIDAY, Weekday.WEDNESDAY}),
            date(2024, 1, 3)
        )

    def test_crosses_year_boundary(self):
        """Test advancing across a year boundary."""
        # Saturday 2023-12-30 -> Tuesday 2024-01-02
        self.assertEqual(
            next_preferred_day(date(2023, 12, 30), {Weekday.TUESDAY}),
            date(2024, 1, 2)
        )

    def test_empty_allowed_set(self):
        """Test that an empty set is rejected."""
        with self.assertRaises(ValueError):
            next_preferred_day(date(2024, 1, 1), set())

    def test_no_valid_weekday(self):
        """Test that a set without valid weekdays is rejected."""
        with self.assertRaises(ValueError):
            next_preferred_day(date(2024, 1, 1), {9})


class GenerateSessionReportTests(SimpleTestCase):
    """Test generate_session_report."""

    def test_interval_without_preferred_days(self):
        """Test plain interval advance from a Monday."""
        report = generate_session_report(make_request())

        self.assertEqual(
            report.dates,
            [date(2024, 1, 1), date(2024, 1, 3), date(2024, 1, 5)]
        )

    def test_preferred_days_already_matching(self):
        """Test interval dates that already land on preferred days."""
        report = generate_session_report(make_request(
            preferred_weekdays=frozenset({Weekday.WEDNESDAY, Weekday.FRIDAY})
        ))

        self.assertEqual(
            report.dates,
            [date(2024, 1, 1), date(2024, 1, 3), date(2024, 1, 5)]
        )

    def test_preferred_day_correction(self):
        """Test interval dates moved forward to the preferred weekday."""
        report = generate_session_report(make_request(
            start_date=date(2024, 1, 2),
            interval_days=1,
            preferred_weekdays=frozenset({Weekday.MONDAY})
        ))

        self.assertEqual(
            report.dates,
            [date(2024, 1, 2), date(2024, 1, 8), date(2024, 1, 15)]
        )

    def test_first_session_is_never_corrected(self):
        """Test the start date is kept even off the preferred weekdays."""
        report = generate_session_report(make_request(
            preferred_weekdays=frozenset({Weekday.SATURDAY})
        ))

        self.assertEqual(report[0].date, date(2024, 1, 1))
        self.assertEqual(report[0].weekday_label, 'Monday')
        for occurrence in report[1:]:
            self.assertEqual(occurrence.weekday, Weekday.SATURDAY)

    def test_arithmetic_progression(self):
        """Test dates follow start + i * interval without preferred days."""
        request = make_request(
            start_date=date(2024, 2, 20),
            total_sessions=10,
            interval_days=5
        )
        report = generate_session_report(request)

        self.assertEqual(len(report), 10)
        for index, occurrence in enumerate(report):
            self.assertEqual(
                occurrence.date,
                request.start_date + timedelta(days=index * request.interval_days)
            )

    def test_properties_with_preferred_days(self):
        """Test count, ordering and weekday membership over many sessions."""
        preferred = frozenset({Weekday.TUESDAY, Weekday.THURSDAY})
        report = generate_session_report(make_request(
            start_date=date(2024, 12, 28),
            total_sessions=20,
            interval_days=3,
            preferred_weekdays=preferred
        ))

        self.assertEqual(len(report), 20)
        for previous, current in zip(report.dates, report.dates[1:]):
            self.assertLess(previous, current)
        for occurrence in report[1:]:
            self.assertIn(occurrence.weekday, preferred)

    def test_single_session_ignores_interval_and_preferred_days(self):
        """Test one session yields only the start date."""
        report = generate_session_report(make_request(
            total_sessions=1,
            interval_days=9,
            preferred_weekdays=frozenset({Weekday.FRIDAY})
        ))

        self.assertEqual(report.dates, [date(2024, 1, 1)])

    def test_all_weekdays_preferred(self):
        """Test that all seven weekdays behave as no constraint."""
        report = generate_session_report(make_request(
            total_sessions=5,
            interval_days=3,
            preferred_weekdays=frozenset(Weekday.values)
        ))

        self.assertEqual(
            report.dates,
            [date(2024, 1, 1) + timedelta(days=3 * i) for i in range(5)]
        )

    def test_carries_time_and_duration(self):
        """Test time and duration are copied onto every occurrence."""
        report = generate_session_report(make_request(time='07:45', duration_minutes=45))

        for occurrence in report:
            self.assertEqual(occurrence.time, '07:45')
            self.assertEqual(occurrence.duration_minutes, 45)

        self.assertEqual(
            report.lines()[1],
            '2024-01-03 at 07:45 for 45 minutes on Wednesday'
        )

    def test_request_is_not_mutated(self):
        """Test the caller's preferred weekday set is left untouched."""
        preferred = {Weekday.MONDAY}
        request = make_request(interval_days=1, preferred_weekdays=preferred)

        generate_session_report(request)

        self.assertEqual(preferred, {Weekday.MONDAY})
        self.assertIs(request.preferred_weekdays, preferred)

    def test_invalid_requests(self):
        """Test that precondition violations raise InvalidRequest."""
        invalid_overrides = [
            {'total_sessions': 0},
            {'total_sessions': -2},
            {'interval_days': 0},
            {'duration_minutes': 0},
            {'duration_minutes': -15},
            {'start_date': None},
            {'start_date': '2024-01-01'},
            {'preferred_weekdays': frozenset({7})},
        ]

        for overrides in invalid_overrides:
            with self.subTest(overrides=overrides):
                with self.assertRaises(InvalidRequest):
                    generate_session_report(make_request(**overrides))

    def test_accepts_any_positive_duration(self):
        """Test durations outside the form choices are still scheduled."""
        report = generate_session_report(make_request(duration_minutes=50))
        self.assertEqual(report[0].duration_minutes, 50)

    def test_sessions_past_last_supported_date(self):
        """Test a schedule running past date.max is rejected up front."""
        with self.assertRaises(InvalidRequest):
            generate_session_report(make_request(
                start_date=date(9999, 12, 30),
                interval_days=1
            ))

        with self.assertRaises(InvalidRequest):
            generate_session_report(make_request(
                start_date=date(9999, 12, 20),
                total_sessions=3,
                interval_days=1,
                preferred_weekdays=frozenset({Weekday.MONDAY})
            ))

    def test_sessions_ending_on_last_supported_date(self):
        """Test a schedule that fits exactly before date.max."""
        report = generate_session_report(make_request(
            start_date=date(9999, 12, 29),
            interval_days=1
        ))
        self.assertEqual(report.dates[-1], date(9999, 12, 31))

        single = generate_session_report(make_request(
            start_date=date.max,
            total_sessions=1,
            interval_days=10 ** 12
        ))
        self.assertEqual(single.dates, [date.max])

    def test_datetime_start_is_normalized(self):
        """Test a datetime start date is reduced to its calendar date."""
        report = generate_session_report(make_request(
            start_date=datetime(2024, 1, 1, 9, 0)
        ))

        self.assertEqual(report.dates, [date(2024, 1, 1), date(2024, 1, 3), date(2024, 1, 5)])
        self.assertIs(type(report[0].date), date)
        self.assertEqual(report.lines()[0], '2024-01-01 at 10:00 for 30 minutes on Monday')


class SessionReportAPITests(APISimpleTestCase):
    """Test report API endpoint."""

    def setUp(self):
        """Set up test client."""
        self.client = APIClient()

    def test_generate_report(self):
        """Test generating a report with preferred days."""
        data = {
            'session_date': '2024-01-02',
            'session_time': '10:00',
            'total_sessions': 3,
            'session_duration': 30,
            'session_interval': 1,
            'preferred_days': [1],
        }

        response = self.client.post('/api/bookings/report/', data, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['total_sessions'], 3)
        sessions = response.data['sessions']
        self.assertEqual(
            [session['date'] for session in sessions],
            ['2024-01-02', '2024-01-08', '2024-01-15']
        )
        self.assertEqual(sessions[1]['day'], 'Monday')
        self.assertEqual(sessions[1]['weekday'], 1)
        self.assertEqual(sessions[1]['duration_minutes'], 30)
        self.assertEqual(
            sessions[0]['summary'],
            '01/02/2024 at 10:00 for 30 minutes on Tuesday'
        )

    def test_form_defaults(self):
        """Test that omitted fields fall back to the form defaults."""
        data = {'session_date': '2024-01-01', 'session_time': '09:00'}

        response = self.client.post('/api/bookings/report/', data, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['total_sessions'], 1)
        self.assertEqual(response.data['sessions'][0]['duration_minutes'], 15)

    def test_single_session_ignores_interval_fields(self):
        """Test interval and preferred days are dropped for one session."""
        data = {
            'session_date': '2024-01-01',
            'session_time': '09:00',
            'total_sessions': 1,
            'session_interval': 0,
            'preferred_days': [9],
        }

        response = self.client.post('/api/bookings/report/', data, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            [session['date'] for session in response.data['sessions']],
            ['2024-01-01']
        )

    def test_zero_sessions_rejected(self):
        """Test that total_sessions must be at least one."""
        data = {
            'session_date': '2024-01-01',
            'session_time': '09:00',
            'total_sessions': 0,
        }

        response = self.client.post('/api/bookings/report/', data, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('total_sessions', response.data)

    def test_missing_date_and_time_rejected(self):
        """Test that date and time are required."""
        response = self.client.post('/api/bookings/report/', {}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('session_date', response.data)
        self.assertIn('session_time', response.data)

    def test_invalid_duration_and_weekday_rejected(self):
        """Test duration choices and weekday range are enforced."""
        data = {
            'session_date': '2024-01-01',
            'session_time': '09:00',
            'total_sessions': 2,
            'session_duration': 45,
            'preferred_days': [7],
        }

        response = self.client.post('/api/bookings/report/', data, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('session_duration', response.data)
        self.assertIn('preferred_days', response.data)

    def test_sessions_past_last_supported_date_rejected(self):
        """Test a schedule running past the last representable date is a 400."""
        data = {
            'session_date': '9999-12-30',
            'session_time': '09:00',
            'total_sessions': 3,
            'session_interval': 1,
        }

        response = self.client.post('/api/bookings/report/', data, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('detail', response.data)

    def test_booking_options(self):
        """Test the form options endpoint."""
        response = self.client.get('/api/bookings/options/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['durations'], [15, 30, 60])
        self.assertEqual(response.data['defaults']['session_interval'], 2)
        self.assertEqual(response.data['weekdays'][0], {'value': 0, 'label': 'Sunday'})


class ManagementCommandTests(SimpleTestCase):
    """Test management commands."""

    def test_generate_session_report_command(self):
        """Test the generate_session_report management command."""
        out = StringIO()
        call_command(
            'generate_session_report', '2024-01-02', '10:00',
            '--sessions=3', '--interval=1', '--preferred-day=1', '--duration=60',
            stdout=out
        )

        output = out.getvalue()
        self.assertIn('2024-01-02 at 10:00 for 60 minutes on Tuesday', output)
        self.assertIn('2024-01-08 at 10:00 for 60 minutes on Monday', output)
        self.assertIn('2024-01-15 at 10:00 for 60 minutes on Monday', output)
        self.assertIn('Scheduled 3 session(s)', output)

    def test_single_session_ignores_interval_options(self):
        """Test interval and preferred days are ignored for one session."""
        out = StringIO()
        call_command(
            'generate_session_report', '2024-01-01', '10:00',
            '--sessions=1', '--interval=0', '--preferred-day=5',
            stdout=out
        )

        output = out.getvalue()
        self.assertIn('2024-01-01 at 10:00 for 15 minutes on Monday', output)
        self.assertIn('Scheduled 1 session(s)', output)

    def test_invalid_request_raises_command_error(self):
        """Test that invalid input is reported as a CommandError."""
        with self.assertRaises(CommandError):
            call_command(
                'generate_session_report', '2024-01-02', '10:00',
                '--sessions=0', stdout=StringIO()
            )
