"""
Management command to print a session report for a booking.

Example:
    python manage.py generate_session_report 2024-01-02 10:00 --sessions 3 --interval 1 --preferred-day 1
"""

from datetime import date

from django.core.management.base import BaseCommand, CommandError
from bookings import services
from bookings.types import (
    DEFAULT_DURATION_MINUTES,
    DEFAULT_INTERVAL_DAYS,
    DEFAULT_TOTAL_SESSIONS,
    DURATION_CHOICES,
    BookingRequest,
    InvalidRequest,
    Weekday,
)


class Command(BaseCommand):
    help = 'Print the scheduled sessions for a recurring booking'

    def add_arguments(self, parser):
        parser.add_argument(
            'start_date',
            type=date.fromisoformat,
            help='Date of the first session (YYYY-MM-DD)'
        )
        parser.add_argument('time', help='Time of day for every session, e.g. 10:00')
        parser.add_argument(
            '--sessions',
            type=int,
            default=DEFAULT_TOTAL_SESSIONS,
            help=f'Total number of sessions (default: {DEFAULT_TOTAL_SESSIONS})'
        )
        parser.add_argument(
            '--duration',
            type=int,
            choices=DURATION_CHOICES,
            default=DEFAULT_DURATION_MINUTES,
            help=f'Session duration in minutes (default: {DEFAULT_DURATION_MINUTES})'
        )
        parser.add_argument(
            '--interval',
            type=int,
            default=DEFAULT_INTERVAL_DAYS,
            help=f'Days between sessions (default: {DEFAULT_INTERVAL_DAYS})'
        )
        parser.add_argument(
            '--preferred-day',
            type=int,
            action='append',
            choices=Weekday.values,
            default=None,
            dest='preferred_days',
            help='Preferred weekday, 0=Sunday to 6=Saturday (repeatable)'
        )

    def handle(self, *args, **options):
        interval = options['interval']
        preferred_days = options['preferred_days'] or ()
        # interval and preferred days only apply between sessions
        if options['sessions'] <= 1:
            interval = DEFAULT_INTERVAL_DAYS
            preferred_days = ()

        booking = BookingRequest(
            start_date=options['start_date'],
            time=options['time'],
            total_sessions=options['sessions'],
            duration_minutes=options['duration'],
            interval_days=interval,
            preferred_weekdays=frozenset(preferred_days),
        )

        try:
            report = services.generate_session_report(booking)
        except InvalidRequest as exc:
            raise CommandError(str(exc)) from exc

        for line in report.lines():
            self.stdout.write(line)

        self.stdout.write(
            self.style.SUCCESS(f'Scheduled {len(report)} session(s)')
        )
