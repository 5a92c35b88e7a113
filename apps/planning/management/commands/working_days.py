from datetime import date

from django.core.management.base import BaseCommand, CommandError

from apps.planning.conf import get_calendar
from apps.planning.domain.calendar import (
    format_local_date, iso_week_number, parse_local_date, week_start,
)


class Command(BaseCommand):
    help = 'Lists the working days of the planning from a start date'

    def add_arguments(self, parser):
        parser.add_argument('--start', help='YYYY-MM-DD (default: Monday of the current week)')
        parser.add_argument('--count', type=int, default=10)

    def handle(self, *args, **options):
        try:
            start = parse_local_date(options['start']) if options['start'] else week_start(date.today())
        except ValueError as e:
            raise CommandError(f"Invalid --start: {e}")

        calendar = get_calendar()
        days = calendar.generate_working_days(start, options['count'])

        for day in days:
            if day.weekend_before:
                self.stdout.write('-' * 24)
            marker = ' (férié)' if day.is_holiday else ''
            self.stdout.write(
                f"S{iso_week_number(day.date):02d}  {day.date.strftime('%a')}  {format_local_date(day.date)}{marker}"
            )

        working = sum(1 for d in days if not d.is_holiday)
        self.stdout.write(self.style.SUCCESS(f'{working} jour(s) ouvré(s) sur {len(days)}.'))
