# apps/planning/conf.py
from django.conf import settings

from apps.planning.domain.calendar import WorkCalendar
from apps.planning.domain.coordinates import WEEKEND_SEPARATOR_WIDTH
from apps.planning.domain.holidays import FRENCH_HOLIDAYS

DEFAULTS = {
    'EXTRA_HOLIDAYS': [],
    'WEEKEND_SEPARATOR_WIDTH': WEEKEND_SEPARATOR_WIDTH,
}


def planning_setting(name):
    """PLANNING[name] from the Django settings, falling back to DEFAULTS."""
    return getattr(settings, 'PLANNING', {}).get(name, DEFAULTS[name])


def get_calendar() -> WorkCalendar:
    extra = planning_setting('EXTRA_HOLIDAYS')
    if not extra:
        return WorkCalendar()
    return WorkCalendar(holidays=FRENCH_HOLIDAYS | set(extra))
