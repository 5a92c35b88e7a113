"""Pytest fixtures for the planning engine"""
from datetime import date

import pytest

from apps.planning.domain.calendar import WorkCalendar, compute_end_instant
from apps.planning.domain.entities import WorkPhase


def make_phase(phase_id, start_date, start_hour=8, duration_hours=8, group_id=1,
               sequence_number=1, chantier_id=1, **kwargs) -> WorkPhase:
    """Phase whose end is consistent with its start and duration."""
    end_date, end_hour = compute_end_instant(start_date, start_hour, duration_hours)
    return WorkPhase(
        id=phase_id,
        chantier_id=chantier_id,
        start_date=start_date,
        end_date=end_date,
        start_hour=start_hour,
        end_hour=end_hour,
        duration_hours=duration_hours,
        group_id=group_id,
        sequence_number=sequence_number,
        **kwargs
    )


@pytest.fixture()
def calendar() -> WorkCalendar:
    return WorkCalendar()


@pytest.fixture()
def two_weeks(calendar):
    # Mon 2026-01-05 .. Fri 2026-01-16, weekend between the two weeks
    return calendar.generate_working_days(date(2026, 1, 5), 10)
