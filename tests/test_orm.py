# tests/test_orm.py
from datetime import date, time

import pytest

from apps.history.models import PhaseHistory
from apps.history.services import PhaseHistoryRecorder
from apps.planning.adapters.orm_repositories import DjangoPhaseRepository, hour_to_time
from apps.planning.application.use_cases import PlanningService
from apps.planning.conf import get_calendar, planning_setting
from apps.planning.domain.calendar import compute_end_instant
from apps.planning.domain.entities import PhaseUpdate
from apps.planning.domain.exceptions import PhaseCommitError
from apps.planning.models import Chantier, WorkPhase
from apps.planning.services import get_planning_service

MON = date(2026, 1, 5)
TUE = date(2026, 1, 6)
WED = date(2026, 1, 7)

pytestmark = pytest.mark.django_db


def _create_phase(chantier, start_date, start_hour=8, duration=8, group_id=1, sequence_number=1, **kwargs):
    end_date, end_hour = compute_end_instant(start_date, start_hour, duration)
    return WorkPhase.objects.create(
        chantier=chantier,
        group_id=group_id,
        sequence_number=sequence_number,
        start_date=start_date,
        end_date=end_date,
        start_hour=hour_to_time(start_hour),
        end_hour=hour_to_time(end_hour),
        duration_hours=duration,
        **kwargs
    )


@pytest.fixture()
def chantier():
    return Chantier.objects.create(name='Rue des Lilas', address='12 rue des Lilas, Lyon')


@pytest.fixture()
def poseur(django_user_model):
    return django_user_model.objects.create_user(
        username='jdupont', password='x', first_name='Jean', last_name='Dupont'
    )


@pytest.fixture()
def repository():
    return DjangoPhaseRepository()


def test_hour_to_time():
    assert hour_to_time(8) == time(8, 0)
    assert hour_to_time(9.5) == time(9, 30)


# --- Repository ------------------------------------------------------------

def test_to_entity(repository, chantier, poseur):
    row = _create_phase(chantier, MON, 13, 4, assignee=poseur, budget_hours=6)

    phase = repository.get_by_id(row.id)

    assert phase.id == row.id
    assert phase.chantier_id == chantier.id
    assert phase.start_hour == 13
    assert phase.end_hour == 17
    assert phase.duration_hours == 4
    assert phase.assignee_id == poseur.id
    assert phase.budget_hours == 6
    assert phase.label is None


def test_get_missing_phase(repository):
    assert repository.get_by_id(12345) is None


def test_list_group(repository, chantier):
    other = Chantier.objects.create(name='Avenue Foch')
    a = _create_phase(chantier, MON, sequence_number=1)
    b = _create_phase(chantier, TUE, sequence_number=2)
    _create_phase(chantier, TUE, group_id=2)
    _create_phase(other, TUE, group_id=1)

    phases = repository.list_group(chantier.id, 1)

    assert [p.id for p in phases] == [a.id, b.id]


def test_apply_phase_updates(repository, chantier):
    a = _create_phase(chantier, MON)
    b = _create_phase(chantier, TUE, sequence_number=2)

    repository.apply_phase_updates(
        [PhaseUpdate(a.id, MON, 13, TUE, 12), PhaseUpdate(b.id, TUE, 13, WED, 12)],
        extra_fields={a.id: {'duration_hours': 8.0}},
    )

    a.refresh_from_db()
    b.refresh_from_db()
    assert (a.start_date, a.start_hour, a.end_date, a.end_hour) == (MON, time(13), TUE, time(12))
    assert (b.start_date, b.start_hour, b.end_date, b.end_hour) == (TUE, time(13), WED, time(12))


def test_apply_phase_updates_is_all_or_nothing(repository, chantier):
    a = _create_phase(chantier, MON)

    with pytest.raises(PhaseCommitError):
        repository.apply_phase_updates([
            PhaseUpdate(a.id, TUE, 8, TUE, 17),
            PhaseUpdate(a.id + 1000, WED, 8, WED, 17),
        ])

    a.refresh_from_db()
    assert a.start_date == MON


def test_assignee_names(repository, django_user_model, poseur):
    anonymous = django_user_model.objects.create_user(username='mpetit', password='x')

    names = repository.assignee_names([poseur.id, anonymous.id, None])

    assert names == {poseur.id: 'Jean Dupont', anonymous.id: 'mpetit'}
    assert repository.assignee_names([None]) == {}


# --- History ---------------------------------------------------------------

def test_recorder_persists_entries(repository, chantier, poseur):
    row = _create_phase(chantier, MON)
    phase = repository.get_by_id(row.id)
    recorder = PhaseHistoryRecorder()

    recorder.record(phase, {'duration_hours': 4}, actor_id=poseur.id)
    recorder.record(phase, {'assignee_id': poseur.id}, actor_id=poseur.id,
                    assignee_names={poseur.id: 'Jean Dupont'})

    history = recorder.chantier_history(chantier.id)
    assert [h.action for h in history] == [
        PhaseHistory.ActionType.ASSIGNEE_CHANGE,
        PhaseHistory.ActionType.DURATION_CHANGE,
    ]
    assert history[0].modified_by == poseur
    assert history[0].description == "Phase 1.1 : Poseur modifié\nNon attribué → Jean Dupont"
    assert history[1].old_values['duration_hours'] == 8
    assert history[1].new_values['duration_hours'] == 4
    assert len(recorder.phase_history(row.id)) == 2
    assert recorder.phase_history(row.id + 1000) == []


# --- Wired service ---------------------------------------------------------

def test_planning_service_end_to_end(chantier, poseur):
    a = _create_phase(chantier, MON, sequence_number=1)
    b = _create_phase(chantier, TUE, sequence_number=2)

    result = get_planning_service().move_phase(a.id, '2026-01-05', 13, actor_id=poseur.id)

    assert len(result.all_updates) == 2
    b.refresh_from_db()
    assert (b.start_date, b.start_hour, b.end_date, b.end_hour) == (TUE, time(13), WED, time(12))

    entry = PhaseHistory.objects.get(phase_id=a.id)
    assert entry.action == PhaseHistory.ActionType.DATE_CHANGE
    assert entry.chantier_id == chantier.id
    assert entry.modified_by_id == poseur.id
    assert entry.new_values['start_hour'] == '13:00:00'
    assert entry.description.startswith("Phase 1.1 : Dates modifiées")
    # Followers shifted by the cascade get no entry of their own
    assert not PhaseHistory.objects.filter(phase_id=b.id).exists()


# --- Settings --------------------------------------------------------------

def test_extra_holidays_from_settings(settings):
    settings.PLANNING = {'EXTRA_HOLIDAYS': ['2026-01-06']}

    calendar = get_calendar()

    assert calendar.is_holiday(TUE)
    assert calendar.is_holiday(date(2026, 1, 1))
    assert planning_setting('WEEKEND_SEPARATOR_WIDTH') == 4


def test_history_failure_rolls_back_the_batch(chantier):
    a = _create_phase(chantier, MON, sequence_number=1)
    b = _create_phase(chantier, TUE, sequence_number=2)

    class BrokenRecorder(PhaseHistoryRecorder):
        def record(self, *args, **kwargs):
            raise RuntimeError("history table unavailable")

    service = PlanningService(repository=DjangoPhaseRepository(), recorder=BrokenRecorder())

    with pytest.raises(RuntimeError):
        service.move_phase(a.id, MON, 13)

    a.refresh_from_db()
    b.refresh_from_db()
    assert (a.start_date, a.start_hour) == (MON, time(8))
    assert (b.start_date, b.start_hour) == (TUE, time(8))
    assert not PhaseHistory.objects.exists()
