# tests/test_history.py
from datetime import date, datetime, timezone

import pytest

from apps.history.domain.entities import ChangeKind
from apps.history.domain.services import (
    UNASSIGNED_LABEL,
    build_history_entry,
    describe_change,
    detect_change_kind,
    phase_label,
    phase_snapshot,
)
from apps.planning.domain.entities import WorkPhase

NOW = datetime(2026, 1, 5, 9, 30, tzinfo=timezone.utc)


@pytest.fixture()
def phase():
    return WorkPhase(
        id=7,
        chantier_id=3,
        start_date=date(2026, 1, 5),
        end_date=date(2026, 1, 5),
        start_hour=8,
        end_hour=17,
        duration_hours=8,
        group_id=1,
        sequence_number=2,
        assignee_id=None,
        label='Pose',
        budget_hours=None,
    )


def test_snapshot_format(phase):
    assert phase_snapshot(phase) == {
        'start_date': '2026-01-05',
        'end_date': '2026-01-05',
        'start_hour': '08:00:00',
        'end_hour': '17:00:00',
        'duration_hours': 8,
        'budget_hours': None,
        'assignee_id': None,
        'label': 'Pose',
    }


def test_phase_label(phase):
    assert phase_label(phase) == 'Phase 1.2 (Pose)'

    phase.group_id = None
    phase.label = None
    assert phase_label(phase) == 'Phase 1.2'


@pytest.mark.parametrize('changes, kind', [
    ({'assignee_id': 4, 'budget_hours': 12, 'start_date': '2026-01-06'}, ChangeKind.ASSIGNEE_CHANGE),
    ({'budget_hours': 12, 'duration_hours': 4}, ChangeKind.BUDGET_CHANGE),
    ({'duration_hours': 4, 'end_hour': '12:00:00'}, ChangeKind.DURATION_CHANGE),
    ({'end_hour': '12:00:00'}, ChangeKind.DATE_CHANGE),
    ({'start_date': '2026-01-06'}, ChangeKind.DATE_CHANGE),
    ({'label': 'Finitions'}, ChangeKind.UPDATE),
    ({}, ChangeKind.UPDATE),
])
def test_change_kind_priority(phase, changes, kind):
    old = phase_snapshot(phase)
    assert detect_change_kind(old, {**old, **changes}) == kind


def test_date_change_description(phase):
    entry = build_history_entry(
        phase,
        {'start_date': date(2026, 1, 6), 'start_hour': 13, 'end_date': date(2026, 1, 7), 'end_hour': 12},
        actor_id=5,
        timestamp=NOW,
    )

    assert entry.change_kind == ChangeKind.DATE_CHANGE
    assert entry.description == (
        "Phase 1.2 (Pose) : Dates modifiées\n"
        "Début: 2026-01-05 → 2026-01-06\n"
        "Heure début: 08:00 → 13:00\n"
        "Fin: 2026-01-05 → 2026-01-07\n"
        "Heure fin: 17:00 → 12:00"
    )
    assert entry.new_values['start_hour'] == '13:00:00'
    assert entry.new_values['start_date'] == '2026-01-06'
    assert entry.old_values['start_date'] == '2026-01-05'
    assert entry.phase_id == 7
    assert entry.chantier_id == 3
    assert entry.actor_id == 5
    assert entry.timestamp == NOW


def test_partial_values_keep_old_ones(phase):
    entry = build_history_entry(phase, {'start_hour': 13}, actor_id=None, timestamp=NOW)

    assert entry.change_kind == ChangeKind.DATE_CHANGE
    assert entry.description == "Phase 1.2 (Pose) : Dates modifiées\nHeure début: 08:00 → 13:00"
    assert entry.new_values['end_date'] == '2026-01-05'
    assert entry.new_values['duration_hours'] == 8


def test_duration_change_description(phase):
    entry = build_history_entry(phase, {'duration_hours': 12}, actor_id=None, timestamp=NOW)

    assert entry.change_kind == ChangeKind.DURATION_CHANGE
    assert entry.description == "Phase 1.2 (Pose) : Durée modifiée\n8h → 12h"


def test_budget_change_description(phase):
    entry = build_history_entry(phase, {'budget_hours': 16}, actor_id=None, timestamp=NOW)

    assert entry.change_kind == ChangeKind.BUDGET_CHANGE
    assert entry.description == "Phase 1.2 (Pose) : Budget heures modifié\n0h → 16h"


def test_assignee_change_uses_names(phase):
    entry = build_history_entry(
        phase, {'assignee_id': 4}, actor_id=None, timestamp=NOW,
        assignee_names={4: 'Jean Dupont'},
    )

    assert entry.change_kind == ChangeKind.ASSIGNEE_CHANGE
    assert entry.description == f"Phase 1.2 (Pose) : Poseur modifié\n{UNASSIGNED_LABEL} → Jean Dupont"


def test_assignee_change_unknown_name(phase):
    phase.assignee_id = 4
    entry = build_history_entry(phase, {'assignee_id': 9}, actor_id=None, timestamp=NOW)

    assert entry.description == "Phase 1.2 (Pose) : Poseur modifié\n4 → 9"


def test_forced_kinds(phase):
    created = build_history_entry(phase, {}, actor_id=1, timestamp=NOW, forced_kind=ChangeKind.CREATE)
    deleted = build_history_entry(phase, {}, actor_id=1, timestamp=NOW, forced_kind=ChangeKind.DELETE)

    assert created.change_kind == ChangeKind.CREATE
    assert created.description == "Phase 1.2 (Pose) : Créée"
    assert deleted.description == "Phase 1.2 (Pose) : Supprimée"


def test_generic_update(phase):
    entry = build_history_entry(phase, {'label': 'Finitions'}, actor_id=1, timestamp=NOW)

    assert entry.change_kind == ChangeKind.UPDATE
    assert entry.description == "Phase 1.2 (Pose) : Modifiée"
    assert entry.new_values['label'] == 'Finitions'


def test_untracked_fields_are_ignored(phase):
    entry = build_history_entry(phase, {'color': 'red'}, actor_id=1, timestamp=NOW)

    assert 'color' not in entry.new_values
    assert entry.change_kind == ChangeKind.UPDATE


def test_describe_change_directly(phase):
    old = phase_snapshot(phase)
    text = describe_change(ChangeKind.DURATION_CHANGE, old, {**old, 'duration_hours': 2.5}, phase)
    assert text == "Phase 1.2 (Pose) : Durée modifiée\n8h → 2.5h"
