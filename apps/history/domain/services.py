# apps/history/domain/services.py
from datetime import date
from typing import Any, Dict, Mapping, Optional

from apps.history.domain.entities import (
    ChangeKind, HistoryEntry, TRACKED_FIELDS, SCHEDULE_FIELDS,
)
from apps.planning.domain.calendar import format_local_date, hour_to_time_string, parse_hour
from apps.planning.domain.entities import WorkPhase

UNASSIGNED_LABEL = "Non attribué"


def phase_snapshot(phase: WorkPhase) -> Dict[str, Any]:
    """JSON-friendly copy of the tracked fields (dates YYYY-MM-DD, hours HH:00:00)."""
    return {
        'start_date': _date_value(phase.start_date),
        'end_date': _date_value(phase.end_date),
        'start_hour': hour_to_time_string(parse_hour(phase.start_hour)),
        'end_hour': hour_to_time_string(parse_hour(phase.end_hour, default=17)),
        'duration_hours': phase.duration_hours,
        'budget_hours': phase.budget_hours,
        'assignee_id': phase.assignee_id,
        'label': phase.label,
    }


def normalize_values(values: Mapping[str, Any]) -> Dict[str, Any]:
    """Puts partial new values in the snapshot format (only keys that are present)."""
    normalized = {}
    for key, value in values.items():
        if key not in TRACKED_FIELDS:
            continue
        if key in ('start_date', 'end_date'):
            value = _date_value(value)
        elif key == 'start_hour':
            value = hour_to_time_string(parse_hour(value))
        elif key == 'end_hour':
            value = hour_to_time_string(parse_hour(value, default=17))
        normalized[key] = value
    return normalized


def _date_value(value):
    if isinstance(value, date):
        return format_local_date(value)
    return value or None


def detect_change_kind(old: Mapping[str, Any], new: Mapping[str, Any]) -> ChangeKind:
    """The most specific change wins: assignee > budget > duration > dates."""
    if old.get('assignee_id') != new.get('assignee_id'):
        return ChangeKind.ASSIGNEE_CHANGE
    if old.get('budget_hours') != new.get('budget_hours'):
        return ChangeKind.BUDGET_CHANGE
    if old.get('duration_hours') != new.get('duration_hours'):
        return ChangeKind.DURATION_CHANGE
    if any(old.get(f) != new.get(f) for f in SCHEDULE_FIELDS):
        return ChangeKind.DATE_CHANGE
    return ChangeKind.UPDATE


def phase_label(phase: WorkPhase) -> str:
    label = f"Phase {phase.group_id or 1}.{phase.sequence_number}"
    if phase.label:
        label += f" ({phase.label})"
    return label


def _hours(value) -> str:
    return f"{value or 0:g}h"


def _short_hour(value) -> str:
    return (value or '')[:5]


def _assignee_name(assignee_id, assignee_names: Mapping[Any, str]) -> str:
    if not assignee_id:
        return UNASSIGNED_LABEL
    return assignee_names.get(assignee_id) or str(assignee_id)


def describe_change(
    kind: ChangeKind,
    old: Mapping[str, Any],
    new: Mapping[str, Any],
    phase: WorkPhase,
    assignee_names: Optional[Mapping[Any, str]] = None
) -> str:
    label = phase_label(phase)

    if kind == ChangeKind.CREATE:
        return f"{label} : Créée"
    if kind == ChangeKind.DELETE:
        return f"{label} : Supprimée"

    if kind == ChangeKind.DATE_CHANGE:
        parts = []
        if old.get('start_date') != new.get('start_date'):
            parts.append(f"Début: {old.get('start_date')} → {new.get('start_date')}")
        if old.get('start_hour') != new.get('start_hour'):
            parts.append(f"Heure début: {_short_hour(old.get('start_hour'))} → {_short_hour(new.get('start_hour'))}")
        if old.get('end_date') != new.get('end_date'):
            parts.append(f"Fin: {old.get('end_date')} → {new.get('end_date')}")
        if old.get('end_hour') != new.get('end_hour'):
            parts.append(f"Heure fin: {_short_hour(old.get('end_hour'))} → {_short_hour(new.get('end_hour'))}")
        return f"{label} : Dates modifiées\n" + "\n".join(parts)

    if kind == ChangeKind.DURATION_CHANGE:
        return f"{label} : Durée modifiée\n{_hours(old.get('duration_hours'))} → {_hours(new.get('duration_hours'))}"

    if kind == ChangeKind.ASSIGNEE_CHANGE:
        names = assignee_names or {}
        old_name = _assignee_name(old.get('assignee_id'), names)
        new_name = _assignee_name(new.get('assignee_id'), names)
        return f"{label} : Poseur modifié\n{old_name} → {new_name}"

    if kind == ChangeKind.BUDGET_CHANGE:
        return f"{label} : Budget heures modifié\n{_hours(old.get('budget_hours'))} → {_hours(new.get('budget_hours'))}"

    return f"{label} : Modifiée"


def build_history_entry(
    phase: WorkPhase,
    new_values: Mapping[str, Any],
    actor_id: Any,
    timestamp,
    forced_kind: Optional[ChangeKind] = None,
    assignee_names: Optional[Mapping[Any, str]] = None
) -> HistoryEntry:
    """
    One history entry for one mutation of ``phase``.
    ``new_values`` may be partial; missing keys keep their old value.
    """
    old = phase_snapshot(phase)
    merged = {**old, **normalize_values(new_values)}

    kind = forced_kind or detect_change_kind(old, merged)
    description = describe_change(kind, old, merged, phase, assignee_names)

    return HistoryEntry(
        phase_id=phase.id,
        chantier_id=phase.chantier_id,
        actor_id=actor_id,
        timestamp=timestamp,
        change_kind=kind,
        description=description,
        old_values=old,
        new_values=merged,
    )
