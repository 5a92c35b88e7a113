# apps/history/domain/entities.py
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict


class ChangeKind(str, Enum):
    CREATE = 'create'
    DELETE = 'delete'
    DATE_CHANGE = 'date_change'
    DURATION_CHANGE = 'duration_change'
    ASSIGNEE_CHANGE = 'assignee_change'
    BUDGET_CHANGE = 'budget_change'
    UPDATE = 'update'


# Mutable fields captured in the old/new snapshots
TRACKED_FIELDS = (
    'start_date',
    'end_date',
    'start_hour',
    'end_hour',
    'duration_hours',
    'budget_hours',
    'assignee_id',
    'label',
)

SCHEDULE_FIELDS = ('start_date', 'end_date', 'start_hour', 'end_hour')


@dataclass
class HistoryEntry:
    phase_id: Any
    chantier_id: Any
    actor_id: Any
    timestamp: datetime
    change_kind: ChangeKind
    description: str
    old_values: Dict[str, Any] = field(default_factory=dict)
    new_values: Dict[str, Any] = field(default_factory=dict)
