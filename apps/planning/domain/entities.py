# apps/planning/domain/entities.py
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional, Tuple

# (date, hour) - a precise instant on the working calendar
Instant = Tuple[date, float]


@dataclass
class WorkPhase:
    id: Any
    chantier_id: Any
    start_date: date
    end_date: date
    start_hour: Any = 8  # int, or a raw "HH:MM:SS" value straight from the data layer
    end_hour: Any = 17
    duration_hours: float = 8

    # Chain semantics (None = the phase never cascades)
    group_id: Optional[int] = None
    sequence_number: int = 1

    # Only IDs, the core never sees joined objects
    assignee_id: Optional[Any] = None

    label: Optional[str] = None
    budget_hours: Optional[float] = None


@dataclass(frozen=True)
class WorkingDay:
    date: date
    is_holiday: bool = False
    weekend_before: bool = False


@dataclass(frozen=True)
class PhaseUpdate:
    """Proposed new timing of a phase, produced by the core, committed by the data layer."""
    phase_id: Any
    new_start_date: date
    new_start_hour: int
    new_end_date: date
    new_end_hour: int

    def as_fields(self) -> Dict[str, Any]:
        return {
            'start_date': self.new_start_date,
            'start_hour': self.new_start_hour,
            'end_date': self.new_end_date,
            'end_hour': self.new_end_hour,
        }
