# apps/planning/application/use_cases.py
import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from apps.planning.domain.calendar import WorkCalendar, default_calendar, parse_hour, parse_local_date
from apps.planning.domain.cascade import OverlapCascadeResolver
from apps.planning.domain.coordinates import (
    WEEKEND_SEPARATOR_WIDTH, pixels_to_date_time, pixels_to_hours, snap_to_valid_hour,
)
from apps.planning.domain.entities import PhaseUpdate, WorkingDay
from apps.planning.domain.exceptions import InvalidDurationError, PhaseNotFoundError
from apps.planning.ports.repositories import IPhaseRepository

logger = logging.getLogger(__name__)

# Pointer jitter below this is not a move
MIN_PIXEL_DELTA = 2


@dataclass
class RescheduleResult:
    phase_update: PhaseUpdate
    cascade_updates: List[PhaseUpdate] = field(default_factory=list)

    @property
    def all_updates(self) -> List[PhaseUpdate]:
        return [self.phase_update] + self.cascade_updates


class PlanningService:
    def __init__(
        self,
        repository: IPhaseRepository,
        recorder=None,
        calendar: Optional[WorkCalendar] = None,
        separator_width: float = WEEKEND_SEPARATOR_WIDTH
    ):
        self.repository = repository
        self.recorder = recorder
        self.calendar = calendar or default_calendar
        self.resolver = OverlapCascadeResolver(self.calendar)
        self.separator_width = separator_width

    def _get_phase(self, phase_id):
        phase = self.repository.get_by_id(phase_id)
        if phase is None:
            raise PhaseNotFoundError(phase_id)
        return phase

    def _reschedule(self, phase, start_date, start_hour, duration_hours, actor_id) -> RescheduleResult:
        # 1. New start/end of the manipulated phase (a drop on 17h starts next morning)
        start_date, start_hour = self.calendar.normalize_start(start_date, parse_hour(start_hour))
        start_hour = snap_to_valid_hour(start_hour)
        end_date, end_hour = self.calendar.compute_end_instant(start_date, start_hour, duration_hours)
        direct = PhaseUpdate(
            phase_id=phase.id,
            new_start_date=start_date,
            new_start_hour=start_hour,
            new_end_date=end_date,
            new_end_hour=end_hour,
        )

        # 2. Cascade on the original timings of the chain
        cascade = []
        if phase.group_id:
            siblings = self.repository.list_group(phase.chantier_id, phase.group_id)
            cascade = self.resolver.resolve(phase.id, end_date, end_hour, siblings)

        # 3. One unit of work for the phase, its followers and the history entry
        extra = {}
        if duration_hours != phase.duration_hours:
            extra[phase.id] = {'duration_hours': duration_hours}
        result = RescheduleResult(phase_update=direct, cascade_updates=cascade)

        with self.repository.atomic():
            self.repository.apply_phase_updates(result.all_updates, extra_fields=extra)

            # 4. History of the direct change
            if self.recorder is not None:
                new_values = dict(direct.as_fields(), duration_hours=duration_hours)
                names = self.repository.assignee_names([phase.assignee_id])
                self.recorder.record(phase, new_values, actor_id=actor_id, assignee_names=names)

        logger.info(
            "Phase %s rescheduled to %s %sh (%d follower(s) shifted)",
            phase.id, start_date, start_hour, len(cascade)
        )
        return result

    def move_phase(self, phase_id, new_start_date, new_start_hour, actor_id: Any = None) -> RescheduleResult:
        """
        Moves a phase, keeping its duration. The start hour may be a raw
        "HH:MM:SS" value; it is snapped to the nearest valid working hour.
        """
        phase = self._get_phase(phase_id)
        start_date = parse_local_date(new_start_date)
        return self._reschedule(phase, start_date, new_start_hour, phase.duration_hours, actor_id)

    def resize_phase(self, phase_id, new_duration_hours: float, actor_id: Any = None) -> RescheduleResult:
        """Changes the duration of a phase, keeping its start."""
        if new_duration_hours <= 0:
            raise InvalidDurationError(f"Phase duration must be positive (got {new_duration_hours})")

        phase = self._get_phase(phase_id)
        start_date = parse_local_date(phase.start_date)
        return self._reschedule(phase, start_date, phase.start_hour, new_duration_hours, actor_id)

    def drag_phase(
        self,
        phase_id,
        x: float,
        initial_left: float,
        column_width: float,
        working_days: Sequence[WorkingDay],
        actor_id: Any = None
    ) -> Optional[RescheduleResult]:
        """Drop of a dragged phase bar; None when nothing has to change."""
        if abs(x - initial_left) < MIN_PIXEL_DELTA:
            return None

        target = pixels_to_date_time(max(0, x), column_width, working_days, self.separator_width)
        if target is None:
            # No layout yet
            return None

        new_date, new_hour = target
        return self.move_phase(phase_id, new_date, new_hour, actor_id=actor_id)

    def drop_resize(
        self,
        phase_id,
        width: float,
        initial_width: float,
        column_width: float,
        actor_id: Any = None
    ) -> Optional[RescheduleResult]:
        """End of a resize of a phase bar; None when nothing has to change."""
        if abs(width - initial_width) < MIN_PIXEL_DELTA:
            return None

        return self.resize_phase(phase_id, pixels_to_hours(width, column_width), actor_id=actor_id)
