# apps/planning/domain/cascade.py
import logging
from datetime import date
from typing import Any, List, Optional, Sequence

from apps.planning.domain.calendar import (
    WorkCalendar, default_calendar, parse_local_date, parse_hour,
    MORNING_START, MORNING_END, AFTERNOON_START, AFTERNOON_END,
)
from apps.planning.domain.entities import Instant, PhaseUpdate, WorkPhase

logger = logging.getLogger(__name__)


def _instant(day, hour) -> Instant:
    return parse_local_date(day), parse_hour(hour)


def compare_instants(date_a, hour_a, date_b, hour_b) -> int:
    """-1 / 0 / 1, like a classic comparator. Hours may be raw "HH:MM:SS" values."""
    a = _instant(date_a, hour_a)
    b = _instant(date_b, hour_b)
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def has_overlap(end_date_a, end_hour_a, start_date_b, start_hour_b) -> bool:
    """B overlaps A when B starts before A ends."""
    return compare_instants(start_date_b, start_hour_b, end_date_a, end_hour_a) < 0


class OverlapCascadeResolver:
    """
    Pushes the later phases of a chain (same chantier, same group) forward
    until they no longer overlap the modified phase. Never pulls a phase
    earlier, never touches another group.
    """

    def __init__(self, calendar: Optional[WorkCalendar] = None):
        self.calendar = calendar or default_calendar

    def _next_start(self, end_date: date, end_hour: float) -> Instant:
        # Right after the previous phase, skipping lunch and evenings
        if end_hour == MORNING_END:
            return end_date, AFTERNOON_START
        if end_hour >= AFTERNOON_END:
            return self.calendar.next_working_day(end_date), MORNING_START
        return end_date, end_hour

    def resolve(
        self,
        modified_phase_id: Any,
        new_end_date,
        new_end_hour: float,
        phases: Sequence[WorkPhase]
    ) -> List[PhaseUpdate]:
        updates: List[PhaseUpdate] = []

        # 1. The modified phase must exist and belong to a chain
        modified = next((p for p in phases if p.id == modified_phase_id), None)
        if modified is None or not modified.group_id:
            return updates

        # 2. Siblings of the same chain
        siblings = [
            p for p in phases
            if p.chantier_id == modified.chantier_id
            and p.group_id == modified.group_id
            and p.id != modified.id
        ]
        if not siblings:
            return updates

        # 3. Chronological order, sequence number breaks ties
        siblings.sort(key=lambda p: _instant(p.start_date, p.start_hour) + (p.sequence_number,))

        # 4. Only phases starting after the modified one can be pushed
        modified_start = _instant(modified.start_date, modified.start_hour)
        affected = [p for p in siblings if _instant(p.start_date, p.start_hour) > modified_start]

        # 5. Rolling walk, stops at the first gap
        current_end = (parse_local_date(new_end_date), new_end_hour)
        for phase in affected:
            phase_start = _instant(phase.start_date, phase.start_hour)
            if not phase_start < current_end:
                break

            new_start_date, new_start_hour = self._next_start(*current_end)
            new_end = self.calendar.compute_end_instant(new_start_date, new_start_hour, phase.duration_hours)

            updates.append(PhaseUpdate(
                phase_id=phase.id,
                new_start_date=new_start_date,
                new_start_hour=new_start_hour,
                new_end_date=new_end[0],
                new_end_hour=new_end[1],
            ))
            current_end = new_end

        if updates:
            logger.info(
                "Cascade from phase %s: %d phase(s) shifted in group %s",
                modified_phase_id, len(updates), modified.group_id
            )
        return updates


def resolve(modified_phase_id, new_end_date, new_end_hour, phases, calendar=None) -> List[PhaseUpdate]:
    return OverlapCascadeResolver(calendar).resolve(modified_phase_id, new_end_date, new_end_hour, phases)
