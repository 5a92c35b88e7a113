# apps/history/services.py
import logging
from typing import Any, List, Mapping, Optional

from django.utils import timezone

from apps.history.domain.entities import ChangeKind, HistoryEntry
from apps.history.domain.services import build_history_entry
from apps.planning.domain.entities import WorkPhase
from .models import PhaseHistory

logger = logging.getLogger(__name__)


class PhaseHistoryRecorder:
    def record(
        self,
        phase: WorkPhase,
        new_values: Mapping[str, Any],
        actor_id: Any,
        forced_kind: Optional[ChangeKind] = None,
        assignee_names: Optional[Mapping[Any, str]] = None
    ) -> HistoryEntry:
        """Classifies the mutation of ``phase`` and appends it to the log."""
        entry = build_history_entry(
            phase,
            new_values,
            actor_id=actor_id,
            timestamp=timezone.now(),
            forced_kind=forced_kind,
            assignee_names=assignee_names,
        )

        PhaseHistory.objects.create(
            phase_id=entry.phase_id,
            chantier_id=entry.chantier_id,
            modified_by_id=entry.actor_id,
            modified_at=entry.timestamp,
            action=entry.change_kind.value,
            description=entry.description,
            old_values=entry.old_values,
            new_values=entry.new_values,
        )
        logger.debug("History %s recorded for phase %s", entry.change_kind.value, entry.phase_id)
        return entry

    def chantier_history(self, chantier_id) -> List[PhaseHistory]:
        """Newest first."""
        return list(PhaseHistory.objects.filter(chantier_id=chantier_id))

    def phase_history(self, phase_id) -> List[PhaseHistory]:
        return list(PhaseHistory.objects.filter(phase_id=phase_id))
