# apps/planning/adapters/orm_repositories.py
import logging
from datetime import time
from typing import Any, Dict, Iterable, List, Optional

from django.contrib.auth import get_user_model
from django.db import DatabaseError, transaction
from django.utils import timezone

from apps.planning.domain.calendar import parse_hour
from apps.planning.domain.entities import WorkPhase, PhaseUpdate
from apps.planning.domain.exceptions import PhaseCommitError
from apps.planning.ports.repositories import IPhaseRepository
from apps.planning.models import WorkPhase as WorkPhaseModel

logger = logging.getLogger(__name__)


def hour_to_time(hour: float) -> time:
    hours = int(hour)
    return time(hours, int(round((hour - hours) * 60)))


class DjangoPhaseRepository(IPhaseRepository):
    def to_entity(self, model: WorkPhaseModel) -> WorkPhase:
        """Django model -> plain domain phase."""
        return WorkPhase(
            id=model.id,
            chantier_id=model.chantier_id,
            group_id=model.group_id,
            sequence_number=model.sequence_number,
            start_date=model.start_date,
            end_date=model.end_date,
            start_hour=parse_hour(model.start_hour),
            end_hour=parse_hour(model.end_hour, default=17),
            duration_hours=model.duration_hours,
            assignee_id=model.assignee_id,
            label=model.label or None,
            budget_hours=model.budget_hours,
        )

    def get_by_id(self, phase_id) -> Optional[WorkPhase]:
        try:
            return self.to_entity(WorkPhaseModel.objects.get(id=phase_id))
        except WorkPhaseModel.DoesNotExist:
            return None

    def list_group(self, chantier_id, group_id) -> List[WorkPhase]:
        qs = WorkPhaseModel.objects.filter(chantier_id=chantier_id, group_id=group_id)
        return [self.to_entity(p) for p in qs]

    def apply_phase_updates(self, updates: List[PhaseUpdate], extra_fields: Optional[Dict[Any, Dict[str, Any]]] = None) -> None:
        extra_fields = extra_fields or {}
        now = timezone.now()

        try:
            # All or nothing: a half-applied cascade leaves overlapping phases
            with transaction.atomic():
                for update in updates:
                    fields = {
                        'start_date': update.new_start_date,
                        'end_date': update.new_end_date,
                        'start_hour': hour_to_time(update.new_start_hour),
                        'end_hour': hour_to_time(update.new_end_hour),
                        'updated_at': now,
                    }
                    fields.update(extra_fields.get(update.phase_id, {}))

                    updated = WorkPhaseModel.objects.filter(id=update.phase_id).update(**fields)
                    if not updated:
                        raise PhaseCommitError(f"Phase {update.phase_id} no longer exists")
        except DatabaseError as e:
            logger.error("Phase batch rolled back (%d updates): %s", len(updates), e)
            raise PhaseCommitError(str(e)) from e
        except PhaseCommitError as e:
            logger.error("Phase batch rolled back (%d updates): %s", len(updates), e)
            raise

        logger.info("Committed %d phase update(s)", len(updates))

    def atomic(self):
        return transaction.atomic()

    def assignee_names(self, assignee_ids: Iterable[Any]) -> Dict[Any, str]:
        ids = [i for i in assignee_ids if i]
        if not ids:
            return {}

        User = get_user_model()
        names = {}
        for user in User.objects.filter(id__in=ids):
            names[user.id] = user.get_full_name().strip() or user.get_username()
        return names
