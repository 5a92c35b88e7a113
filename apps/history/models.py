# apps/history/models.py
from django.conf import settings
from django.db import models

from apps.history.domain.entities import ChangeKind


class PhaseHistory(models.Model):
    """Append-only log of phase mutations."""

    # Kept as plain ids: the log outlives deleted phases
    phase_id = models.PositiveBigIntegerField(db_index=True)
    chantier_id = models.PositiveBigIntegerField(db_index=True)

    modified_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='phase_changes'
    )
    modified_at = models.DateTimeField()

    class ActionType(models.TextChoices):
        CREATE = ChangeKind.CREATE.value, 'Création'
        DELETE = ChangeKind.DELETE.value, 'Suppression'
        DATE_CHANGE = ChangeKind.DATE_CHANGE.value, 'Changement de dates'
        DURATION_CHANGE = ChangeKind.DURATION_CHANGE.value, 'Changement de durée'
        ASSIGNEE_CHANGE = ChangeKind.ASSIGNEE_CHANGE.value, 'Changement de poseur'
        BUDGET_CHANGE = ChangeKind.BUDGET_CHANGE.value, 'Changement de budget'
        UPDATE = ChangeKind.UPDATE.value, 'Modification'

    action = models.CharField(max_length=20, choices=ActionType.choices)
    description = models.TextField(blank=True)

    # Snapshots of the tracked fields, e.g. {"start_date": "2026-01-05", "start_hour": "08:00:00"}
    old_values = models.JSONField(default=dict, blank=True)
    new_values = models.JSONField(default=dict, blank=True)

    class Meta:
        ordering = ['-modified_at', '-id']
        verbose_name_plural = 'phase history'

    def __str__(self):
        return f"{self.phase_id} - {self.action} - {self.modified_at}"
