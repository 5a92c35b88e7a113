# apps/planning/models.py
from datetime import time

from django.conf import settings
from django.db import models


class Chantier(models.Model):
    name = models.CharField(max_length=200)
    address = models.CharField(max_length=255, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.name


class WorkPhase(models.Model):
    chantier = models.ForeignKey(Chantier, on_delete=models.CASCADE, related_name='phases')

    # Chain of dependent phases inside a chantier (empty = no cascade)
    group_id = models.PositiveIntegerField(null=True, blank=True)
    sequence_number = models.PositiveIntegerField(default=1)
    label = models.CharField(max_length=200, blank=True)

    start_date = models.DateField()
    end_date = models.DateField()
    start_hour = models.TimeField(default=time(8, 0))
    end_hour = models.TimeField(default=time(17, 0))

    duration_hours = models.FloatField(default=8)
    budget_hours = models.FloatField(null=True, blank=True)

    # Poseur; empty = "sans poseur" lane
    assignee = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='assigned_phases'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['chantier', 'group_id', 'start_date', 'start_hour', 'sequence_number']
        indexes = [
            models.Index(fields=['chantier', 'group_id'], name='phase_chain_idx'),
        ]

    def __str__(self):
        return f"{self.chantier} - Phase {self.group_id or 1}.{self.sequence_number}"
