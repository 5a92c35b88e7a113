from django.contrib import admin
from .models import Chantier, WorkPhase


class WorkPhaseInline(admin.TabularInline):
    model = WorkPhase
    extra = 0
    fields = ('group_id', 'sequence_number', 'label', 'start_date', 'start_hour',
              'end_date', 'end_hour', 'duration_hours', 'assignee')


@admin.register(Chantier)
class ChantierAdmin(admin.ModelAdmin):
    list_display = ('name', 'address', 'created_at')
    search_fields = ('name',)
    inlines = [WorkPhaseInline]


@admin.register(WorkPhase)
class WorkPhaseAdmin(admin.ModelAdmin):
    list_display = ('chantier', 'group_id', 'sequence_number', 'label', 'start_date', 'end_date', 'assignee')
    list_filter = ('chantier', 'assignee')
    search_fields = ('label', 'chantier__name')
