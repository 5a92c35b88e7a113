from django.contrib import admin
from .models import PhaseHistory


@admin.register(PhaseHistory)
class PhaseHistoryAdmin(admin.ModelAdmin):
    list_display = ('modified_at', 'chantier_id', 'phase_id', 'action', 'modified_by')
    list_filter = ('action',)
    search_fields = ('description',)

    # The log is append-only
    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
