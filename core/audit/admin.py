from django.contrib import admin

from core.audit.models import AuditLog


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ("id", "action", "target_type", "target_id", "actor_user_id", "created_at")
    search_fields = ("action", "target_id")
    list_filter = ("action", "created_at")

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
