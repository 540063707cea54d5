from django.db import models
from django.utils import timezone


class AuditLog(models.Model):
    """
    Append-only. Rows are never updated; the only delete path is the
    retention purge in core.audit.utils.purge (a queryset delete).
    """
    id = models.BigAutoField(primary_key=True)

    actor_user_id = models.BigIntegerField(null=True, blank=True, db_index=True)

    action = models.CharField(max_length=64, db_index=True)
    target_type = models.CharField(max_length=64, blank=True, default="")
    target_id = models.CharField(max_length=64, db_index=True)

    meta_json = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = "audit_logs"
        indexes = [models.Index(fields=["action", "created_at"], name="audit_action_created_idx")]

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError("audit entries are immutable")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValueError("audit entries are removed only by retention purge")
