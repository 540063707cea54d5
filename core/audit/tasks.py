from celery import shared_task
from django.conf import settings

from core.audit.utils import purge


@shared_task(name="core.audit.tasks.purge_audit_logs")
def purge_audit_logs(older_than_days: int | None = None) -> int:
    days = older_than_days or getattr(settings, "AUDIT_RETENTION_DAYS", 365)
    deleted, _ = purge(days)
    return deleted
