from django.urls import path
from core.audit.api import audit_logs, audit_purge

urlpatterns = [
    path("audit/logs", audit_logs, name="audit-logs"),
    path("audit/purge", audit_purge, name="audit-purge"),
]
