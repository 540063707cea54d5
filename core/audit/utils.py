from __future__ import annotations

import logging
from datetime import timedelta

from django.utils import timezone

from core.audit.models import AuditLog
from core.common.errors import AuditWriteFailure

logger = logging.getLogger(__name__)

MIN_RETENTION_DAYS = 1
MAX_RETENTION_DAYS = 3650


def audit(action, target_id, actor_user_id=None, data=None, target_type="") -> AuditLog | None:
    """
    Best effort: meant to run after the mutation it describes has committed,
    so a failure here is logged and swallowed rather than failing the caller.
    """
    try:
        return AuditLog.objects.create(
            action=action,
            target_type=target_type,
            target_id=str(target_id),
            actor_user_id=actor_user_id,
            meta_json=data or {},
        )
    except Exception as e:
        failure = AuditWriteFailure(f"{action} on {target_type or 'target'} {target_id}")
        failure.__cause__ = e
        logger.error(
            "audit write failed: %s",
            failure,
            exc_info=failure,
            extra={"audit_action": action, "target_id": str(target_id), "actor_user_id": actor_user_id},
        )
        return None


def clamp_days(raw, default: int = 30) -> int:
    try:
        days = int(raw)
    except (TypeError, ValueError):
        days = default
    return max(MIN_RETENTION_DAYS, min(MAX_RETENTION_DAYS, days))


def purge(older_than_days: int, action: str | None = None) -> tuple[int, object]:
    """
    Retention purge. Deliberately not audited itself.
    """
    cutoff = timezone.now() - timedelta(days=clamp_days(older_than_days))
    qs = AuditLog.objects.filter(created_at__lt=cutoff)
    if action:
        qs = qs.filter(action=action)
    deleted, _ = qs.delete()
    logger.info("audit purge removed %s entries older than %s", deleted, cutoff.isoformat())
    return deleted, cutoff
