from datetime import datetime, time, timedelta

from django.db.models import Q
from django.utils import timezone
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from core.audit.models import AuditLog
from core.audit.serializers import AuditLogSerializer, AuditPurgeSerializer
from core.audit.utils import purge
from core.common.errors import ValidationFailed
from core.common.pagination import page_params, paginate
from core.iam import rbac
from core.iam.permissions import AccessGate


def _parse_day(raw: str, field: str):
    try:
        day = datetime.strptime(raw, "%Y-%m-%d").date()
    except ValueError:
        raise ValidationFailed.for_field(field, "Expected YYYY-MM-DD")
    return timezone.make_aware(datetime.combine(day, time.min))


@api_view(["GET"])
@permission_classes([AccessGate.requiring(rbac.AUDIT_READ)])
def audit_logs(request):
    """
    GET /v1/audit/logs

    Query:
      q=<search optional: action / target id>
      action=<exact action optional>
      from=<YYYY-MM-DD optional>
      to=<YYYY-MM-DD optional, inclusive>
      page, page_size (default 20, max 100)
    """
    q = (request.query_params.get("q") or "").strip()
    action = (request.query_params.get("action") or "").strip()
    day_from = (request.query_params.get("from") or "").strip()
    day_to = (request.query_params.get("to") or "").strip()
    page, page_size = page_params(request, default_size=20, max_size=100)

    qs = AuditLog.objects.all().order_by("-created_at", "-id")

    if action:
        qs = qs.filter(action=action)
    if q:
        qs = qs.filter(Q(action__icontains=q) | Q(target_id__icontains=q))
    if day_from:
        qs = qs.filter(created_at__gte=_parse_day(day_from, "from"))
    if day_to:
        qs = qs.filter(created_at__lt=_parse_day(day_to, "to") + timedelta(days=1))

    items, meta = paginate(qs, page, page_size)
    return Response({"items": AuditLogSerializer(items, many=True).data, **meta})


@api_view(["POST"])
@permission_classes([AccessGate.requiring(rbac.AUDIT_PURGE)])
def audit_purge(request):
    """
    POST /v1/audit/purge
    Body: {"older_than_days": 30, "action": "CMS_ARTICLE_UPDATE" (optional)}
    """
    s = AuditPurgeSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    data = s.validated_data

    action = data.get("action") or None
    deleted, cutoff = purge(data["older_than_days"], action)
    return Response({
        "ok": True,
        "deleted": deleted,
        "cutoff": cutoff.isoformat(),
        "filtered_by_action": action,
    })
