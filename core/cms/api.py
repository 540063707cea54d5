import logging
import uuid

from django.db import IntegrityError, transaction
from django.db.models import Count, Q
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from core.audit.models import AuditLog
from core.audit.utils import audit
from core.cms import cache, coordinator
from core.cms.lifecycle import ContentStatus, normalize_status
from core.cms.models import Category, HeroSlide, Tag
from core.cms.permissions import ContentAccessGate
from core.cms.registry import CONTENT_TYPES, HERO
from core.cms.serializers import (
    CategorySerializer,
    HeroReorderSerializer,
    TagSerializer,
    TaxonomyWriteSerializer,
)
from core.common.errors import Conflict, NotFound, ValidationFailed
from core.common.pagination import page_params, paginate
from core.iam import rbac
from core.iam.gate import require
from core.iam.permissions import AccessGate

logger = logging.getLogger(__name__)


def _uuid_param(request, name: str):
    raw = (request.query_params.get(name) or "").strip()
    if not raw:
        return None
    try:
        return uuid.UUID(raw)
    except ValueError:
        raise ValidationFailed.for_field(name, "Must be a valid UUID")


def _links_to(ctype, payload_key: str) -> bool:
    return any(a.name == payload_key for a in ctype.associations)


def _get_entity(ctype, entity_id):
    entity = ctype.model.objects.filter(pk=entity_id).first()
    if not entity:
        raise NotFound(f"{ctype.label} not found")
    return entity


def _require_publish(request, ctype, instance, data: dict) -> None:
    if coordinator.needs_publish_permission(instance, data):
        require(request, ctype.permission("publish"))


# ---------------------------------------------------------------------------
# Content CRUD, one set of views for every registered type
# ---------------------------------------------------------------------------

@api_view(["GET", "POST"])
@permission_classes([ContentAccessGate])
def content_list(request, type_key: str):
    """
    GET  /v1/cms/{type}?q=&status=&tag_id=&category_id=&page=&page_size=
    POST /v1/cms/{type}
    """
    ctype = request.cms_type

    if request.method == "POST":
        s = ctype.write_serializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data
        _require_publish(request, ctype, None, data)

        entity = coordinator.create_content(ctype, data, request.actor.id)
        entity.refresh_from_db()
        return Response({"item": ctype.read_serializer(entity).data}, status=status.HTTP_201_CREATED)

    q = (request.query_params.get("q") or "").strip()
    wanted_status = normalize_status(request.query_params.get("status"))
    tag_id = _uuid_param(request, "tag_id")
    category_id = _uuid_param(request, "category_id")
    page, page_size = page_params(request)

    qs = ctype.model.objects.all()
    if q:
        cond = Q()
        for name in ctype.search_fields:
            cond |= Q(**{f"{name}__icontains": q})
        qs = qs.filter(cond)
    if wanted_status:
        qs = qs.filter(status=wanted_status)
    if tag_id:
        if not _links_to(ctype, "tag_ids"):
            raise ValidationFailed.for_field("tag_id", f"{ctype.label} has no tags")
        qs = qs.filter(tag_links__tag_id=tag_id)
    if category_id:
        if not _links_to(ctype, "category_ids"):
            raise ValidationFailed.for_field("category_id", f"{ctype.label} has no categories")
        qs = qs.filter(category_links__category_id=category_id)

    qs = qs.distinct().order_by(*ctype.ordering)
    items, meta = paginate(qs, page, page_size)
    return Response({"items": ctype.read_serializer(items, many=True).data, **meta})


@api_view(["GET", "PATCH", "DELETE"])
@permission_classes([ContentAccessGate])
def content_detail(request, type_key: str, entity_id):
    """
    GET    /v1/cms/{type}/{id}
    PATCH  /v1/cms/{type}/{id}
    DELETE /v1/cms/{type}/{id}
    """
    ctype = request.cms_type
    entity = _get_entity(ctype, entity_id)

    if request.method == "GET":
        return Response({"item": ctype.read_serializer(entity).data})

    if request.method == "DELETE":
        coordinator.delete_content(ctype, entity, request.actor.id)
        return Response(status=status.HTTP_204_NO_CONTENT)

    s = ctype.write_serializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    data = s.validated_data
    _require_publish(request, ctype, entity, data)

    entity = coordinator.update_content(ctype, entity, data, request.actor.id)
    entity.refresh_from_db()
    return Response({"item": ctype.read_serializer(entity).data})


@api_view(["GET"])
@permission_classes([ContentAccessGate.for_action("read")])
def slug_check(request, type_key: str):
    """
    GET /v1/cms/{type}/slug-check?slug=&exclude_id=
    Advisory only; the unique constraint decides on save.
    """
    ctype = request.cms_type
    slug = (request.query_params.get("slug") or "").strip()
    if not slug:
        raise ValidationFailed.for_field("slug", "This field is required")
    exclude_id = _uuid_param(request, "exclude_id")
    return Response({"slug": slug, "available": not coordinator.slug_taken(ctype, slug, exclude_id)})


@api_view(["POST"])
@permission_classes([AccessGate.requiring(HERO.permission("update"))])
def hero_reorder(request):
    """
    POST /v1/cms/hero/reorder
    Body: {"ordered_ids": ["<uuid>", ...]}
    """
    s = HeroReorderSerializer(data=request.data)
    s.is_valid(raise_exception=True)

    coordinator.reorder_hero_slides(s.validated_data["ordered_ids"], request.actor.id)
    slides = HeroSlide.objects.order_by(*HERO.ordering)
    return Response({"items": HERO.read_serializer(slides, many=True).data})


# ---------------------------------------------------------------------------
# Taxonomy
# ---------------------------------------------------------------------------

def _taxonomy_cache_tags() -> set:
    tags = set()
    for ctype in CONTENT_TYPES.values():
        if _links_to(ctype, "tag_ids") or _links_to(ctype, "category_ids"):
            tags.update(ctype.cache_tags)
    return tags


def _taxonomy_after_commit(action, target_id, actor_id, meta) -> None:
    audit(action, target_id, actor_id, meta, target_type="taxonomy")
    cache.invalidate(_taxonomy_cache_tags())


def _taxonomy_list(request, model, serializer_cls, prefix: str):
    if request.method == "POST":
        s = TaxonomyWriteSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data
        if model.objects.filter(key=data["key"]).exists():
            raise Conflict(f"Key '{data['key']}' is already in use")

        actor_id = request.actor.id
        try:
            with transaction.atomic():
                row = model.objects.create(key=data["key"], name=data["name"])
                meta = {"key": row.key, "name": row.name}
                transaction.on_commit(lambda: _taxonomy_after_commit(f"{prefix}_CREATE", row.pk, actor_id, meta))
        except IntegrityError:
            raise Conflict(f"Key '{data['key']}' is already in use")
        return Response({"item": serializer_cls(row).data}, status=status.HTTP_201_CREATED)

    q = (request.query_params.get("q") or "").strip()
    qs = model.objects.all().order_by("key")
    if q:
        qs = qs.filter(Q(key__icontains=q) | Q(name__icontains=q))
    return Response({"items": serializer_cls(qs, many=True).data})


def _taxonomy_detail(request, model, serializer_cls, prefix: str, row_id):
    row = model.objects.filter(pk=row_id).first()
    if not row:
        raise NotFound(f"{model._meta.verbose_name.capitalize()} not found")

    actor_id = request.actor.id

    if request.method == "DELETE":
        meta = {"key": row.key, "name": row.name}
        with transaction.atomic():
            row.delete()
            transaction.on_commit(lambda: _taxonomy_after_commit(f"{prefix}_DELETE", row_id, actor_id, meta))
        return Response(status=status.HTTP_204_NO_CONTENT)

    s = TaxonomyWriteSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    data = s.validated_data

    if "key" in data and model.objects.filter(key=data["key"]).exclude(pk=row.pk).exists():
        raise Conflict(f"Key '{data['key']}' is already in use")

    before = {"key": row.key, "name": row.name}
    try:
        with transaction.atomic():
            for field in ("key", "name"):
                if field in data:
                    setattr(row, field, data[field])
            row.save()
            meta = {"before": before, "after": {"key": row.key, "name": row.name}}
            transaction.on_commit(lambda: _taxonomy_after_commit(f"{prefix}_UPDATE", row.pk, actor_id, meta))
    except IntegrityError:
        raise Conflict(f"Key '{data.get('key', row.key)}' is already in use")
    return Response({"item": serializer_cls(row).data})


@api_view(["GET", "POST"])
@permission_classes([AccessGate.requiring(rbac.TAXONOMY_MANAGE)])
def tags_list(request):
    """
    GET  /v1/cms/tags?q=
    POST /v1/cms/tags
    """
    return _taxonomy_list(request, Tag, TagSerializer, "CMS_TAG")


@api_view(["PATCH", "DELETE"])
@permission_classes([AccessGate.requiring(rbac.TAXONOMY_MANAGE)])
def tags_detail(request, tag_id):
    return _taxonomy_detail(request, Tag, TagSerializer, "CMS_TAG", tag_id)


@api_view(["GET", "POST"])
@permission_classes([AccessGate.requiring(rbac.TAXONOMY_MANAGE)])
def categories_list(request):
    """
    GET  /v1/cms/categories?q=
    POST /v1/cms/categories
    """
    return _taxonomy_list(request, Category, CategorySerializer, "CMS_CATEGORY")


@api_view(["PATCH", "DELETE"])
@permission_classes([AccessGate.requiring(rbac.TAXONOMY_MANAGE)])
def categories_detail(request, category_id):
    return _taxonomy_detail(request, Category, CategorySerializer, "CMS_CATEGORY", category_id)


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------

REVIEW_QUEUE_SIZE = 8
RECENT_ACTIVITY_SIZE = 12


def _type_counts(ctype) -> dict:
    rows = ctype.model.objects.values("status").annotate(n=Count("pk"))
    by_status = {row["status"]: row["n"] for row in rows}
    return {
        "total": sum(by_status.values()),
        "drafts": by_status.get(ContentStatus.DRAFT, 0),
        "published": by_status.get(ContentStatus.PUBLISHED, 0),
        "scheduled": by_status.get(ContentStatus.SCHEDULED, 0),
    }


def _review_queue() -> list[dict]:
    waiting = []
    for ctype in CONTENT_TYPES.values():
        qs = (
            ctype.model.objects
            .filter(status__in=[ContentStatus.DRAFT, ContentStatus.SCHEDULED])
            .order_by("-updated_at")[:REVIEW_QUEUE_SIZE]
        )
        for entity in qs:
            waiting.append({
                "id": str(entity.pk),
                "type": ctype.key,
                "title": getattr(entity, ctype.title_field),
                "status": entity.status,
                "updated_at": entity.updated_at,
            })
    waiting.sort(key=lambda item: item["updated_at"], reverse=True)
    return waiting[:REVIEW_QUEUE_SIZE]


@api_view(["GET"])
@permission_classes([AccessGate.requiring(section="cms")])
def cms_stats(request):
    """
    GET /v1/cms/stats
    Recent activity is only filled in for actors holding audit.read.
    """
    can_view_activity = rbac.AUDIT_READ in request.actor.permissions
    activity = []
    if can_view_activity:
        entries = AuditLog.objects.filter(action__startswith="CMS_").order_by("-created_at")[:RECENT_ACTIVITY_SIZE]
        activity = [
            {
                "id": e.id,
                "action": e.action,
                "target_type": e.target_type,
                "target_id": e.target_id,
                "created_at": e.created_at,
            }
            for e in entries
        ]

    return Response({
        "counts": {key: _type_counts(ctype) for key, ctype in CONTENT_TYPES.items()},
        "review_queue": _review_queue(),
        "can_view_activity": can_view_activity,
        "recent_activity": activity,
    })
