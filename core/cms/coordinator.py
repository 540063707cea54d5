"""
Write path for every content type.

    validate -> advisory slug check -> lifecycle.transition ->
    atomic(entity row + association replacement) ->
    after commit: audit entries, then cache invalidation

The slug pre-check is only advisory; the unique constraint is the authority
and an IntegrityError on commit is reported as a Conflict. Association
updates use replace semantics: the whole set for a relation is deleted and
recreated from the payload.
"""
from __future__ import annotations

import logging
from datetime import datetime

from django.db import DatabaseError, IntegrityError, transaction
from django.utils import timezone

from core.audit.utils import audit
from core.cms import cache
from core.cms.lifecycle import DATED_STATUSES, UNSET, ContentStatus, check_word_limit, transition
from core.cms.models import HeroSlide
from core.cms.registry import HERO, Association, ContentType
from core.common.errors import Conflict, TransactionFailure, ValidationFailed

logger = logging.getLogger(__name__)


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def slug_taken(ctype: ContentType, slug: str, exclude_id=None) -> bool:
    qs = ctype.model.objects.filter(**{ctype.slug_field: slug})
    if exclude_id:
        qs = qs.exclude(pk=exclude_id)
    return qs.exists()


def needs_publish_permission(instance, payload: dict) -> bool:
    """
    True when the request would move an entity into PUBLISHED/SCHEDULED or
    change the publish time of one that is.
    """
    current = instance.status if instance is not None else ContentStatus.DRAFT
    target = payload.get("status") or current
    if target not in DATED_STATUSES:
        return False
    return target != current or "published_at" in payload


def _validate_bodies(ctype: ContentType, payload: dict) -> None:
    for name in ctype.body_fields:
        if name in payload:
            check_word_limit(name, payload[name])


def _validate_links(ctype: ContentType, payload: dict) -> dict[Association, list]:
    out = {}
    for assoc in ctype.associations:
        if assoc.name not in payload:
            continue
        items = assoc.items_from_payload(payload[assoc.name])
        ids = [target_id for target_id, _ in items]
        existing = set(assoc.target.objects.filter(pk__in=ids).values_list("pk", flat=True))
        missing = [str(i) for i in ids if i not in existing]
        if missing:
            raise ValidationFailed.for_field(assoc.name, f"Unknown ids: {', '.join(missing)}")
        out[assoc] = items
    return out


def _apply_scalars(ctype: ContentType, entity, payload: dict) -> list[str]:
    changed = []
    for name in ctype.scalar_fields:
        if name not in payload:
            continue
        value = payload[name]
        field = ctype.model._meta.get_field(name)
        if value is None and not field.null:
            value = field.get_default()
        if isinstance(value, dict):
            value = dict(value)
        setattr(entity, name, value)
        changed.append(name)
    return changed


def _replace_links(assoc: Association, entity, items: list) -> None:
    assoc.through.objects.filter(**{assoc.owner_field: entity}).delete()
    assoc.through.objects.bulk_create([
        assoc.through(**{assoc.owner_field: entity, f"{assoc.target_field}_id": target_id, "order": order})
        for target_id, order in items
    ])


def _after_commit(ctype: ContentType, actor_id, entries: list) -> None:
    for action, target_id, meta in entries:
        audit(action, target_id, actor_id, meta, target_type=ctype.key)
    cache.invalidate(ctype.cache_tags)


def _commit(ctype: ContentType, actor_id, work, slug: str | None = None, exclude_id=None):
    """
    Runs work() in one transaction. work returns (result, audit entries).
    Nothing after-commit is scheduled if the transaction rolls back.
    """
    try:
        with transaction.atomic():
            result, entries = work()
            transaction.on_commit(lambda: _after_commit(ctype, actor_id, entries))
    except IntegrityError:
        if slug and slug_taken(ctype, slug, exclude_id):
            raise Conflict()
        logger.exception("integrity error writing %s", ctype.key)
        raise TransactionFailure()
    except DatabaseError:
        logger.exception("transaction failed writing %s", ctype.key)
        raise TransactionFailure()
    return result


def _summary(ctype: ContentType, entity) -> dict:
    return {
        "title": getattr(entity, ctype.title_field, ""),
        "slug": getattr(entity, ctype.slug_field, ""),
        "status": entity.status,
    }


def create_content(ctype: ContentType, payload: dict, actor_id):
    """
    Always inserts in DRAFT. A requested non-draft status is applied as a
    second transition inside the same transaction so the audit trail shows
    the create and the publish/schedule separately.
    """
    payload = dict(payload)
    requested_status = payload.pop("status", None)
    requested_published_at = payload.pop("published_at", UNSET)

    _validate_bodies(ctype, payload)
    links = _validate_links(ctype, payload)

    slug = payload.get(ctype.slug_field)
    if slug and slug_taken(ctype, slug):
        raise Conflict()

    moves = requested_status not in (None, ContentStatus.DRAFT)
    if moves:
        status, published_at = transition(ContentStatus.DRAFT, None, requested_status, requested_published_at)
    else:
        status, published_at = transition(ContentStatus.DRAFT, None, None, requested_published_at)

    def work():
        entity = ctype.model(
            status=ContentStatus.DRAFT,
            published_at=None if moves else published_at,
            author_id=actor_id,
            updated_by_id=actor_id,
        )
        _apply_scalars(ctype, entity, payload)
        entity.save()

        for assoc, items in links.items():
            _replace_links(assoc, entity, items)

        entries = [(ctype.action("CREATE"), entity.pk, _summary(ctype, entity))]

        if moves:
            entity.status = status
            entity.published_at = published_at
            entity.updated_at = timezone.now()
            entity.save(update_fields=["status", "published_at", "updated_at"])
            entries.append((
                ctype.action("UPDATE"),
                entity.pk,
                {
                    **_summary(ctype, entity),
                    "transition": {"from": ContentStatus.DRAFT, "to": status},
                    "published_at": _iso(published_at),
                },
            ))
        return entity, entries

    return _commit(ctype, actor_id, work, slug=slug)


def update_content(ctype: ContentType, instance, payload: dict, actor_id):
    """
    Partial update. Associations present in the payload are replaced in full.
    """
    payload = dict(payload)
    requested_status = payload.pop("status", None)
    requested_published_at = payload.pop("published_at", UNSET)

    _validate_bodies(ctype, payload)
    links = _validate_links(ctype, payload)

    slug = payload.get(ctype.slug_field)
    if slug and slug_taken(ctype, slug, exclude_id=instance.pk):
        raise Conflict()

    status_before = instance.status
    status, published_at = transition(
        instance.status, instance.published_at, requested_status, requested_published_at
    )

    def work():
        changed = _apply_scalars(ctype, instance, payload)
        instance.status = status
        instance.published_at = published_at
        instance.updated_by_id = actor_id
        instance.updated_at = timezone.now()
        instance.save()

        for assoc, items in links.items():
            _replace_links(assoc, instance, items)

        meta = {
            **_summary(ctype, instance),
            "changed": sorted(changed + [a.name for a in links]),
            "published_at": _iso(published_at),
        }
        if status != status_before:
            meta["transition"] = {"from": status_before, "to": status}
        return instance, [(ctype.action("UPDATE"), instance.pk, meta)]

    return _commit(ctype, actor_id, work, slug=slug, exclude_id=instance.pk)


def save_content(ctype: ContentType, payload: dict, actor_id, instance=None):
    if instance is None:
        return create_content(ctype, payload, actor_id)
    return update_content(ctype, instance, payload, actor_id)


def delete_content(ctype: ContentType, instance, actor_id) -> None:
    """
    Hard delete; the audit entry keeps a snapshot of what was removed.
    """
    pk = instance.pk
    meta = _summary(ctype, instance)

    def work():
        instance.delete()
        return None, [(ctype.action("DELETE"), pk, meta)]

    _commit(ctype, actor_id, work)


def reorder_hero_slides(ordered_ids: list, actor_id) -> list[str]:
    ids = list(dict.fromkeys(ordered_ids))
    existing = set(HeroSlide.objects.filter(pk__in=ids).values_list("pk", flat=True))
    missing = [str(i) for i in ids if i not in existing]
    if missing:
        raise ValidationFailed.for_field("ordered_ids", f"Unknown ids: {', '.join(missing)}")

    def work():
        now = timezone.now()
        for idx, slide_id in enumerate(ids):
            HeroSlide.objects.filter(pk=slide_id).update(order=idx, updated_by_id=actor_id, updated_at=now)
        order = [str(i) for i in ids]
        return order, [("CMS_HERO_REORDER", "hero_slides", {"ordered_ids": order})]

    return _commit(HERO, actor_id, work)
