"""
Publication lifecycle shared by every content type.

Entities start in DRAFT. ``transition`` computes the resulting status and
published_at from the current values and what the caller asked for; it never
touches the database.

Rules:
  * -> PUBLISHED without an explicit published_at keeps an existing
    published_at and only stamps "now" when there is none.
  * -> SCHEDULED needs a published_at in the same request.
  * -> DRAFT / ARCHIVED leave published_at alone.
  * An explicit published_at (including null) always wins, but PUBLISHED
    and SCHEDULED can never end up without one.
"""
from __future__ import annotations

from datetime import datetime

from django.conf import settings
from django.db import models
from django.utils import timezone

from core.common.errors import ValidationFailed


class ContentStatus(models.TextChoices):
    DRAFT = "DRAFT", "Draft"
    PUBLISHED = "PUBLISHED", "Published"
    SCHEDULED = "SCHEDULED", "Scheduled"
    ARCHIVED = "ARCHIVED", "Archived"


DATED_STATUSES = (ContentStatus.PUBLISHED, ContentStatus.SCHEDULED)

# sentinel for "published_at not present in the request"
UNSET = object()


def normalize_status(raw) -> str | None:
    if raw is None or raw == "":
        return None
    value = str(raw).strip().upper()
    if value not in ContentStatus.values:
        raise ValidationFailed.for_field("status", f"Unknown status: {raw}")
    return value


def transition(
    current_status: str,
    current_published_at: datetime | None,
    requested_status: str | None = None,
    requested_published_at=UNSET,
    now: datetime | None = None,
) -> tuple[str, datetime | None]:
    status = normalize_status(requested_status) or current_status
    explicit = requested_published_at is not UNSET

    if status == ContentStatus.SCHEDULED and requested_status and not explicit:
        raise ValidationFailed.for_field("published_at", "A publish date/time is required to schedule")

    if explicit:
        published_at = requested_published_at
    elif requested_status and status == ContentStatus.PUBLISHED:
        published_at = current_published_at or (now or timezone.now())
    else:
        published_at = current_published_at

    if status in DATED_STATUSES and published_at is None:
        raise ValidationFailed.for_field("published_at", f"{status.title()} content needs a publish date/time")

    return status, published_at


def count_words(text: str | None) -> int:
    return len((text or "").split())


def max_body_words() -> int:
    return int(getattr(settings, "CMS_MAX_BODY_WORDS", 3000))


def check_word_limit(field: str, body) -> None:
    """
    body is the rich-text payload {"type": "markdown", "content": "..."}.
    """
    if not body:
        return
    content = body.get("content", "") if isinstance(body, dict) else str(body)
    limit = max_body_words()
    if count_words(content) > limit:
        raise ValidationFailed.for_field(field, f"Text exceeds {limit} words")
