import uuid

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import models

STATUS_CHOICES = [
    ("DRAFT", "Draft"),
    ("PUBLISHED", "Published"),
    ("SCHEDULED", "Scheduled"),
    ("ARCHIVED", "Archived"),
]


def content_fields():
    return [
        ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
        ("status", models.CharField(choices=STATUS_CHOICES, db_index=True, default="DRAFT", max_length=16)),
        ("published_at", models.DateTimeField(blank=True, db_index=True, null=True)),
        ("created_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
        ("updated_at", models.DateTimeField(default=django.utils.timezone.now)),
        (
            "author",
            models.ForeignKey(
                blank=True,
                null=True,
                on_delete=django.db.models.deletion.SET_NULL,
                related_name="+",
                to=settings.AUTH_USER_MODEL,
            ),
        ),
        (
            "updated_by",
            models.ForeignKey(
                blank=True,
                null=True,
                on_delete=django.db.models.deletion.SET_NULL,
                related_name="+",
                to=settings.AUTH_USER_MODEL,
            ),
        ),
    ]


def media_fk():
    return models.ForeignKey(
        blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to="cms.media"
    )


def link_fields(owner, owner_model, target, target_model, owner_related):
    return [
        ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
        ("order", models.PositiveIntegerField(default=0)),
        (
            owner,
            models.ForeignKey(
                on_delete=django.db.models.deletion.CASCADE, related_name=owner_related, to=owner_model
            ),
        ),
        (
            target,
            models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="+", to=target_model),
        ),
    ]
