from datetime import timedelta
from unittest import mock

import pytest
from django.core.management import call_command
from django.db import DatabaseError
from django.utils import timezone

from core.audit.models import AuditLog
from core.audit.tasks import purge_audit_logs
from core.audit.utils import audit, clamp_days, purge


def _age(entry, days):
    AuditLog.objects.filter(pk=entry.pk).update(created_at=timezone.now() - timedelta(days=days))


@pytest.mark.django_db
def test_audit_writes_entry():
    entry = audit("CMS_FAQ_UPDATE", "abc", 7, {"changed": ["question"]}, target_type="faq")
    assert entry.pk
    stored = AuditLog.objects.get(pk=entry.pk)
    assert (stored.action, stored.target_id, stored.actor_user_id) == ("CMS_FAQ_UPDATE", "abc", 7)
    assert stored.meta_json == {"changed": ["question"]}


@pytest.mark.django_db
def test_audit_failure_is_swallowed_and_logged(caplog):
    with mock.patch("core.audit.utils.AuditLog.objects.create", side_effect=DatabaseError("locked")):
        assert audit("CMS_FAQ_UPDATE", "abc", 7) is None

    record = next(r for r in caplog.records if r.name == "core.audit.utils")
    assert record.levelname == "ERROR"
    assert record.audit_action == "CMS_FAQ_UPDATE"


@pytest.mark.django_db
def test_entries_are_immutable():
    entry = audit("USER_CREATE", 1)
    entry.action = "USER_DELETE"
    with pytest.raises(ValueError):
        entry.save()
    with pytest.raises(ValueError):
        entry.delete()
    assert AuditLog.objects.get(pk=entry.pk).action == "USER_CREATE"


@pytest.mark.parametrize("raw, expected", [(0, 1), (-5, 1), (45, 45), (99999, 3650), ("bad", 30), (None, 30)])
def test_clamp_days(raw, expected):
    assert clamp_days(raw) == expected


@pytest.mark.django_db
def test_purge_only_removes_old_entries():
    old = audit("CMS_FAQ_UPDATE", "a")
    older_other = audit("USER_CREATE", "b")
    fresh = audit("CMS_FAQ_UPDATE", "c")
    _age(old, 40)
    _age(older_other, 40)

    deleted, _ = purge(30, action="CMS_FAQ_UPDATE")
    assert deleted == 1
    assert set(AuditLog.objects.values_list("target_id", flat=True)) == {"b", "c"}

    deleted, _ = purge(30)
    assert deleted == 1
    assert list(AuditLog.objects.values_list("pk", flat=True)) == [fresh.pk]


@pytest.mark.django_db
def test_purge_command():
    _age(audit("USER_CREATE", "a"), 10)
    call_command("purge_audit_logs", "--days", "5")
    assert not AuditLog.objects.exists()


@pytest.mark.django_db
def test_beat_task_uses_retention_setting(settings):
    settings.AUDIT_RETENTION_DAYS = 90
    _age(audit("USER_CREATE", "a"), 100)
    _age(audit("USER_CREATE", "b"), 60)
    assert purge_audit_logs.apply().get() == 1
    assert list(AuditLog.objects.values_list("target_id", flat=True)) == ["b"]
