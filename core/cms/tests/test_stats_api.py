from datetime import timedelta

import pytest
from django.utils import timezone

from core.audit.models import AuditLog
from core.cms.lifecycle import ContentStatus
from core.cms.models import Article, Education, News


def rich(text):
    return {"type": "markdown", "content": text}


@pytest.fixture
def content(db):
    now = timezone.now()
    Article.objects.create(title="Draft one", slug="draft-one", body=rich("x"))
    Article.objects.create(
        title="Live", slug="live", body=rich("x"), status=ContentStatus.PUBLISHED, published_at=now
    )
    News.objects.create(
        title="Soon", slug="soon", body=rich("x"),
        status=ContentStatus.SCHEDULED, published_at=now + timedelta(days=2),
        updated_at=now + timedelta(minutes=1),
    )
    Education.objects.create(
        title="Old", slug="old", body=rich("x"), status=ContentStatus.ARCHIVED, published_at=now
    )
    AuditLog.objects.create(action="CMS_NEWS_CREATE", target_type="news", target_id="n1")
    AuditLog.objects.create(action="USER_CREATE", target_type="user", target_id="7")


@pytest.mark.django_db
def test_stats_counts_per_type(client_for, editor, content):
    r = client_for(editor).get("/v1/cms/stats")
    assert r.status_code == 200
    counts = r.json()["counts"]
    assert counts["article"] == {"total": 2, "drafts": 1, "published": 1, "scheduled": 0}
    assert counts["news"] == {"total": 1, "drafts": 0, "published": 0, "scheduled": 1}
    assert counts["education"] == {"total": 1, "drafts": 0, "published": 0, "scheduled": 0}
    assert counts["faq"]["total"] == 0


@pytest.mark.django_db
def test_review_queue_lists_drafts_and_scheduled(client_for, editor, content):
    queue = client_for(editor).get("/v1/cms/stats").json()["review_queue"]
    assert [(i["type"], i["title"]) for i in queue] == [("news", "Soon"), ("article", "Draft one")]


@pytest.mark.django_db
def test_activity_hidden_without_audit_read(client_for, editor, content):
    body = client_for(editor).get("/v1/cms/stats").json()
    assert body["can_view_activity"] is False
    assert body["recent_activity"] == []


@pytest.mark.django_db
def test_activity_shows_cms_entries_for_activity_roles(client_for, it_manager, content):
    body = client_for(it_manager).get("/v1/cms/stats").json()
    assert body["can_view_activity"] is True
    assert [e["action"] for e in body["recent_activity"]] == ["CMS_NEWS_CREATE"]


@pytest.mark.django_db
def test_stats_closed_to_roles_outside_cms(client_for, make_user):
    accountant = make_user("accountant", ["accountant"])
    r = client_for(accountant).get("/v1/cms/stats")
    assert r.status_code == 403
    assert r.json()["error"]["code"] == "FORBIDDEN"
