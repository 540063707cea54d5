from unittest import mock

import pytest
from django.contrib.auth import get_user_model
from django.db import DatabaseError
from rest_framework.test import APIClient

from core.cms.models import Faq

User = get_user_model()


@pytest.mark.django_db
def test_me_requires_auth():
    r = APIClient().get("/v1/auth/me")
    assert r.status_code == 401
    assert r.json()["error"]["code"] == "UNAUTHENTICATED"


@pytest.mark.django_db
def test_me_lists_effective_permissions(jwt_client_for, editor):
    r = jwt_client_for(editor).get("/v1/auth/me")
    assert r.status_code == 200
    body = r.json()
    assert body["roles"] == ["content_editor"]
    assert "content.faq.publish" in body["permissions"]
    assert "content.faq.delete" not in body["permissions"]
    assert "cms" in body["sections"]


@pytest.mark.django_db
def test_deactivated_user_is_refused_on_next_request(jwt_client_for, editor):
    faq = Faq.objects.create(question="Opening hours?", slug="opening-hours")
    c = jwt_client_for(editor)

    r = c.patch(f"/v1/cms/faq/{faq.id}", {"question": "When are you open?"}, format="json")
    assert r.status_code == 200

    User.objects.filter(pk=editor.pk).update(is_active=False)

    # the token is still valid; the gate re-reads the account
    r = c.patch(f"/v1/cms/faq/{faq.id}", {"question": "Weekend hours?"}, format="json")
    assert r.status_code == 403
    assert r.json()["error"]["code"] == "FORBIDDEN"

    faq.refresh_from_db()
    assert faq.question == "When are you open?"


@pytest.mark.django_db
def test_active_for_anonymous_is_false():
    r = APIClient().get("/v1/auth/active")
    assert r.status_code == 200
    assert r.json() == {"active": False}


@pytest.mark.django_db
def test_active_for_signed_in_user(client_for, editor):
    r = client_for(editor).get("/v1/auth/active")
    assert r.json() == {"active": True}


@pytest.mark.django_db
def test_check_active_reports_inactive_account(make_user):
    make_user("gone", is_active=False)
    r = APIClient().post("/v1/auth/check-active", {"email": "gone@clinic.test"}, format="json")
    assert r.status_code == 200
    assert r.json() == {"active": False}


@pytest.mark.django_db
def test_check_active_does_not_leak_unknown_emails():
    r = APIClient().post("/v1/auth/check-active", {"email": "nobody@clinic.test"}, format="json")
    assert r.json() == {"active": True}


@pytest.mark.django_db
def test_check_active_fails_open_on_storage_error(make_user):
    make_user("gone", is_active=False)
    with mock.patch.object(User.objects, "filter", side_effect=DatabaseError("down")):
        r = APIClient().post("/v1/auth/check-active", {"email": "gone@clinic.test"}, format="json")
    assert r.json() == {"active": True}
