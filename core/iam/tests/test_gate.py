from unittest import mock

import pytest
from django.contrib.auth.models import AnonymousUser

from core.iam import gate
from core.iam.gate import Actor, ActorLookupError, authorize, is_active_for_display


@pytest.mark.django_db
def test_anonymous_is_unauthenticated():
    decision = authorize(AnonymousUser(), "content.article.read")
    assert not decision.allowed
    assert decision.reason == gate.UNAUTHENTICATED


@pytest.mark.django_db
def test_inactive_account_is_denied_whatever_the_roles(make_user):
    user = make_user("former", ["admin"], is_active=False)
    decision = authorize(user, "content.article.read")
    assert not decision.allowed
    assert decision.reason == gate.INACTIVE_ACCOUNT


@pytest.mark.django_db
def test_inactive_check_runs_before_permission_check(make_user):
    user = make_user("former", [], is_active=False)
    assert authorize(user, "user.manage").reason == gate.INACTIVE_ACCOUNT


@pytest.mark.django_db
def test_active_flag_is_reread_from_database(editor):
    assert authorize(editor, "content.faq.update").allowed

    type(editor).objects.filter(pk=editor.pk).update(is_active=False)
    # the in-memory user object still says active
    assert editor.is_active
    assert authorize(editor, "content.faq.update").reason == gate.INACTIVE_ACCOUNT


@pytest.mark.django_db
def test_missing_permission_is_forbidden(editor):
    decision = authorize(editor, "content.faq.delete")
    assert not decision.allowed
    assert decision.reason == gate.FORBIDDEN
    assert decision.actor.id == editor.pk


@pytest.mark.django_db
def test_section_check(editor):
    assert authorize(editor, section="cms").allowed
    assert authorize(editor, section="accounting").reason == gate.FORBIDDEN


@pytest.mark.django_db
def test_unknown_role_key_grants_nothing(make_user):
    user = make_user("odd", ["janitor"])
    decision = authorize(user, "content.article.read")
    assert decision.reason == gate.FORBIDDEN
    assert decision.actor.permissions == frozenset()


@pytest.mark.django_db
def test_lookup_failure_fails_closed(admin_user):
    def broken(user_id):
        raise ActorLookupError("db down")

    decision = authorize(admin_user, "content.article.read", loader=broken)
    assert not decision.allowed
    assert decision.reason == gate.ACTOR_LOOKUP_FAILED


@pytest.mark.django_db
def test_allowed_decision_carries_actor(admin_user):
    decision = authorize(admin_user, "audit.purge")
    assert decision.allowed
    assert decision.reason is None
    assert decision.actor == Actor(id=admin_user.pk, is_active=True, roles=frozenset({"admin"}))


@pytest.mark.django_db
def test_display_check_fails_open(editor):
    with mock.patch("core.iam.gate.load_actor", side_effect=ActorLookupError("db down")):
        assert is_active_for_display(editor) is True


def test_display_check_for_anonymous():
    assert is_active_for_display(AnonymousUser()) is False
