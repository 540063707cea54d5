import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command

from core.audit.models import AuditLog
from core.iam import rbac
from core.iam.models import Role
from core.iam.roles import role_keys

User = get_user_model()


@pytest.mark.django_db
def test_users_require_user_manage(client_for, editor):
    r = client_for(editor).get("/v1/users")
    assert r.status_code == 403


@pytest.mark.django_db
def test_create_user_with_roles(client_for, it_manager, django_capture_on_commit_callbacks):
    payload = {
        "username": "writer",
        "email": "Writer@Clinic.test",
        "password": "longpassword",
        "roles": ["content_creator"],
    }
    with django_capture_on_commit_callbacks(execute=True):
        r = client_for(it_manager).post("/v1/users", payload, format="json")

    assert r.status_code == 201
    body = r.json()["user"]
    assert body["email"] == "writer@clinic.test"
    assert body["roles"] == ["content_creator"]

    entry = AuditLog.objects.get(action="USER_CREATE")
    assert entry.actor_user_id == it_manager.pk
    assert entry.target_id == str(body["id"])
    assert "password" not in entry.meta_json


@pytest.mark.django_db
def test_unknown_role_is_rejected(client_for, it_manager):
    payload = {"username": "x1", "password": "longpassword", "roles": ["janitor"]}
    r = client_for(it_manager).post("/v1/users", payload, format="json")
    assert r.status_code == 400
    err = r.json()["error"]
    assert err["code"] == "VALIDATION_ERROR"
    assert "roles" in err["details"]


@pytest.mark.django_db
def test_list_filters(client_for, it_manager, make_user):
    make_user("nurse1", ["nurse"])
    make_user("nurse2", ["nurse"], is_active=False)

    c = client_for(it_manager)
    r = c.get("/v1/users", {"q": "nurse"})
    assert r.json()["total"] == 2

    r = c.get("/v1/users", {"q": "nurse", "is_active": "false"})
    assert [u["username"] for u in r.json()["items"]] == ["nurse2"]


@pytest.mark.django_db
def test_update_replaces_roles_and_audits(client_for, it_manager, make_user, django_capture_on_commit_callbacks):
    target = make_user("nurse1", ["nurse", "receptionist"])

    with django_capture_on_commit_callbacks(execute=True):
        r = client_for(it_manager).patch(f"/v1/users/{target.pk}", {"roles": ["head_nurse"]}, format="json")

    assert r.status_code == 200
    assert r.json()["user"]["roles"] == ["head_nurse"]
    assert role_keys(target) == ["head_nurse"]

    meta = AuditLog.objects.get(action="USER_UPDATE").meta_json
    assert meta["before"]["roles"] == ["nurse", "receptionist"]
    assert meta["after"]["roles"] == ["head_nurse"]


@pytest.mark.django_db
def test_deactivation_blocks_the_user(client_for, it_manager, editor):
    r = client_for(it_manager).patch(f"/v1/users/{editor.pk}", {"is_active": False}, format="json")
    assert r.status_code == 200

    r = client_for(editor).get("/v1/cms/faq")
    assert r.status_code == 403


@pytest.mark.django_db
def test_cannot_deactivate_or_delete_self(client_for, it_manager):
    c = client_for(it_manager)
    r = c.patch(f"/v1/users/{it_manager.pk}", {"is_active": False}, format="json")
    assert r.status_code == 400

    r = c.delete(f"/v1/users/{it_manager.pk}")
    assert r.status_code == 400
    assert User.objects.filter(pk=it_manager.pk).exists()


@pytest.mark.django_db
def test_delete_user(client_for, it_manager, make_user, django_capture_on_commit_callbacks):
    target = make_user("temp")
    with django_capture_on_commit_callbacks(execute=True):
        r = client_for(it_manager).delete(f"/v1/users/{target.pk}")
    assert r.status_code == 204
    assert not User.objects.filter(pk=target.pk).exists()
    assert AuditLog.objects.filter(action="USER_DELETE", target_id=str(target.pk)).exists()


@pytest.mark.django_db
def test_missing_user_is_not_found(client_for, it_manager):
    r = client_for(it_manager).get("/v1/users/999999")
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "NOT_FOUND"


@pytest.mark.django_db
def test_seed_roles_is_idempotent():
    call_command("seed_roles")
    call_command("seed_roles")
    assert Role.objects.count() == len(rbac.ROLE_LABELS)


@pytest.mark.django_db
def test_content_editor_cannot_delete_users(client_for, editor, make_user):
    target = make_user("reception", ["receptionist"])
    r = client_for(editor).delete(f"/v1/users/{target.pk}")
    assert r.status_code == 403
    assert r.json()["error"]["code"] == "FORBIDDEN"
    assert User.objects.filter(pk=target.pk).exists()


@pytest.mark.django_db
def test_finance_manager_cannot_create_users(client_for, make_user):
    fm = make_user("fm", ["finance_manager"])
    payload = {"username": "sneaky", "email": "sneaky@clinic.test", "password": "pass12345", "roles": ["admin"]}
    r = client_for(fm).post("/v1/users", payload, format="json")
    assert r.status_code == 403
    assert not User.objects.filter(username="sneaky").exists()


@pytest.mark.django_db
@pytest.mark.parametrize("role", ["admin", "ceo", "internal_manager", "it_manager"])
def test_staff_management_roles_list_users(client_for, make_user, role):
    user = make_user(f"u-{role}", [role])
    assert client_for(user).get("/v1/users").status_code == 200
