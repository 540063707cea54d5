import pytest

from core.iam import rbac


def test_unknown_role_grants_nothing():
    assert rbac.permissions_for(["janitor"]) == frozenset()
    assert rbac.sections_for(["janitor"]) == frozenset()
    assert not rbac.is_known_role("janitor")


def test_unknown_role_does_not_dilute_known_ones():
    assert rbac.permissions_for(["janitor", "content_editor"]) == rbac.permissions_for(["content_editor"])


def test_permissions_are_union_of_roles():
    perms = rbac.permissions_for(["content_creator", "cashier"])
    assert "content.article.create" in perms
    assert rbac.FINANCE_POST in perms
    assert rbac.USER_MANAGE not in perms


def test_content_editor_publishes_but_cannot_create_or_delete():
    perms = rbac.permissions_for(["content_editor"])
    assert "content.faq.update" in perms
    assert "content.faq.publish" in perms
    assert "content.faq.create" not in perms
    assert "content.faq.delete" not in perms


def test_content_creator_cannot_publish():
    perms = rbac.permissions_for(["content_creator"])
    assert "content.article.create" in perms
    assert "content.article.publish" not in perms


def test_admin_has_every_content_permission():
    perms = rbac.permissions_for(["admin"])
    for ctype in rbac.CONTENT_TYPES:
        for action in rbac.CONTENT_ACTIONS:
            assert rbac.content_permission(ctype, action) in perms


def test_tables_cover_the_same_roles():
    assert set(rbac.ROLE_PERMISSIONS) == set(rbac.ROLE_LABELS) == set(rbac.ROLE_SECTIONS)
    for sections in rbac.ROLE_SECTIONS.values():
        assert sections <= set(rbac.SECTIONS)


def test_tables_are_read_only():
    with pytest.raises(TypeError):
        rbac.ROLE_PERMISSIONS["janitor"] = frozenset({rbac.USER_MANAGE})
    assert "janitor" not in rbac.ROLE_PERMISSIONS


def _holders(permission):
    return {role for role, perms in rbac.ROLE_PERMISSIONS.items() if permission in perms}


def test_user_manage_is_limited_to_staff_managers():
    assert _holders(rbac.USER_MANAGE) == {"admin", "it_manager", "internal_manager", "ceo"}
    assert _holders(rbac.USER_MANAGE) == rbac.STAFF_MANAGEMENT_ROLES


def test_audit_purge_is_limited_to_staff_managers():
    assert _holders(rbac.AUDIT_PURGE) == rbac.STAFF_MANAGEMENT_ROLES


def test_audit_read_is_limited_to_activity_roles():
    assert _holders(rbac.AUDIT_READ) == {"it_manager", "ceo", "internal_manager", "admin"}
    assert _holders(rbac.AUDIT_READ) == rbac.ACTIVITY_ROLES


def test_content_permissions_are_limited_to_cms_roles():
    content_holders = {
        role for role, perms in rbac.ROLE_PERMISSIONS.items()
        if any(p.startswith("content.") for p in perms)
    }
    assert content_holders == rbac.CMS_ROLES
    assert rbac.CMS_ROLES == {
        "admin", "ceo", "internal_manager", "it_manager", "content_editor", "content_creator",
    }


@pytest.mark.parametrize("role", ["ceo", "internal_manager", "it_manager"])
def test_managers_hold_every_content_permission(role):
    perms = rbac.permissions_for([role])
    for ctype in rbac.CONTENT_TYPES:
        for action in rbac.CONTENT_ACTIONS:
            assert rbac.content_permission(ctype, action) in perms
    assert rbac.TAXONOMY_MANAGE in perms


@pytest.mark.parametrize("role", ["finance_manager", "accountant", "doctor", "head_nurse"])
def test_operational_roles_cannot_manage_users_or_read_activity(role):
    perms = rbac.permissions_for([role])
    assert rbac.USER_MANAGE not in perms
    assert rbac.AUDIT_READ not in perms
    assert rbac.AUDIT_PURGE not in perms
