from __future__ import annotations

from typing import Iterable

from core.iam import rbac
from core.iam.models import Role, UserRole


def ensure_roles(keys: Iterable[str] | None = None) -> dict[str, Role]:
    """
    Idempotently creates catalog rows for the given keys (default: every
    role in the static table) and returns them by key.
    """
    wanted = list(keys) if keys is not None else list(rbac.ROLE_LABELS)
    out = {}
    for key in wanted:
        role, _ = Role.objects.get_or_create(key=key, defaults={"name": rbac.ROLE_LABELS.get(key, key)})
        out[key] = role
    return out


def replace_user_roles(user, keys: Iterable[str]) -> list[str]:
    """
    Replace semantics: the full role set is deleted and recreated.
    Call inside the caller's transaction.
    """
    keys = sorted(set(keys))
    roles = ensure_roles(keys)
    UserRole.objects.filter(user=user).delete()
    UserRole.objects.bulk_create([UserRole(user=user, role=roles[k]) for k in keys])
    return keys


def role_keys(user) -> list[str]:
    return sorted(UserRole.objects.filter(user=user).values_list("role__key", flat=True))
