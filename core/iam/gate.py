"""
Access gate: one place that decides whether the caller may do something.

Order of checks, each with its own internal deny reason:

  1. session resolves to an authenticated user    -> UNAUTHENTICATED
  2. account is active, re-read from the database -> INACTIVE_ACCOUNT
  3. required permission / section is granted     -> FORBIDDEN

A storage error while loading the actor denies with ACTOR_LOOKUP_FAILED.
Callers only ever see 401 or a generic 403; the fine-grained reason goes to
the log.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from django.contrib.auth import get_user_model
from django.db import DatabaseError

from core.common.errors import Forbidden, Unauthenticated
from core.iam import rbac
from core.iam.models import UserRole

logger = logging.getLogger(__name__)

UNAUTHENTICATED = "UNAUTHENTICATED"
INACTIVE_ACCOUNT = "INACTIVE_ACCOUNT"
FORBIDDEN = "FORBIDDEN"
ACTOR_LOOKUP_FAILED = "ACTOR_LOOKUP_FAILED"


class ActorLookupError(Exception):
    pass


@dataclass(frozen=True)
class Actor:
    id: int
    is_active: bool
    roles: frozenset = field(default_factory=frozenset)

    @property
    def permissions(self) -> frozenset:
        return rbac.permissions_for(self.roles)

    @property
    def sections(self) -> frozenset:
        return rbac.sections_for(self.roles)


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: str | None = None
    actor: Actor | None = None


def load_actor(user_id) -> Actor | None:
    """
    Fresh read of the active flag and role keys. Never served from the
    session or token so a deactivation applies on the very next request.
    """
    User = get_user_model()
    try:
        row = User.objects.filter(pk=user_id).values("pk", "is_active").first()
        if row is None:
            return None
        roles = UserRole.objects.filter(user_id=user_id).values_list("role__key", flat=True)
        return Actor(id=row["pk"], is_active=bool(row["is_active"]), roles=frozenset(roles))
    except DatabaseError as e:
        raise ActorLookupError(str(e)) from e


def authorize(user, permission: str | None = None, section: str | None = None, *, loader=load_actor) -> Decision:
    if user is None or not getattr(user, "is_authenticated", False):
        return Decision(False, UNAUTHENTICATED)

    try:
        actor = loader(user.pk)
    except ActorLookupError:
        logger.exception("actor lookup failed", extra={"user_id": user.pk})
        return Decision(False, ACTOR_LOOKUP_FAILED)

    if actor is None:
        return Decision(False, UNAUTHENTICATED)

    if not actor.is_active:
        return Decision(False, INACTIVE_ACCOUNT, actor)

    if permission and permission not in actor.permissions:
        return Decision(False, FORBIDDEN, actor)

    if section and section not in actor.sections:
        return Decision(False, FORBIDDEN, actor)

    return Decision(True, None, actor)


def require(request, permission: str | None = None, section: str | None = None) -> Actor:
    """
    Raises the caller-facing error for a deny, otherwise returns the actor
    and attaches it as request.actor.
    """
    decision = authorize(getattr(request, "user", None), permission, section)
    if not decision.allowed:
        logger.info(
            "access denied: %s",
            decision.reason,
            extra={
                "reason": decision.reason,
                "permission": permission,
                "section": section,
                "path": getattr(request, "path", ""),
            },
        )
        if decision.reason == UNAUTHENTICATED:
            raise Unauthenticated()
        raise Forbidden()

    request.actor = decision.actor
    return decision.actor


def is_active_for_display(user) -> bool:
    """
    Cosmetic check (e.g. whether to offer a "go to dashboard" link).
    A storage error answers True; every protected route still runs the
    full gate, which fails closed.
    """
    if user is None or not getattr(user, "is_authenticated", False):
        return False
    try:
        actor = load_actor(user.pk)
    except ActorLookupError:
        logger.warning("active check failed, answering optimistically", exc_info=True)
        return True
    return bool(actor and actor.is_active)
