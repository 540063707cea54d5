import logging

from django.contrib.auth import get_user_model
from django.db import DatabaseError, transaction
from django.db.models import Q
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from core.audit.utils import audit
from core.common.errors import NotFound, ValidationFailed
from core.common.pagination import page_params, paginate
from core.iam import rbac
from core.iam.gate import is_active_for_display
from core.iam.permissions import AccessGate
from core.iam.roles import replace_user_roles, role_keys
from core.iam.serializers import (
    CheckActiveSerializer,
    UserCreateSerializer,
    UserSerializer,
    UserUpdateSerializer,
)

logger = logging.getLogger(__name__)

User = get_user_model()


@api_view(["GET"])
@permission_classes([AccessGate])
def auth_me(request):
    """
    GET /v1/auth/me
    Effective roles, permissions and sections for the sidebar / UI gating.
    """
    actor = request.actor
    return Response({
        "user": {"id": actor.id, "username": request.user.get_username(), "email": request.user.email},
        "roles": sorted(actor.roles),
        "permissions": sorted(actor.permissions),
        "sections": sorted(actor.sections),
    })


@api_view(["GET"])
@permission_classes([AllowAny])
def auth_active(request):
    """
    GET /v1/auth/active
    Cosmetic only: drives redirects on the login page. Fails open.
    """
    return Response({"active": is_active_for_display(request.user)})


@api_view(["POST"])
@permission_classes([AllowAny])
def auth_check_active(request):
    """
    POST /v1/auth/check-active
    Body: {"email": "..."}
    Pre-login hint. Unknown emails answer active=true so account existence
    does not leak; storage errors also answer true (the real gate still
    blocks inactive accounts).
    """
    s = CheckActiveSerializer(data=request.data)
    if not s.is_valid():
        return Response({"active": True})

    email = s.validated_data["email"].strip().lower()
    try:
        row = User.objects.filter(email__iexact=email).values("is_active").first()
    except DatabaseError:
        logger.warning("check-active lookup failed, answering optimistically", exc_info=True)
        return Response({"active": True})

    return Response({"active": bool(row["is_active"]) if row else True})


def _snapshot(user) -> dict:
    return {
        "email": user.email or "",
        "first_name": user.first_name or "",
        "last_name": user.last_name or "",
        "is_active": bool(user.is_active),
        "roles": role_keys(user),
    }


@api_view(["GET", "POST"])
@permission_classes([AccessGate.requiring(rbac.USER_MANAGE)])
def users_list(request):
    """
    GET  /v1/users?q=&is_active=&page=&page_size=
    POST /v1/users
    """
    if request.method == "POST":
        s = UserCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        with transaction.atomic():
            user = User.objects.create_user(
                username=data["username"],
                email=data.get("email", ""),
                password=data["password"],
                first_name=data.get("first_name", ""),
                last_name=data.get("last_name", ""),
                is_active=data.get("is_active", True),
            )
            replace_user_roles(user, data.get("roles", []))
            meta = {"username": user.username, **_snapshot(user)}
            actor_id = request.actor.id
            transaction.on_commit(lambda: audit("USER_CREATE", user.pk, actor_id, meta, target_type="user"))

        return Response({"user": UserSerializer(user).data}, status=status.HTTP_201_CREATED)

    q = (request.query_params.get("q") or "").strip()
    active = (request.query_params.get("is_active") or "").strip().lower()
    page, page_size = page_params(request, default_size=20, max_size=100)

    qs = User.objects.all().prefetch_related("user_roles__role").order_by("-date_joined", "-id")
    if q:
        qs = qs.filter(
            Q(username__icontains=q) |
            Q(email__icontains=q) |
            Q(first_name__icontains=q) |
            Q(last_name__icontains=q)
        )
    if active in ("true", "1"):
        qs = qs.filter(is_active=True)
    elif active in ("false", "0"):
        qs = qs.filter(is_active=False)

    items, meta = paginate(qs, page, page_size)
    return Response({"items": UserSerializer(items, many=True).data, **meta})


@api_view(["GET", "PATCH", "DELETE"])
@permission_classes([AccessGate.requiring(rbac.USER_MANAGE)])
def users_detail(request, user_id: int):
    """
    GET    /v1/users/{user_id}
    PATCH  /v1/users/{user_id}
    DELETE /v1/users/{user_id}
    """
    user = User.objects.filter(pk=user_id).prefetch_related("user_roles__role").first()
    if not user:
        raise NotFound("User not found")

    actor_id = request.actor.id

    if request.method == "GET":
        return Response({"user": UserSerializer(user).data})

    if request.method == "DELETE":
        if user.pk == actor_id:
            raise ValidationFailed.for_field("user_id", "You cannot delete your own account")
        before = {"username": user.username, **_snapshot(user)}
        with transaction.atomic():
            user.delete()
            transaction.on_commit(lambda: audit("USER_DELETE", user_id, actor_id, before, target_type="user"))
        return Response(status=status.HTTP_204_NO_CONTENT)

    s = UserUpdateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    data = s.validated_data

    if user.pk == actor_id and data.get("is_active") is False:
        raise ValidationFailed.for_field("is_active", "You cannot deactivate your own account")

    before = _snapshot(user)

    with transaction.atomic():
        for field in ("email", "first_name", "last_name", "is_active"):
            if field in data:
                setattr(user, field, data[field])
        if "password" in data:
            user.set_password(data["password"])
        user.save()

        if "roles" in data:
            replace_user_roles(user, data["roles"])

        after = _snapshot(user)
        meta = {"before": before, "after": after, "password_changed": "password" in data}
        transaction.on_commit(lambda: audit("USER_UPDATE", user.pk, actor_id, meta, target_type="user"))

    user = User.objects.prefetch_related("user_roles__role").get(pk=user.pk)
    return Response({"user": UserSerializer(user).data})
