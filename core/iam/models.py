import uuid
from django.conf import settings
from django.db import models


class Role(models.Model):
    """
    Role catalog row. Permissions are not stored here; they come from
    core.iam.rbac so a role key that is not in that table grants nothing.
    """
    key = models.CharField(max_length=64, unique=True)
    name = models.CharField(max_length=128)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return self.key


class UserRole(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="user_roles")
    role = models.ForeignKey(Role, on_delete=models.CASCADE, related_name="assignments")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [models.UniqueConstraint(fields=["user", "role"], name="uq_user_role")]
        indexes = [models.Index(fields=["role"], name="iam_userrole_role_idx")]
