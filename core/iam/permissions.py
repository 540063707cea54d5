from rest_framework.permissions import BasePermission

from core.iam.gate import require


class AccessGate(BasePermission):
    """
    Usage:
      permission_classes = [AccessGate.requiring("user.manage")]
      permission_classes = [AccessGate.requiring(section="cms")]
      permission_classes = [AccessGate]   # authenticated + active only
    Attaches:
      - request.actor
    """

    permission: str | None = None
    section: str | None = None

    @classmethod
    def requiring(cls, permission: str | None = None, section: str | None = None):
        return type("AccessGateSub", (cls,), {"permission": permission, "section": section})

    def has_permission(self, request, view):
        require(request, self.permission, self.section)
        return True
