from core.cms.registry import get_content_type
from core.common.errors import NotFound
from core.iam.gate import require
from core.iam.permissions import AccessGate


class ContentAccessGate(AccessGate):
    """
    Resolves the permission from the url's type_key and the HTTP method:
      GET -> content.<type>.read, POST -> create, PATCH -> update, DELETE -> delete
    The publish permission depends on the payload, so views check it after
    validation.
    Attaches:
      - request.actor
      - request.cms_type
    """

    method_actions = {"GET": "read", "HEAD": "read", "POST": "create", "PATCH": "update", "DELETE": "delete"}
    action: str | None = None

    @classmethod
    def for_action(cls, action: str):
        return type("ContentAccessGateSub", (cls,), {"action": action})

    def has_permission(self, request, view):
        ctype = get_content_type(view.kwargs.get("type_key", ""))
        if ctype is None:
            require(request)
            raise NotFound("Unknown content type")

        action = self.action or self.method_actions.get(request.method, "read")
        require(request, ctype.permission(action))
        request.cms_type = ctype
        return True
