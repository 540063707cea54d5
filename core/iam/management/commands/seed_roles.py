from django.core.management.base import BaseCommand

from core.iam import rbac
from core.iam.roles import ensure_roles


class Command(BaseCommand):
    help = "Idempotently create Role rows for every role in the static permission table"

    def handle(self, *args, **options):
        roles = ensure_roles()
        for key in sorted(roles):
            perms = len(rbac.ROLE_PERMISSIONS.get(key, ()))
            self.stdout.write(f"{key}: {perms} permissions")
        self.stdout.write(self.style.SUCCESS(f"{len(roles)} roles ready"))
