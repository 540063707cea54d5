from django.core.management.base import BaseCommand

from core.audit.utils import purge


class Command(BaseCommand):
    help = "Delete audit entries older than N days (retention policy)"

    def add_arguments(self, parser):
        parser.add_argument("--days", type=int, default=30)
        parser.add_argument("--action", type=str, default="")

    def handle(self, *args, **options):
        deleted, cutoff = purge(options["days"], options["action"] or None)
        self.stdout.write(f"Deleted {deleted} audit entries created before {cutoff.isoformat()}")
