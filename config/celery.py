import os
from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.base")

app = Celery("clinic")
app.config_from_object("django.conf:settings", namespace="CELERY")

app.conf.imports = (
    "core.audit.tasks",
    "core.cms.tasks",
)

app.autodiscover_tasks()
