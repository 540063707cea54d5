import logging

import redis
from django.conf import settings
from django.db import connection
from django.http import JsonResponse

logger = logging.getLogger(__name__)


def health_check(request):
    status = {"db": False, "redis": False}

    try:
        with connection.cursor() as c:
            c.execute("SELECT 1")
        status["db"] = True
    except Exception:
        logger.warning("health check: database unreachable", exc_info=True)

    try:
        r = redis.Redis.from_url(settings.REDIS_URL, socket_connect_timeout=1, socket_timeout=1)
        r.ping()
        status["redis"] = True
    except Exception:
        logger.warning("health check: redis unreachable", exc_info=True)

    http_status = 200 if all(status.values()) else 503
    return JsonResponse(status, status=http_status)
