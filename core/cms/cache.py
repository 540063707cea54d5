"""
Tag-partitioned read cache and its invalidation notifier.

Each cache tag ("articles", "home-hero", ...) owns one bucket of cached read
results. Invalidating a tag drops the whole bucket, so invalidating an
already-empty tag is a no-op. Invalidation is only ever triggered from
after-commit callbacks (see core.cms.coordinator).
"""
from __future__ import annotations

import json
import logging
import threading
import time
from functools import lru_cache
from typing import Callable, Iterable

import redis
from django.conf import settings
from django.core.serializers.json import DjangoJSONEncoder
from django.utils.module_loading import import_string

from core.common.errors import InvalidationFailure

logger = logging.getLogger(__name__)


def _ttl() -> int:
    return int(getattr(settings, "CMS_CACHE_TTL_SECONDS", 300))


class RedisTagStore:
    """
    One Redis hash per tag: cms:tag:<tag> -> {read key: json}.
    """

    prefix = "cms:tag:"

    def __init__(self, url: str | None = None):
        url = url or getattr(settings, "REDIS_URL", None) or "redis://localhost:6379/0"
        self.client = redis.from_url(url, decode_responses=True, socket_connect_timeout=1, socket_timeout=1)

    def _key(self, tag: str) -> str:
        return f"{self.prefix}{tag}"

    def get(self, tag: str, key: str):
        raw = self.client.hget(self._key(tag), key)
        return json.loads(raw) if raw is not None else None

    def set(self, tag: str, key: str, value) -> None:
        pipe = self.client.pipeline()
        pipe.hset(self._key(tag), key, json.dumps(value, cls=DjangoJSONEncoder))
        pipe.expire(self._key(tag), _ttl())
        pipe.execute()

    def invalidate(self, tag: str) -> None:
        self.client.delete(self._key(tag))


class MemoryTagStore:
    """
    Process-local store for tests and single-process development.
    Values go through JSON so cached reads look exactly like Redis ones.
    Like a Redis hash with EXPIRE, a bucket lives CMS_CACHE_TTL_SECONDS past
    its last write and then drops as a whole.
    """

    def __init__(self):
        self._buckets: dict[str, dict[str, str]] = {}
        self._expires: dict[str, float] = {}
        self._lock = threading.Lock()

    def _live(self, tag: str) -> dict[str, str]:
        # caller holds the lock
        if tag in self._expires and self._expires[tag] <= time.monotonic():
            self._buckets.pop(tag, None)
            self._expires.pop(tag, None)
        return self._buckets.get(tag, {})

    def get(self, tag: str, key: str):
        with self._lock:
            raw = self._live(tag).get(key)
        return json.loads(raw) if raw is not None else None

    def set(self, tag: str, key: str, value) -> None:
        raw = json.dumps(value, cls=DjangoJSONEncoder)
        with self._lock:
            self._live(tag)
            self._buckets.setdefault(tag, {})[key] = raw
            self._expires[tag] = time.monotonic() + _ttl()

    def invalidate(self, tag: str) -> None:
        with self._lock:
            self._buckets.pop(tag, None)
            self._expires.pop(tag, None)

    def keys(self, tag: str) -> list[str]:
        with self._lock:
            return sorted(self._live(tag))

    def clear(self) -> None:
        with self._lock:
            self._buckets.clear()
            self._expires.clear()


@lru_cache(maxsize=1)
def get_store():
    return import_string(settings.CMS_TAG_STORE)()


def cached(tag: str, key: str, loader: Callable[[], object]):
    """
    Read-through helper. A broken cache never breaks the read: store errors
    fall back to the loader.
    """
    store = get_store()
    try:
        hit = store.get(tag, key)
        if hit is not None:
            return hit
    except Exception:
        logger.warning("cache read failed for tag %s", tag, exc_info=True)

    value = loader()
    try:
        store.set(tag, key, value)
    except Exception:
        logger.warning("cache write failed for tag %s", tag, exc_info=True)
    return value


def invalidate_now(tags: Iterable[str]) -> list[str]:
    """
    -> tags that could not be invalidated.
    """
    store = get_store()
    failed = []
    for tag in sorted(set(tags)):
        try:
            store.invalidate(tag)
        except Exception:
            logger.warning("invalidation of tag %s failed", tag, exc_info=True)
            failed.append(tag)
    return failed


def invalidate(tags: Iterable[str]) -> None:
    """
    Non-fatal: failures are logged as InvalidationFailure and handed to a
    retry task, never raised to the caller.
    """
    failed = invalidate_now(tags)
    if not failed:
        return

    failure = InvalidationFailure(f"could not invalidate {', '.join(failed)}")
    logger.error("cache invalidation failed: %s", failure, extra={"cache_tags": failed})

    from core.cms.tasks import retry_invalidation

    try:
        retry_invalidation.delay(failed)
    except Exception:
        logger.error("could not queue invalidation retry for %s", failed, exc_info=True)
