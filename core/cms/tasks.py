from celery import shared_task

from core.cms.cache import invalidate_now


@shared_task(bind=True, max_retries=5, default_retry_delay=30, name="core.cms.tasks.retry_invalidation")
def retry_invalidation(self, tags: list[str]) -> list[str]:
    """
    Re-sends cache tags whose invalidation failed after a commit.
    Safe to repeat: invalidating a tag twice is the same as once.
    """
    failed = invalidate_now(tags)
    if failed:
        raise self.retry(args=[failed])
    return []
