from datetime import datetime, timedelta, timezone as dt_timezone

import pytest

from core.cms.lifecycle import ContentStatus, check_word_limit, count_words, transition
from core.common.errors import ValidationFailed

NOW = datetime(2026, 3, 1, 9, 0, tzinfo=dt_timezone.utc)
EARLIER = NOW - timedelta(days=30)
LATER = NOW + timedelta(days=7)


def test_publish_stamps_now_when_never_published():
    assert transition(ContentStatus.DRAFT, None, "PUBLISHED", now=NOW) == (ContentStatus.PUBLISHED, NOW)


def test_republish_keeps_original_publish_time():
    status, published_at = transition(ContentStatus.ARCHIVED, EARLIER, ContentStatus.PUBLISHED, now=NOW)
    assert status == ContentStatus.PUBLISHED
    assert published_at == EARLIER


def test_publish_again_while_published_keeps_time():
    assert transition(ContentStatus.PUBLISHED, EARLIER, ContentStatus.PUBLISHED, now=NOW)[1] == EARLIER


def test_schedule_requires_explicit_time():
    with pytest.raises(ValidationFailed) as e:
        transition(ContentStatus.DRAFT, None, ContentStatus.SCHEDULED, now=NOW)
    assert "published_at" in e.value.details


def test_schedule_does_not_reuse_an_old_time():
    with pytest.raises(ValidationFailed):
        transition(ContentStatus.PUBLISHED, EARLIER, ContentStatus.SCHEDULED, now=NOW)


def test_schedule_with_time():
    assert transition(ContentStatus.DRAFT, None, "scheduled", LATER, now=NOW) == (ContentStatus.SCHEDULED, LATER)


def test_explicit_time_wins_over_existing():
    assert transition(ContentStatus.PUBLISHED, EARLIER, None, LATER, now=NOW) == (ContentStatus.PUBLISHED, LATER)


def test_clearing_time_of_published_content_is_rejected():
    with pytest.raises(ValidationFailed):
        transition(ContentStatus.PUBLISHED, EARLIER, ContentStatus.PUBLISHED, None, now=NOW)


@pytest.mark.parametrize("target", [ContentStatus.DRAFT, ContentStatus.ARCHIVED])
def test_unpublishing_leaves_time_alone(target):
    assert transition(ContentStatus.PUBLISHED, EARLIER, target, now=NOW) == (target, EARLIER)


def test_no_request_is_a_no_op():
    assert transition(ContentStatus.SCHEDULED, LATER, now=NOW) == (ContentStatus.SCHEDULED, LATER)


def test_unknown_status_is_a_validation_error():
    with pytest.raises(ValidationFailed) as e:
        transition(ContentStatus.DRAFT, None, "LIVE", now=NOW)
    assert "status" in e.value.details


def test_count_words():
    assert count_words("  one two\nthree  ") == 3
    assert count_words("") == 0
    assert count_words(None) == 0


def test_word_limit(settings):
    settings.CMS_MAX_BODY_WORDS = 5
    check_word_limit("body", {"type": "markdown", "content": "one two three four five"})
    with pytest.raises(ValidationFailed) as e:
        check_word_limit("body", {"type": "markdown", "content": "one two three four five six"})
    assert e.value.details == {"body": ["Text exceeds 5 words"]}
