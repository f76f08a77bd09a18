from datetime import timedelta

import structlog
from django.db import transaction
from django.utils import timezone

from ..data.repos import append_record, get_latest_record, lock_item, storage_errors
from ..domain.logic import compute_next_review, validate_quality
from ..errors import InvalidInputError, NotFoundError

logger = structlog.get_logger()


def _clean_time_taken(time_taken):
    if time_taken is None:
        return timedelta(0)
    if not isinstance(time_taken, timedelta):
        if isinstance(time_taken, bool) or not isinstance(time_taken, (int, float)):
            raise InvalidInputError(f"time_taken must be a duration, got {time_taken!r}")
        time_taken = timedelta(seconds=time_taken)
    if time_taken < timedelta(0):
        raise InvalidInputError("time_taken must not be negative")
    return time_taken


def record_review(item_id, learner_id, quality, time_taken=None):
    """
    Schedule the item's next review from its latest history record and
    append the result. ``time_taken`` is a timedelta or a number of seconds.

    All or nothing: on any error no record is appended.
    """
    quality = validate_quality(quality)
    time_taken = _clean_time_taken(time_taken)

    logger.info("review_received",
        learner_id=learner_id,
        item_id=item_id,
        quality=int(quality),
        time_taken_seconds=time_taken.total_seconds(),
    )

    with storage_errors(), transaction.atomic():
        # Serialize reviews per item: the lock holds until the append commits
        item = lock_item(item_id, learner_id)
        if item is None:
            raise NotFoundError(f"item {item_id} not found for learner {learner_id}")

        latest = get_latest_record(item.pk)
        now = timezone.now()
        if latest is None:
            result = compute_next_review(quality, now=now)
        else:
            result = compute_next_review(
                quality,
                latest.ease_factor,
                latest.interval,
                latest.repetition,
                now=now,
            )
        record = append_record(item, result, quality, time_taken, now)

    logger.info("review_scheduled",
        learner_id=learner_id,
        item_id=item_id,
        ease_factor=record.ease_factor,
        interval_days=record.interval,
        repetition=record.repetition,
        next_review_utc=record.next_review_date.isoformat(),
    )
    return record
