import structlog
from django.utils import timezone

from ..config import DEFAULT_DUE_LIMIT, MAX_DUE_LIMIT
from ..data.repos import due_items_queryset, storage_errors
from ..errors import InvalidInputError

logger = structlog.get_logger()


def get_due_items(learner_id, limit=DEFAULT_DUE_LIMIT, now=None):
    """
    Items whose current next_review_date is at or before ``now``, soonest
    first. Each item carries its current state as ``next_review_date``,
    ``current_ease_factor``, ``current_interval``, ``current_repetition``
    and ``last_review_date``. ``limit`` must be at least 1; larger values
    are capped at MAX_DUE_LIMIT.
    """
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise InvalidInputError(f"limit must be a positive integer, got {limit!r}")
    limit = min(limit, MAX_DUE_LIMIT)
    now = now or timezone.now()
    with storage_errors():
        items = list(due_items_queryset(learner_id, now)[:limit])
    logger.info("due_items_fetched", learner_id=learner_id, limit=limit, count=len(items))
    return items


def get_due_items_count(learner_id, now=None):
    now = now or timezone.now()
    with storage_errors():
        return due_items_queryset(learner_id, now).count()
