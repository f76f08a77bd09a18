from contextlib import contextmanager

from django.db import DatabaseError, transaction
from django.db.models import OuterRef, Subquery

from ..config import DEFAULT_PARAMS, SEED_REVIEW_DELAY_DAYS
from ..domain.enums import ResponseQuality
from ..errors import StorageError
from ..utils.time import days_after
from .models import ReviewRecord, SrsItem

HISTORY_ORDER = ("-review_date", "-id")


@contextmanager
def storage_errors():
    """
    Re-raise database failures as StorageError. Place outside
    ``transaction.atomic()`` so the rollback has happened by the time the
    caller sees the error.
    """
    try:
        yield
    except DatabaseError as exc:
        raise StorageError(str(exc)) from exc


def get_or_create_item(learner_id, content_type, content_id, defaults, now):
    """
    Fetch the item for (learner, content_type, content_id) or create it along
    with its seed history record. A concurrent insert of the same key is
    resolved by get_or_create re-reading the winner's row.
    """
    with transaction.atomic():
        item, created = SrsItem.objects.get_or_create(
            learner_id=learner_id,
            content_type=content_type,
            content_id=content_id,
            defaults={**defaults, "created_at": now},
        )
        if created:
            ReviewRecord.objects.create(
                item=item,
                learner_id=learner_id,
                ease_factor=DEFAULT_PARAMS.initial_ease_factor,
                interval=0,
                repetition=0,
                next_review_date=days_after(now, SEED_REVIEW_DELAY_DAYS),
                response_quality=int(ResponseQuality.PERFECT_RECALL),
                review_date=now,
            )
        return item, created


def lock_item(item_id, learner_id):
    """
    Lock the learner's item row for the rest of the current transaction so
    reviews of the same item run one after another. Returns None when the
    item does not exist or belongs to someone else.
    """
    return (
        SrsItem.objects.select_for_update()
        .filter(pk=item_id, learner_id=learner_id)
        .first()
    )


def get_item(item_id, learner_id):
    return SrsItem.objects.filter(pk=item_id, learner_id=learner_id).first()


def get_latest_record(item_id):
    return ReviewRecord.objects.filter(item_id=item_id).order_by(*HISTORY_ORDER).first()


def append_record(item, result, quality, time_taken, review_date):
    return ReviewRecord.objects.create(
        item=item,
        learner_id=item.learner_id,
        ease_factor=result.ease_factor,
        interval=result.interval,
        repetition=result.repetition,
        next_review_date=result.next_review_date,
        response_quality=int(quality),
        time_taken=time_taken,
        review_date=review_date,
    )


def update_media(item, fields):
    for name, value in fields.items():
        setattr(item, name, value)
    item.save(update_fields=list(fields))
    return item


def items_with_current_state(learner_id):
    """
    Learner's items annotated with the newest history row's state. This is
    the only definition of "current state"; nothing else stores it.
    """
    latest = ReviewRecord.objects.filter(item=OuterRef("pk")).order_by(*HISTORY_ORDER)
    return SrsItem.objects.filter(learner_id=learner_id).annotate(
        next_review_date=Subquery(latest.values("next_review_date")[:1]),
        current_ease_factor=Subquery(latest.values("ease_factor")[:1]),
        current_interval=Subquery(latest.values("interval")[:1]),
        current_repetition=Subquery(latest.values("repetition")[:1]),
        last_review_date=Subquery(latest.values("review_date")[:1]),
    )


def due_items_queryset(learner_id, now):
    return (
        items_with_current_state(learner_id)
        .filter(next_review_date__lte=now)
        .order_by("next_review_date", "id")
    )


def count_items(learner_id):
    return SrsItem.objects.filter(learner_id=learner_id).count()


def history_newest_first(learner_id):
    """Yield (item_id, repetition) for every record of the learner, newest first."""
    return (
        ReviewRecord.objects.filter(learner_id=learner_id)
        .order_by(*HISTORY_ORDER)
        .values_list("item_id", "repetition")
        .iterator()
    )
