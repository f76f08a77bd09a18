import structlog
from django.utils import timezone

from ..data.repos import get_item, get_or_create_item as repo_get_or_create_item
from ..data.repos import storage_errors, update_media
from ..domain.enums import ContentType
from ..errors import InvalidInputError, NotFoundError, StorageError

logger = structlog.get_logger()

EXTRA_FIELDS = ("example", "image_url", "audio_url")


def _clean_content_type(content_type):
    try:
        return ContentType(content_type)
    except ValueError:
        raise InvalidInputError(
            f"content_type must be one of {list(ContentType.values)}, got {content_type!r}"
        ) from None


def get_or_create_item(learner_id, content_type, content_id, front, back, extras=None):
    """
    Return the id of the learner's item for this content, creating it (and
    its seed history record) on first encounter. Existing items are
    returned untouched; ``extras`` only apply to new items.
    """
    content_type = _clean_content_type(content_type)
    if isinstance(content_id, bool) or not isinstance(content_id, int):
        raise InvalidInputError(f"content_id must be an integer, got {content_id!r}")
    if not front or not back:
        raise InvalidInputError("front and back content are required")
    extras = extras or {}
    unknown = set(extras) - set(EXTRA_FIELDS)
    if unknown:
        raise InvalidInputError(f"unknown item fields: {sorted(unknown)}")

    defaults = {"front_content": front, "back_content": back}
    defaults.update({k: v for k, v in extras.items() if v is not None})

    with storage_errors():
        item, created = repo_get_or_create_item(
            learner_id, content_type, content_id, defaults, timezone.now()
        )

    logger.info(
        "item_created" if created else "item_reused",
        learner_id=learner_id,
        item_id=item.pk,
        content_type=str(content_type),
        content_id=content_id,
    )
    return item.pk


def _plain_entry(entry):
    return {
        "content_type": entry.get("content_type"),
        "content_id": entry.get("content_id"),
        "front": entry.get("front"),
        "back": entry.get("back"),
        **{k: entry.get(k) for k in EXTRA_FIELDS},
    }


def _vocabulary_entry(entry):
    return {
        "content_type": ContentType.VOCABULARY,
        "content_id": entry.get("id"),
        "front": entry.get("word"),
        "back": entry.get("definition"),
        "example": entry.get("example"),
        "image_url": entry.get("image_url"),
        "audio_url": entry.get("audio_url"),
    }


def _grammar_entry(entry):
    return {
        "content_type": ContentType.GRAMMAR,
        "content_id": entry.get("id"),
        "front": entry.get("rule"),
        "back": entry.get("explanation"),
        "example": entry.get("example"),
        "image_url": entry.get("image_url"),
    }


def bulk_get_or_create(learner_id, items, to_entry=_plain_entry):
    """
    Import many items one by one. A bad or failing entry is logged and
    skipped; everything already created stays. ``success`` is False only when
    something unexpected aborts the loop, including an entry ``to_entry``
    cannot map.

    ``to_entry`` turns each raw entry into a mapping with content_type,
    content_id, front, back and optionally example / image_url / audio_url.
    By default entries already use those keys.
    """
    item_ids = []
    failed = []
    try:
        for raw in items:
            entry = to_entry(raw)
            content_id = entry["content_id"]
            try:
                item_id = get_or_create_item(
                    learner_id,
                    entry["content_type"],
                    content_id,
                    entry["front"],
                    entry["back"],
                    {k: entry.get(k) for k in EXTRA_FIELDS if entry.get(k) is not None},
                )
            except (InvalidInputError, StorageError) as exc:
                logger.warning(
                    "bulk_import_item_failed",
                    learner_id=learner_id,
                    content_id=content_id,
                    error=str(exc),
                )
                failed.append(content_id)
                continue
            item_ids.append(item_id)
    except Exception:
        logger.exception("bulk_import_aborted", learner_id=learner_id, imported=len(item_ids))
        return {"success": False, "item_ids": item_ids, "failed": failed}

    logger.info(
        "bulk_import_finished",
        learner_id=learner_id,
        imported=len(item_ids),
        failed=len(failed),
    )
    return {"success": True, "item_ids": item_ids, "failed": failed}


def bulk_add_vocabulary(learner_id, entries):
    """Entries carry id, word, definition and optional example / image_url / audio_url."""
    return bulk_get_or_create(learner_id, entries, to_entry=_vocabulary_entry)


def bulk_add_grammar(learner_id, entries):
    """Entries carry id, rule, explanation and optional example / image_url."""
    return bulk_get_or_create(learner_id, entries, to_entry=_grammar_entry)


def update_item_media(item_id, learner_id, image_url=None, audio_url=None):
    fields = {
        name: value
        for name, value in (("image_url", image_url), ("audio_url", audio_url))
        if value is not None
    }
    if not fields:
        raise InvalidInputError("nothing to update: pass image_url and/or audio_url")

    with storage_errors():
        item = get_item(item_id, learner_id)
        if item is None:
            raise NotFoundError(f"item {item_id} not found for learner {learner_id}")
        update_media(item, fields)

    logger.info("item_media_updated", learner_id=learner_id, item_id=item_id, fields=sorted(fields))
    return item
