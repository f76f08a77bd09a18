import logging
from datetime import timedelta
from unittest import mock

import pytest
from django.urls import reverse
from django.utils import timezone

from srs.data.models import ReviewRecord, SrsItem
from srs.errors import StorageError

logger = logging.getLogger(__name__)

LEARNER = 404

# Helpers

def add_item(client, content_id, learner_id=LEARNER, content_type="vocabulary", **extra):
    payload = {
        "learner_id": learner_id,
        "content_type": content_type,
        "content_id": content_id,
        "front_content": f"front-{content_id}",
        "back_content": f"back-{content_id}",
        **extra,
    }
    resp = client.post(reverse("srs-items"), data=payload, content_type="application/json")
    logger.info("POST /srs/items content_id=%s → status=%s", content_id, resp.status_code)
    return resp


def post_review(client, item_id, quality, learner_id=LEARNER, time_taken=2.5):
    payload = {
        "item_id": item_id,
        "learner_id": learner_id,
        "response_quality": quality,
        "time_taken": time_taken,
    }
    resp = client.post(reverse("srs-reviews"), data=payload, content_type="application/json")
    data = resp.json()
    logger.info(
        "POST /srs/reviews quality=%s → status=%s interval=%s",
        quality,
        resp.status_code,
        data.get("interval"),
    )
    return resp


def make_due(item_id, minutes_ago=5):
    item = SrsItem.objects.get(pk=item_id)
    ReviewRecord.objects.create(
        item=item,
        learner_id=item.learner_id,
        ease_factor=2.5,
        interval=1,
        repetition=1,
        next_review_date=timezone.now() - timedelta(minutes=minutes_ago),
        response_quality=4,
        review_date=timezone.now(),
    )


# Tests

@pytest.mark.django_db
def test_add_item_is_idempotent(client):
    first = add_item(client, 10, example="voorbeeld")
    second = add_item(client, 10)

    assert first.status_code == 200
    assert first.json()["success"] is True
    assert first.json()["item_id"] == second.json()["item_id"]
    assert SrsItem.objects.filter(learner_id=LEARNER).count() == 1
    logger.info("✓ Passed: add item is idempotent")


@pytest.mark.django_db
def test_add_item_validation(client):
    resp = add_item(client, 10, content_type="kanji")
    assert resp.status_code == 400

    resp = client.post(reverse("srs-items"), data={"learner_id": LEARNER}, content_type="application/json")
    assert resp.status_code == 400


@pytest.mark.django_db
def test_review_returns_new_state(client):
    item_id = add_item(client, 1).json()["item_id"]

    resp = post_review(client, item_id, 5)
    data = resp.json()

    assert resp.status_code == 201
    assert data["item_id"] == item_id
    assert data["interval"] == 1
    assert data["repetition"] == 1
    assert data["ease_factor"] == pytest.approx(2.6)
    assert data["time_taken"] == 2.5
    assert data["quality_label"] == "perfect"
    assert "next_review_local" in data
    logger.info("✓ Passed: review scheduled in %s day(s)", data["interval"])


@pytest.mark.django_db
def test_review_sequence_over_api(client):
    item_id = add_item(client, 1).json()["item_id"]

    intervals = [post_review(client, item_id, 5).json()["interval"] for _ in range(3)]

    assert intervals == [1, 6, 17]


@pytest.mark.django_db
@pytest.mark.parametrize("quality", [-1, 6])
def test_review_quality_out_of_range(client, quality):
    item_id = add_item(client, 1).json()["item_id"]

    resp = post_review(client, item_id, quality)

    assert resp.status_code == 400
    assert ReviewRecord.objects.filter(item_id=item_id).count() == 1


@pytest.mark.django_db
def test_review_for_other_learner_is_404(client):
    item_id = add_item(client, 1).json()["item_id"]

    resp = post_review(client, item_id, 4, learner_id=LEARNER + 1)

    assert resp.status_code == 404
    assert "error" in resp.json()


@pytest.mark.django_db
def test_due_items_endpoint(client):
    due_id = add_item(client, 1).json()["item_id"]
    older_id = add_item(client, 2).json()["item_id"]
    add_item(client, 3)
    make_due(due_id, minutes_ago=5)
    make_due(older_id, minutes_ago=60)

    resp = client.get(reverse("srs-due-items"), {"learner_id": LEARNER})
    data = resp.json()

    assert resp.status_code == 200
    assert [i["id"] for i in data["items"]] == [older_id, due_id]
    assert data["items"][0]["repetition"] == 1
    assert data["items"][0]["front_content"] == "front-2"

    limited = client.get(reverse("srs-due-items"), {"learner_id": LEARNER, "limit": 1}).json()
    assert [i["id"] for i in limited["items"]] == [older_id]
    logger.info("✓ Passed: due items endpoint ordered soonest first")


@pytest.mark.django_db
def test_due_items_requires_learner(client):
    assert client.get(reverse("srs-due-items")).status_code == 400
    assert client.get(reverse("srs-due-items"), {"learner_id": LEARNER, "limit": 0}).status_code == 400


@pytest.mark.django_db
def test_stats_endpoint(client):
    item_id = add_item(client, 1).json()["item_id"]
    add_item(client, 2)
    post_review(client, item_id, 5)

    resp = client.get(reverse("srs-stats"), {"learner_id": LEARNER})

    assert resp.status_code == 200
    assert resp.json()["stats"] == {
        "total_items": 2,
        "due_items": 0,
        "new_items": 1,
        "learning_items": 1,
        "mature_items": 0,
    }


@pytest.mark.django_db
def test_storage_failure_is_503(client):
    with mock.patch("srs.api.views.get_stats", side_effect=StorageError("database unavailable")):
        resp = client.get(reverse("srs-stats"), {"learner_id": LEARNER})

    assert resp.status_code == 503
    assert resp.json() == {"error": "database unavailable"}


@pytest.mark.django_db
def test_bulk_vocabulary_import(client):
    payload = {
        "learner_id": LEARNER,
        "content_type": "vocabulary",
        "items": [
            {"id": 1, "word": "brood", "definition": "bread"},
            {"id": 2, "word": "kaas", "definition": "cheese", "example": "Goudse kaas"},
            {"id": 3, "word": "", "definition": "nothing"},
        ],
    }

    resp = client.post(reverse("srs-items-bulk"), data=payload, content_type="application/json")
    data = resp.json()

    assert resp.status_code == 200
    assert data["success"] is True
    assert len(data["item_ids"]) == 2
    assert data["failed"] == [3]


@pytest.mark.django_db
def test_update_media(client):
    item_id = add_item(client, 1).json()["item_id"]
    url = reverse("srs-item-media", kwargs={"item_id": item_id})

    resp = client.patch(
        url,
        data={"learner_id": LEARNER, "audio_url": "audio/1.mp3"},
        content_type="application/json",
    )

    assert resp.status_code == 200
    assert resp.json()["audio_url"] == "audio/1.mp3"

    other = client.patch(
        url,
        data={"learner_id": LEARNER + 1, "audio_url": "audio/x.mp3"},
        content_type="application/json",
    )
    assert other.status_code == 404
