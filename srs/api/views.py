import uuid

import structlog
from django.utils import timezone
from rest_framework import status, views
from rest_framework.response import Response

from ..domain.enums import QUALITY_LABELS, ContentType
from ..services.items import bulk_add_grammar, bulk_add_vocabulary, get_or_create_item, update_item_media
from ..services.queue import get_due_items
from ..services.reviews import record_review
from ..services.stats import get_stats
from ..utils.time import to_local_iso
from .serializers import (
    BulkItemsInSerializer,
    DueItemSerializer,
    DueQuerySerializer,
    ItemInSerializer,
    LearnerQuerySerializer,
    MediaInSerializer,
    ReviewInSerializer,
    ReviewRecordSerializer,
)

base_logger = structlog.get_logger()


def _request_logger():
    return base_logger.bind(request_id=str(uuid.uuid4()))


class ItemView(views.APIView):
    def post(self, request):
        logger = _request_logger()

        s = ItemInSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        extras = {k: data[k] for k in ("example", "image_url", "audio_url") if k in data}
        item_id = get_or_create_item(
            data["learner_id"],
            data["content_type"],
            data["content_id"],
            data["front_content"],
            data["back_content"],
            extras,
        )

        logger.info(
            "item_api_response",
            learner_id=data["learner_id"],
            content_type=data["content_type"],
            content_id=data["content_id"],
            item_id=item_id,
        )
        return Response({"success": True, "item_id": item_id}, status=status.HTTP_200_OK)


class BulkItemsView(views.APIView):
    def post(self, request):
        logger = _request_logger()

        s = BulkItemsInSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        learner_id = s.validated_data["learner_id"]
        content_type = s.validated_data["content_type"]
        entries = s.validated_data["items"]

        if content_type == ContentType.VOCABULARY:
            result = bulk_add_vocabulary(learner_id, entries)
        else:
            result = bulk_add_grammar(learner_id, entries)

        status_code = status.HTTP_200_OK if result["success"] else status.HTTP_500_INTERNAL_SERVER_ERROR
        logger.info(
            "bulk_items_api_response",
            learner_id=learner_id,
            content_type=content_type,
            imported=len(result["item_ids"]),
            failed=len(result["failed"]),
            status=status_code,
        )
        return Response(result, status=status_code)


class ItemMediaView(views.APIView):
    def patch(self, request, item_id):
        logger = _request_logger()

        s = MediaInSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        item = update_item_media(
            item_id,
            data["learner_id"],
            image_url=data.get("image_url"),
            audio_url=data.get("audio_url"),
        )

        logger.info("item_media_api_response", learner_id=data["learner_id"], item_id=item_id)
        return Response(
            {"item_id": item.pk, "image_url": item.image_url, "audio_url": item.audio_url},
            status=status.HTTP_200_OK,
        )


class ReviewView(views.APIView):
    def post(self, request):
        logger = _request_logger()

        s = ReviewInSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        item_id = s.validated_data["item_id"]
        learner_id = s.validated_data["learner_id"]
        quality = s.validated_data["response_quality"]
        time_taken = s.validated_data["time_taken"]

        record = record_review(item_id, learner_id, quality, time_taken)
        tz = timezone.get_current_timezone()

        logger.info(
            "review_api_response",
            learner_id=learner_id,
            item_id=item_id,
            quality=quality,
            interval_days=record.interval,
            next_review_utc=record.next_review_date.isoformat(),
            status=status.HTTP_201_CREATED,
        )

        return Response(
            {
                **ReviewRecordSerializer(record).data,
                "next_review_local": to_local_iso(record.next_review_date, tz),
                "quality_label": QUALITY_LABELS[quality],
            },
            status=status.HTTP_201_CREATED,
        )


class DueItemsView(views.APIView):
    def get(self, request):
        logger = _request_logger()

        qs = DueQuerySerializer(data=request.query_params)
        qs.is_valid(raise_exception=True)
        learner_id = qs.validated_data["learner_id"]
        limit = qs.validated_data["limit"]

        items = get_due_items(learner_id, limit)

        logger.info(
            "due_items_api_response",
            learner_id=learner_id,
            limit=limit,
            item_count=len(items),
        )
        return Response(
            {
                "learner_id": learner_id,
                "items": DueItemSerializer(items, many=True).data,
            }
        )


class StatsView(views.APIView):
    def get(self, request):
        logger = _request_logger()

        qs = LearnerQuerySerializer(data=request.query_params)
        qs.is_valid(raise_exception=True)
        learner_id = qs.validated_data["learner_id"]

        stats = get_stats(learner_id)

        logger.info("stats_api_response", learner_id=learner_id, **stats.as_dict())
        return Response({"learner_id": learner_id, "stats": stats.as_dict()})
