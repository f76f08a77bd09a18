from rest_framework import serializers

from ..config import DEFAULT_DUE_LIMIT, MAX_DUE_LIMIT
from ..data.models import ReviewRecord
from ..domain.enums import ContentType


class ItemInSerializer(serializers.Serializer):
    learner_id = serializers.IntegerField(min_value=1)
    content_type = serializers.ChoiceField(choices=ContentType.choices)
    content_id = serializers.IntegerField(min_value=1)
    front_content = serializers.CharField()
    back_content = serializers.CharField()
    example = serializers.CharField(required=False, allow_blank=True)
    image_url = serializers.CharField(required=False, allow_blank=True, max_length=500)
    audio_url = serializers.CharField(required=False, allow_blank=True, max_length=500)


class BulkItemsInSerializer(serializers.Serializer):
    learner_id = serializers.IntegerField(min_value=1)
    content_type = serializers.ChoiceField(choices=ContentType.choices)
    items = serializers.ListField(child=serializers.DictField(), allow_empty=False)


class MediaInSerializer(serializers.Serializer):
    learner_id = serializers.IntegerField(min_value=1)
    image_url = serializers.CharField(required=False, allow_blank=True, max_length=500)
    audio_url = serializers.CharField(required=False, allow_blank=True, max_length=500)


class ReviewInSerializer(serializers.Serializer):
    item_id = serializers.IntegerField(min_value=1)
    learner_id = serializers.IntegerField(min_value=1)
    response_quality = serializers.IntegerField(min_value=0, max_value=5)
    time_taken = serializers.FloatField(min_value=0, required=False, default=0)


class LearnerQuerySerializer(serializers.Serializer):
    learner_id = serializers.IntegerField(min_value=1)


class DueQuerySerializer(LearnerQuerySerializer):
    limit = serializers.IntegerField(min_value=1, max_value=MAX_DUE_LIMIT, default=DEFAULT_DUE_LIMIT)


class ReviewRecordSerializer(serializers.ModelSerializer):
    item_id = serializers.IntegerField(read_only=True)
    time_taken = serializers.SerializerMethodField()

    class Meta:
        model = ReviewRecord
        fields = [
            "id",
            "item_id",
            "learner_id",
            "ease_factor",
            "interval",
            "repetition",
            "next_review_date",
            "response_quality",
            "time_taken",
            "review_date",
        ]

    def get_time_taken(self, obj):
        return obj.time_taken.total_seconds()


class DueItemSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    content_type = serializers.CharField()
    content_id = serializers.IntegerField()
    front_content = serializers.CharField()
    back_content = serializers.CharField()
    example = serializers.CharField()
    image_url = serializers.CharField()
    audio_url = serializers.CharField()
    next_review_date = serializers.DateTimeField()
    ease_factor = serializers.FloatField(source="current_ease_factor")
    interval = serializers.IntegerField(source="current_interval")
    repetition = serializers.IntegerField(source="current_repetition")
