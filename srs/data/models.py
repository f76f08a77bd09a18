from datetime import timedelta

from django.db import models
from django.utils import timezone

from ..domain.enums import ContentType


class SrsItem(models.Model):
    learner_id = models.BigIntegerField()
    content_type = models.CharField(max_length=16, choices=ContentType.choices)
    content_id = models.BigIntegerField()
    front_content = models.TextField()
    back_content = models.TextField()
    example = models.TextField(blank=True, default="")
    image_url = models.CharField(max_length=500, blank=True, default="")
    audio_url = models.CharField(max_length=500, blank=True, default="")
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "srs_items"
        constraints = [
            models.UniqueConstraint(
                fields=["learner_id", "content_type", "content_id"],
                name="uniq_srs_item_per_learner",
            ),
        ]
        indexes = [
            models.Index(fields=["learner_id"], name="srs_items_learner_idx"),
        ]

    def __str__(self):
        return f"{self.content_type}:{self.content_id} (learner {self.learner_id})"


class ReviewRecord(models.Model):
    """
    One scheduling state produced by a review. Rows are append-only: the
    newest row per item (by review_date) is the item's current state.
    """

    item = models.ForeignKey(SrsItem, on_delete=models.PROTECT, related_name="reviews")
    learner_id = models.BigIntegerField()
    ease_factor = models.FloatField()
    interval = models.PositiveIntegerField()
    repetition = models.PositiveIntegerField()
    next_review_date = models.DateTimeField()
    response_quality = models.PositiveSmallIntegerField()
    time_taken = models.DurationField(default=timedelta)
    review_date = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "srs_review_history"
        indexes = [
            models.Index(fields=["item", "review_date"], name="srs_hist_item_date_idx"),
            models.Index(fields=["learner_id", "review_date"], name="srs_hist_learner_date_idx"),
            models.Index(fields=["learner_id", "next_review_date"], name="srs_hist_learner_due_idx"),
        ]

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise TypeError("ReviewRecord rows are append-only")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise TypeError("ReviewRecord rows are append-only")
