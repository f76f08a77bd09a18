import datetime

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="SrsItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("learner_id", models.BigIntegerField()),
                (
                    "content_type",
                    models.CharField(
                        choices=[("vocabulary", "Vocabulary"), ("grammar", "Grammar")],
                        max_length=16,
                    ),
                ),
                ("content_id", models.BigIntegerField()),
                ("front_content", models.TextField()),
                ("back_content", models.TextField()),
                ("example", models.TextField(blank=True, default="")),
                ("image_url", models.CharField(blank=True, default="", max_length=500)),
                ("audio_url", models.CharField(blank=True, default="", max_length=500)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "db_table": "srs_items",
                "indexes": [models.Index(fields=["learner_id"], name="srs_items_learner_idx")],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("learner_id", "content_type", "content_id"),
                        name="uniq_srs_item_per_learner",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="ReviewRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("learner_id", models.BigIntegerField()),
                ("ease_factor", models.FloatField()),
                ("interval", models.PositiveIntegerField()),
                ("repetition", models.PositiveIntegerField()),
                ("next_review_date", models.DateTimeField()),
                ("response_quality", models.PositiveSmallIntegerField()),
                ("time_taken", models.DurationField(default=datetime.timedelta)),
                ("review_date", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "item",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="reviews",
                        to="srs.srsitem",
                    ),
                ),
            ],
            options={
                "db_table": "srs_review_history",
                "indexes": [
                    models.Index(fields=["item", "review_date"], name="srs_hist_item_date_idx"),
                    models.Index(fields=["learner_id", "review_date"], name="srs_hist_learner_date_idx"),
                    models.Index(fields=["learner_id", "next_review_date"], name="srs_hist_learner_due_idx"),
                ],
            },
        ),
    ]
