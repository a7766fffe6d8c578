import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Review",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        db_column="review_id",
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("slug", models.SlugField(editable=False, max_length=255, unique=True)),
                ("title", models.CharField(max_length=255)),
                (
                    "kind",
                    models.CharField(
                        choices=[("movie", "Movie"), ("series", "Series")],
                        max_length=10,
                    ),
                ),
                ("poster_url", models.URLField(blank=True, max_length=1000, null=True)),
                ("short_summary", models.TextField(blank=True, null=True)),
                ("body", models.TextField()),
                ("date_watched", models.DateField(db_index=True)),
                ("tags", models.JSONField(blank=True, default=list)),
                ("genres", models.JSONField(blank=True, default=list)),
                ("gallery_images", models.JSONField(blank=True, default=list)),
                ("featured", models.BooleanField(db_index=True, default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "owner",
                    models.ForeignKey(
                        blank=True,
                        db_column="owner_id",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="journal_reviews",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "reviews",
                "indexes": [
                    models.Index(fields=["-date_watched", "-created_at"], name="reviews_recency_idx"),
                    models.Index(fields=["kind"], name="reviews_kind_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("slug", ""), _negated=True),
                        name="reviews_slug_not_empty",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Rating",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        db_column="rating_id",
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("score", models.PositiveSmallIntegerField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "rater",
                    models.ForeignKey(
                        db_column="rater_id",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="journal_ratings",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "review",
                    models.ForeignKey(
                        db_column="review_id",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="ratings",
                        to="reviews.review",
                    ),
                ),
            ],
            options={
                "db_table": "ratings",
                "indexes": [models.Index(fields=["review"], name="ratings_review_idx")],
                "constraints": [
                    models.UniqueConstraint(fields=("review", "rater"), name="uniq_rating_review_rater"),
                    models.CheckConstraint(
                        condition=models.Q(("score__gte", 1), ("score__lte", 5)),
                        name="ratings_score_range",
                    ),
                ],
            },
        ),
    ]
