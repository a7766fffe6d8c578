# domains/reviews/models.py
from __future__ import annotations

import uuid
from django.conf import settings
from django.db import models


# ------------------------
# Enums
# ------------------------
class Kind(models.TextChoices):
    MOVIE = "movie", "Movie"
    SERIES = "series", "Series"


class Genre(models.TextChoices):
    """고정 장르 어휘 (10개)"""

    ACTION = "action", "Action"
    ANIMATION = "animation", "Animation"
    COMEDY = "comedy", "Comedy"
    DOCUMENTARY = "documentary", "Documentary"
    DRAMA = "drama", "Drama"
    FANTASY = "fantasy", "Fantasy"
    HORROR = "horror", "Horror"
    ROMANCE = "romance", "Romance"
    SCI_FI = "sci-fi", "Sci-Fi"
    THRILLER = "thriller", "Thriller"


# ------------------------
# Review (저널 한 편)
# ------------------------
class Review(models.Model):
    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        db_column="review_id",
    )
    # 생성 시 제목에서 파생, 이후 불변
    slug = models.SlugField(max_length=255, unique=True, editable=False)

    title = models.CharField(max_length=255)
    kind = models.CharField(max_length=10, choices=Kind.choices)
    poster_url = models.URLField(max_length=1000, null=True, blank=True)
    short_summary = models.TextField(null=True, blank=True)
    body = models.TextField()
    date_watched = models.DateField(db_index=True)

    # 순서 무의미한 집합: 저장 시 중복 제거 + 정렬
    tags = models.JSONField(default=list, blank=True)
    genres = models.JSONField(default=list, blank=True)
    # 표시 순서가 의미 있는 목록 (최대 REVIEWS_GALLERY_MAX)
    gallery_images = models.JSONField(default=list, blank=True)

    featured = models.BooleanField(default=False, db_index=True)

    # 레거시/익명 행은 owner 없음
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="journal_reviews",
        db_column="owner_id",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "reviews"
        indexes = [
            models.Index(fields=["-date_watched", "-created_at"], name="reviews_recency_idx"),
            models.Index(fields=["kind"], name="reviews_kind_idx"),
        ]
        constraints = [
            # 빈 slug 는 저장 불가 (제목이 전부 비영숫자인 경우)
            models.CheckConstraint(
                name="reviews_slug_not_empty",
                condition=~models.Q(slug=""),
            ),
        ]

    def __str__(self) -> str:
        return f"{self.title} ({self.slug})"


# ------------------------
# Rating (리뷰당 1인 1평점)
# ------------------------
class Rating(models.Model):
    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        db_column="rating_id",
    )
    review = models.ForeignKey(
        Review,
        on_delete=models.CASCADE,  # 리뷰 삭제 시 평점도 함께 삭제
        related_name="ratings",
        db_column="review_id",
    )
    rater = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="journal_ratings",
        db_column="rater_id",
    )
    score = models.PositiveSmallIntegerField()  # 1~5

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "ratings"
        constraints = [
            models.UniqueConstraint(fields=["review", "rater"], name="uniq_rating_review_rater"),
            models.CheckConstraint(
                name="ratings_score_range",
                condition=models.Q(score__gte=1) & models.Q(score__lte=5),
            ),
        ]
        indexes = [
            models.Index(fields=["review"], name="ratings_review_idx"),
        ]

    def __str__(self) -> str:
        return f"Rating({self.id}) {self.rater_id}->{self.review_id}: {self.score}"
