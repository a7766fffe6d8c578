# domains/reviews/serializers.py
from __future__ import annotations

from django.conf import settings
from drf_spectacular.utils import extend_schema_field
from rest_framework import serializers

from .models import Genre, Kind, Review
from .services_query import RatedReview
from .services_ratings import Aggregate, aggregate_for


# ─────────────────────────────────────────────────────────────────────────────
# 평점 집계
# ─────────────────────────────────────────────────────────────────────────────
class AggregateSerializer(serializers.Serializer):
    average = serializers.SerializerMethodField()
    count = serializers.IntegerField()

    @extend_schema_field(serializers.FloatField())
    def get_average(self, obj: Aggregate) -> float:
        return round(obj.average or 0, 2)


class RatingSummarySerializer(serializers.Serializer):
    """GET /reviews/{slug}/rating/ 응답"""

    review_id = serializers.UUIDField()
    aggregate = AggregateSerializer()
    distribution = serializers.DictField(child=serializers.IntegerField())
    my_score = serializers.IntegerField(allow_null=True)


class RatingSubmitSerializer(serializers.Serializer):
    score = serializers.IntegerField(min_value=1, max_value=5)


# ─────────────────────────────────────────────────────────────────────────────
# 리뷰 읽기
# ─────────────────────────────────────────────────────────────────────────────
class ReviewReadSerializer(serializers.ModelSerializer):
    """
    리뷰 + 평점 집계.
    context["aggregates"] ({review_id: Aggregate}) 가 있으면 그 값을 쓰고,
    없으면 단건 집계를 새로 계산한다.
    """

    review_id = serializers.UUIDField(source="id", read_only=True)
    owner_id = serializers.UUIDField(read_only=True, allow_null=True)
    rating = serializers.SerializerMethodField()

    class Meta:
        model = Review
        fields = [
            "review_id",
            "slug",
            "title",
            "kind",
            "poster_url",
            "short_summary",
            "body",
            "date_watched",
            "tags",
            "genres",
            "gallery_images",
            "featured",
            "owner_id",
            "rating",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    @extend_schema_field(AggregateSerializer)
    def get_rating(self, obj: Review):
        aggregates = self.context.get("aggregates") or {}
        agg = aggregates.get(obj.id)
        if agg is None:
            agg = aggregate_for(obj.id)
        return AggregateSerializer(agg).data


def serialize_rated(items, *, context=None):
    """RatedReview 목록 → 응답 리스트 (집계는 이미 계산된 값을 사용)"""
    items = list(items)
    ctx = dict(context or {})
    ctx["aggregates"] = {it.review.id: it.aggregate for it in items}
    return ReviewReadSerializer([it.review for it in items], many=True, context=ctx).data


def serialize_one(item: RatedReview, *, context=None):
    ctx = dict(context or {})
    ctx["aggregates"] = {item.review.id: item.aggregate}
    return ReviewReadSerializer(item.review, context=ctx).data


@extend_schema_field(
    {
        "oneOf": [
            {"type": "array", "items": {"type": "string"}},
            {"type": "string", "description": "comma-separated"},
        ]
    }
)
class StringListField(serializers.Field):
    """문자열 리스트 또는 콤마 구분 문자열. 분리/정규화는 validate_review_fields 가 담당"""

    default_error_messages = {
        "invalid": "Expected a list of strings or a comma-separated string.",
    }

    def to_internal_value(self, data):
        if isinstance(data, str):
            return data
        if isinstance(data, (list, tuple)) and all(isinstance(item, str) for item in data):
            return list(data)
        self.fail("invalid")

    def to_representation(self, value):
        return value


# ─────────────────────────────────────────────────────────────────────────────
# 리뷰 쓰기 (생성 POST / 전체수정 PUT / 부분수정 PATCH 공용)
# ─────────────────────────────────────────────────────────────────────────────
class ReviewWriteSerializer(serializers.Serializer):
    """
    HTTP 입력 파싱/스키마용.
    최종 검증(정규화, slug 파생, 충돌)은 서비스 계층이 담당한다.
    slug 는 입력으로 받지 않는다 (생성 시 제목에서 파생, 이후 불변).
    """

    title = serializers.CharField(max_length=255)
    kind = serializers.ChoiceField(choices=Kind.choices)
    body = serializers.CharField()
    date_watched = serializers.DateField()

    poster_url = serializers.URLField(required=False, allow_null=True, allow_blank=True, max_length=1000)
    short_summary = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    tags = StringListField(required=False, allow_null=True)
    # 대소문자 무시, 어휘 검증은 validators._genres
    genres = StringListField(required=False, allow_null=True)
    gallery_images = serializers.ListField(
        child=serializers.URLField(max_length=1000),
        required=False,
        allow_null=True,
    )
    featured = serializers.BooleanField(required=False)

    def validate_gallery_images(self, value):
        limit = int(getattr(settings, "REVIEWS_GALLERY_MAX", 10))
        if value and len(value) > limit:
            raise serializers.ValidationError(f"At most {limit} gallery images are allowed.")
        return value


class GenreSerializer(serializers.Serializer):
    value = serializers.ChoiceField(choices=Genre.choices)
    label = serializers.CharField()
