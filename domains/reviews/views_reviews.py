# domains/reviews/views_reviews.py
import django_filters as df
from drf_spectacular.utils import OpenApiParameter, OpenApiTypes, extend_schema
from rest_framework import generics, permissions, status
from rest_framework.response import Response

from domains.accounts.identity import current_user

from .exceptions import InvalidArgument, NotFound
from .models import Kind, Review
from .serializers import (
    GenreSerializer,
    ReviewReadSerializer,
    ReviewWriteSerializer,
    serialize_one,
    serialize_rated,
)
from .services import create_review, delete_review, get_review, update_review
from .services_query import (
    RatedReview,
    ReviewFilters,
    ReviewSort,
    featured_reviews,
    genre_vocabulary,
    latest_reviews,
    query_reviews,
)
from .services_ratings import ZERO, aggregate_for


# ─────────────────────────────────────────────────────────────────────────────
# Filters (쿼리스트링 → ReviewFilters)
# ─────────────────────────────────────────────────────────────────────────────
class GenreCSVFilter(df.BaseCSVFilter, df.CharFilter):
    """?genres=drama,Thriller (콤마 구분). 대소문자/어휘 검증은 ReviewFilters 가 담당"""


class ReviewFilterSet(df.FilterSet):
    """
    쿼리스트링 파서. 조건 적용은 ReviewFilters → query_reviews 가 하므로
    이 FilterSet 의 qs 는 쓰지 않는다.
    """

    kind = df.ChoiceFilter(choices=Kind.choices)
    q = df.CharFilter()
    genres = GenreCSVFilter()
    featured = df.BooleanFilter()

    def to_review_filters(self) -> ReviewFilters:
        data = self.form.cleaned_data
        return ReviewFilters(
            kind=data.get("kind") or None,
            text=data.get("q") or None,
            genres=frozenset(data.get("genres") or ()),
            featured=data.get("featured"),
        )

    class Meta:
        model = Review
        fields = ["kind", "q", "genres", "featured"]


def _parse_filters(request) -> ReviewFilters:
    fs = ReviewFilterSet(request.query_params, queryset=Review.objects.none(), request=request)
    if not fs.is_valid():
        raise InvalidArgument(fs.errors)
    return fs.to_review_filters()


def _parse_limit(request):
    raw = request.query_params.get("limit")
    if raw in (None, ""):
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise InvalidArgument({"limit": ["Must be a positive integer."]})


def _get_or_404(slug: str) -> Review:
    review = get_review(slug)
    if review is None:
        raise NotFound(f"review {slug!r} not found")
    return review


_LIST_PARAMETERS = [
    OpenApiParameter("kind", OpenApiTypes.STR, OpenApiParameter.QUERY, required=False, enum=Kind.values),
    OpenApiParameter("q", OpenApiTypes.STR, OpenApiParameter.QUERY, required=False, description="제목 검색 (대소문자 무시)"),
    OpenApiParameter(
        "genres",
        OpenApiTypes.STR,
        OpenApiParameter.QUERY,
        required=False,
        description="콤마 구분 장르. 모든 장르를 포함한 리뷰만 반환",
    ),
    OpenApiParameter("featured", OpenApiTypes.BOOL, OpenApiParameter.QUERY, required=False),
    OpenApiParameter(
        "sort",
        OpenApiTypes.STR,
        OpenApiParameter.QUERY,
        required=False,
        enum=ReviewSort.values,
        description="recency(기본): 시청일 최신순 / rating: 평균 평점순, 평점 없는 리뷰는 마지막",
    ),
]

_LIMIT_PARAMETER = OpenApiParameter(
    "limit", OpenApiTypes.INT, OpenApiParameter.QUERY, required=False, description="최대 개수"
)


# ─────────────────────────────────────────────────────────────────────────────
# List & Create
# ─────────────────────────────────────────────────────────────────────────────
class ReviewListCreateAPI(generics.GenericAPIView):
    """
    GET  /api/v1/reviews/   (공개, 필터+정렬, 페이지네이션 없음)
    POST /api/v1/reviews/   (로그인 필요)
    """

    permission_classes = [permissions.AllowAny]
    queryset = Review.objects.none()
    filterset_class = ReviewFilterSet

    def get_serializer_class(self):
        return ReviewWriteSerializer if self.request.method == "POST" else ReviewReadSerializer

    @extend_schema(
        operation_id="ListReviews",
        parameters=_LIST_PARAMETERS,
        responses={200: ReviewReadSerializer(many=True)},
        tags=["reviews"],
    )
    def get(self, request, *args, **kwargs):
        filters = _parse_filters(request)
        items = query_reviews(filters, request.query_params.get("sort") or ReviewSort.RECENCY)
        return Response(serialize_rated(items, context=self.get_serializer_context()))

    @extend_schema(
        operation_id="CreateReview",
        request=ReviewWriteSerializer,
        responses={201: ReviewReadSerializer},
        tags=["reviews"],
    )
    def post(self, request, *args, **kwargs):
        ser = ReviewWriteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        review = create_review(current_user(request), ser.validated_data)
        data = serialize_one(RatedReview(review, ZERO), context=self.get_serializer_context())
        return Response(data, status=status.HTTP_201_CREATED)


# ─────────────────────────────────────────────────────────────────────────────
# Retrieve / Update / Delete (slug 기준)
# ─────────────────────────────────────────────────────────────────────────────
class ReviewDetailAPI(generics.GenericAPIView):
    """
    GET    /api/v1/reviews/{slug}/
    PUT    /api/v1/reviews/{slug}/   전체 수정 (slug 는 그대로)
    PATCH  /api/v1/reviews/{slug}/   부분 수정
    DELETE /api/v1/reviews/{slug}/   평점까지 함께 삭제
    """

    permission_classes = [permissions.AllowAny]
    queryset = Review.objects.none()

    def get_serializer_class(self):
        return ReviewWriteSerializer if self.request.method in ("PUT", "PATCH") else ReviewReadSerializer

    def _rendered(self, review: Review):
        item = RatedReview(review, aggregate_for(review.id))
        return serialize_one(item, context=self.get_serializer_context())

    def _update(self, request, slug, *, partial: bool):
        ser = ReviewWriteSerializer(data=request.data, partial=partial)
        ser.is_valid(raise_exception=True)
        review = update_review(current_user(request), slug, ser.validated_data, partial=partial)
        return Response(self._rendered(review))

    @extend_schema(operation_id="GetReview", responses={200: ReviewReadSerializer}, tags=["reviews"])
    def get(self, request, slug, *args, **kwargs):
        return Response(self._rendered(_get_or_404(slug)))

    @extend_schema(
        operation_id="ReplaceReview",
        request=ReviewWriteSerializer,
        responses={200: ReviewReadSerializer},
        tags=["reviews"],
    )
    def put(self, request, slug, *args, **kwargs):
        return self._update(request, slug, partial=False)

    @extend_schema(
        operation_id="UpdateReview",
        request=ReviewWriteSerializer,
        responses={200: ReviewReadSerializer},
        tags=["reviews"],
    )
    def patch(self, request, slug, *args, **kwargs):
        return self._update(request, slug, partial=True)

    @extend_schema(operation_id="DeleteReview", responses={204: None}, tags=["reviews"])
    def delete(self, request, slug, *args, **kwargs):
        delete_review(current_user(request), slug)
        return Response(status=status.HTTP_204_NO_CONTENT)


# ─────────────────────────────────────────────────────────────────────────────
# 추천 / 최신 / 장르 어휘
# ─────────────────────────────────────────────────────────────────────────────
class FeaturedReviewsAPI(generics.GenericAPIView):
    """GET /api/v1/featured/?limit=3"""

    permission_classes = [permissions.AllowAny]
    queryset = Review.objects.none()
    serializer_class = ReviewReadSerializer

    @extend_schema(
        operation_id="ListFeaturedReviews",
        parameters=[_LIMIT_PARAMETER],
        responses={200: ReviewReadSerializer(many=True)},
        tags=["reviews"],
    )
    def get(self, request, *args, **kwargs):
        items = featured_reviews(_parse_limit(request))
        return Response(serialize_rated(items, context=self.get_serializer_context()))


class LatestReviewsAPI(generics.GenericAPIView):
    """GET /api/v1/latest/?limit=6"""

    permission_classes = [permissions.AllowAny]
    queryset = Review.objects.none()
    serializer_class = ReviewReadSerializer

    @extend_schema(
        operation_id="ListLatestReviews",
        parameters=[_LIMIT_PARAMETER],
        responses={200: ReviewReadSerializer(many=True)},
        tags=["reviews"],
    )
    def get(self, request, *args, **kwargs):
        items = latest_reviews(_parse_limit(request))
        return Response(serialize_rated(items, context=self.get_serializer_context()))


class GenreListAPI(generics.GenericAPIView):
    """GET /api/v1/genres/"""

    permission_classes = [permissions.AllowAny]
    serializer_class = GenreSerializer

    @extend_schema(operation_id="ListGenres", responses={200: GenreSerializer(many=True)}, tags=["reviews"])
    def get(self, request, *args, **kwargs):
        return Response(genre_vocabulary())
