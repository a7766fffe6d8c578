# domains/reviews/views_ratings.py
from drf_spectacular.utils import extend_schema
from rest_framework import generics, permissions, status
from rest_framework.response import Response

from domains.accounts.identity import current_user

from .exceptions import NotFound
from .serializers import AggregateSerializer, RatingSubmitSerializer, RatingSummarySerializer
from .services import get_review
from .services_ratings import aggregate_for, rating_distribution, submit_rating, user_rating_for


class ReviewRatingAPI(generics.GenericAPIView):
    """
    GET  /api/v1/reviews/{slug}/rating/   집계 + 분포 + 내 점수 (공개)
    POST /api/v1/reviews/{slug}/rating/   {score: 1~5} 제출/재제출 (로그인 필요)
    """

    permission_classes = [permissions.AllowAny]

    def get_serializer_class(self):
        return RatingSubmitSerializer if self.request.method == "POST" else RatingSummarySerializer

    def _review_or_404(self, slug):
        review = get_review(slug)
        if review is None:
            raise NotFound(f"review {slug!r} not found")
        return review

    @extend_schema(operation_id="GetReviewRating", responses={200: RatingSummarySerializer}, tags=["ratings"])
    def get(self, request, slug, *args, **kwargs):
        review = self._review_or_404(slug)
        data = {
            "review_id": review.id,
            "aggregate": aggregate_for(review.id),
            "distribution": {str(k): v for k, v in rating_distribution(review.id).items()},
            "my_score": user_rating_for(review.id, current_user(request)),
        }
        return Response(RatingSummarySerializer(data).data)

    @extend_schema(
        operation_id="SubmitReviewRating",
        request=RatingSubmitSerializer,
        responses={200: AggregateSerializer},
        tags=["ratings"],
    )
    def post(self, request, slug, *args, **kwargs):
        review = self._review_or_404(slug)
        ser = RatingSubmitSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        agg = submit_rating(review.id, current_user(request), ser.validated_data["score"])
        return Response(AggregateSerializer(agg).data, status=status.HTTP_200_OK)
