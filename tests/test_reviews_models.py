"""
domains/reviews/models.py DB 제약 테스트 (앱 레벨 검사를 거치지 않고 직접 저장)
"""

from django.db import IntegrityError, transaction

import pytest

from domains.reviews.models import Rating, Review

from tests.factories import create_rating, create_review


@pytest.mark.django_db
class TestReviewConstraints:
    def test_duplicate_slug_rejected(self):
        create_review(title="Heat")

        with pytest.raises(IntegrityError), transaction.atomic():
            create_review(title="Another Heat", slug="heat")
        assert Review.objects.filter(slug="heat").count() == 1

    def test_empty_slug_rejected(self):
        with pytest.raises(IntegrityError), transaction.atomic():
            create_review(title="!!!", slug="")
        assert not Review.objects.exists()


@pytest.mark.django_db
class TestRatingConstraints:
    def test_one_rating_per_review_and_rater(self, user, review):
        create_rating(review, user, 4)

        with pytest.raises(IntegrityError), transaction.atomic():
            create_rating(review, user, 2)
        assert Rating.objects.filter(review=review, rater=user).get().score == 4

    def test_other_rater_is_independent(self, user, other_user, review):
        create_rating(review, user, 4)
        create_rating(review, other_user, 2)
        assert review.ratings.count() == 2

    @pytest.mark.parametrize("score", [0, 6])
    def test_score_out_of_range_rejected(self, user, review, score):
        with pytest.raises(IntegrityError), transaction.atomic():
            create_rating(review, user, score)
        assert not Rating.objects.exists()

    def test_ratings_cascade_with_review(self, user, review):
        create_rating(review, user, 5)
        review.delete()
        assert not Rating.objects.exists()
