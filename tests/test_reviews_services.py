"""
domains/reviews/services.py (Review Repository) 테스트
"""

import datetime
from unittest.mock import patch

import pytest

from domains.reviews.exceptions import Conflict, Forbidden, InvalidArgument, NotFound, Unauthorized
from domains.reviews.models import Rating, Review
from domains.reviews.services import (
    create_review,
    delete_review,
    get_review,
    list_reviews,
    update_review,
)
from domains.reviews.services_query import ReviewFilters
from domains.reviews.services_ratings import aggregate_for, submit_rating


def _payload(**overrides):
    data = {
        "title": "The Matrix: Reloaded!!",
        "body": "Freeway chase holds up.",
        "kind": "movie",
        "date_watched": datetime.date(2024, 5, 1),
    }
    data.update(overrides)
    return data


@pytest.mark.django_db
class TestCreateReview:
    """create_review 테스트"""

    def test_create_derives_slug_and_owner(self, identity, user):
        review = create_review(identity, _payload(genres=["sci-fi", "action"], tags="rewatch"))

        assert review.slug == "the-matrix-reloaded"
        assert review.owner_id == user.id
        assert review.genres == ["action", "sci-fi"]
        assert review.tags == ["rewatch"]
        assert review.featured is False
        assert get_review("the-matrix-reloaded").id == review.id

    def test_anonymous_rejected(self):
        with pytest.raises(Unauthorized):
            create_review(None, _payload())
        assert Review.objects.count() == 0

    def test_slug_collision_is_conflict(self, identity, review_factory):
        existing = review_factory(title="The Matrix Reloaded", body="original")

        with pytest.raises(Conflict):
            create_review(identity, _payload(title="the matrix -- reloaded"))

        existing.refresh_from_db()
        assert existing.body == "original"
        assert Review.objects.count() == 1

    def test_empty_slug_rejected(self, identity):
        with pytest.raises(InvalidArgument) as exc:
            create_review(identity, _payload(title="!!!"))
        assert "title" in exc.value.detail
        assert Review.objects.count() == 0

    def test_client_slug_ignored(self, identity):
        review = create_review(identity, _payload(slug="custom-slug"))
        assert review.slug == "the-matrix-reloaded"

    def test_invalid_fields(self, identity):
        with pytest.raises(InvalidArgument) as exc:
            create_review(identity, _payload(kind="podcast", genres=["western"]))
        assert set(exc.value.detail) == {"kind", "genres"}


@pytest.mark.django_db
class TestGetAndList:
    """get_review / list_reviews 테스트"""

    def test_get_is_exact_and_case_sensitive(self, review):
        assert get_review(review.slug) == review
        assert get_review(review.slug.upper()) is None
        assert get_review("missing") is None
        assert get_review("") is None

    def test_list_applies_filters(self, review_factory):
        a = review_factory(title="Alien", genres=["horror", "sci-fi"])
        review_factory(title="Heat", genres=["drama"], kind="series")

        assert {r.id for r in list_reviews()} == set(Review.objects.values_list("id", flat=True))
        assert [r.id for r in list_reviews(ReviewFilters(genres={"sci-fi"}))] == [a.id]
        assert [r.id for r in list_reviews(ReviewFilters(kind="movie"))] == [a.id]


@pytest.mark.django_db
class TestUpdateReview:
    """update_review 테스트"""

    def test_full_update_keeps_slug(self, identity, review):
        updated = update_review(identity, review.slug, _payload(title="Completely New Title", body="v2"))

        assert updated.slug == "the-matrix-reloaded"
        assert updated.title == "Completely New Title"
        assert updated.body == "v2"
        # 전체 수정: 빠진 선택 필드는 기본값
        assert updated.genres == []
        assert get_review("completely-new-title") is None

    def test_full_update_requires_required_fields(self, identity, review):
        with pytest.raises(InvalidArgument):
            update_review(identity, review.slug, {"title": "Only title"})

    def test_partial_update(self, identity, review):
        before = review.updated_at
        updated = update_review(identity, review.slug, {"featured": True}, partial=True)

        assert updated.featured is True
        assert updated.genres == ["action", "sci-fi"]
        assert updated.updated_at >= before

    def test_not_found(self, identity):
        with pytest.raises(NotFound):
            update_review(identity, "nope", _payload())

    def test_anonymous_rejected(self, review):
        with pytest.raises(Unauthorized):
            update_review(None, review.slug, {"featured": True}, partial=True)


@pytest.mark.django_db
class TestDeleteReview:
    """delete_review 테스트"""

    def test_delete_cascades_ratings(self, identity, other_identity, review):
        submit_rating(review.id, identity, 5)
        submit_rating(review.id, other_identity, 2)
        review_id = review.id

        delete_review(identity, review.slug)

        assert get_review(review.slug) is None
        assert not Rating.objects.filter(review_id=review_id).exists()
        assert aggregate_for(review_id).count == 0

    def test_not_found(self, identity):
        with pytest.raises(NotFound):
            delete_review(identity, "missing")

    def test_anonymous_rejected(self, review):
        with pytest.raises(Unauthorized):
            delete_review(None, review.slug)
        assert Review.objects.filter(pk=review.pk).exists()


@pytest.mark.django_db
class TestOwnershipGate:
    """REVIEWS_ENFORCE_OWNERSHIP 설정 테스트"""

    def test_off_by_default_any_identity_may_edit(self, other_identity, review):
        updated = update_review(other_identity, review.slug, {"featured": True}, partial=True)
        assert updated.featured is True

    def test_on_rejects_non_owner(self, settings, other_identity, review):
        settings.REVIEWS_ENFORCE_OWNERSHIP = True

        with pytest.raises(Forbidden):
            update_review(other_identity, review.slug, {"featured": True}, partial=True)
        with pytest.raises(Forbidden):
            delete_review(other_identity, review.slug)

    def test_on_allows_owner_and_staff(self, settings, identity, staff_identity, review):
        settings.REVIEWS_ENFORCE_OWNERSHIP = True

        update_review(identity, review.slug, {"featured": True}, partial=True)
        delete_review(staff_identity, review.slug)
        assert get_review(review.slug) is None

    def test_on_ownerless_rows_are_open(self, settings, other_identity, review_factory):
        settings.REVIEWS_ENFORCE_OWNERSHIP = True
        legacy = review_factory(title="Legacy", owner=None)

        delete_review(other_identity, legacy.slug)
        assert get_review("legacy") is None


@pytest.mark.django_db
class TestCreateReviewRace:
    """사전 확인 이후 다른 요청이 같은 slug 를 먼저 저장한 경우"""

    def test_unique_constraint_maps_to_conflict(self, identity, review_factory):
        review_factory(title="The Matrix Reloaded", body="first writer")

        with patch.object(Review.objects, "filter") as pre_check:
            pre_check.return_value.exists.return_value = False
            with pytest.raises(Conflict):
                create_review(identity, _payload())

        assert Review.objects.get(slug="the-matrix-reloaded").body == "first writer"
