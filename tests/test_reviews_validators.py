"""
domains/reviews/validators.py 테스트
"""

import datetime

import pytest

from domains.reviews.exceptions import InvalidArgument
from domains.reviews.validators import validate_review_fields, validate_score


def _full(**overrides):
    data = {
        "title": "Heat",
        "body": "Great diner scene.",
        "kind": "movie",
        "date_watched": "2024-03-01",
    }
    data.update(overrides)
    return data


class TestValidateReviewFields:
    """validate_review_fields 테스트"""

    def test_full_fills_optional_defaults(self):
        cleaned = validate_review_fields(_full())
        assert cleaned["date_watched"] == datetime.date(2024, 3, 1)
        assert cleaned["tags"] == []
        assert cleaned["genres"] == []
        assert cleaned["gallery_images"] == []
        assert cleaned["poster_url"] is None
        assert cleaned["short_summary"] is None
        assert cleaned["featured"] is False

    def test_missing_required_fields(self):
        with pytest.raises(InvalidArgument) as exc:
            validate_review_fields({"title": "Heat"})
        detail = exc.value.detail
        assert set(detail) == {"body", "kind", "date_watched"}

    def test_blank_title_rejected(self):
        with pytest.raises(InvalidArgument) as exc:
            validate_review_fields(_full(title="   "))
        assert "title" in exc.value.detail

    def test_invalid_kind_and_date(self):
        with pytest.raises(InvalidArgument) as exc:
            validate_review_fields(_full(kind="podcast", date_watched="03/01/2024"))
        assert set(exc.value.detail) == {"kind", "date_watched"}

    def test_datetime_rejected_for_date(self):
        with pytest.raises(InvalidArgument):
            validate_review_fields(_full(date_watched=datetime.datetime(2024, 3, 1, 12, 0)))

    def test_tags_comma_string_deduped_sorted(self):
        cleaned = validate_review_fields(_full(tags="rewatch, noir , rewatch,"))
        assert cleaned["tags"] == ["noir", "rewatch"]

    def test_genres_vocabulary(self):
        cleaned = validate_review_fields(_full(genres=["Thriller", "drama", "drama"]))
        assert cleaned["genres"] == ["drama", "thriller"]

        with pytest.raises(InvalidArgument) as exc:
            validate_review_fields(_full(genres=["drama", "western"]))
        assert "western" in str(exc.value.detail["genres"][0])

    def test_gallery_limit_and_order(self):
        urls = [f"https://img.example.com/{i}.jpg" for i in (3, 1, 2)]
        cleaned = validate_review_fields(_full(gallery_images=urls))
        assert cleaned["gallery_images"] == urls

        too_many = [f"https://img.example.com/{i}.jpg" for i in range(11)]
        with pytest.raises(InvalidArgument) as exc:
            validate_review_fields(_full(gallery_images=too_many))
        assert "gallery_images" in exc.value.detail

    def test_gallery_invalid_url(self):
        with pytest.raises(InvalidArgument):
            validate_review_fields(_full(gallery_images=["ftp://nope.example.com/a.jpg"]))

    def test_poster_url_blank_becomes_none(self):
        cleaned = validate_review_fields(_full(poster_url=""))
        assert cleaned["poster_url"] is None

    def test_featured_must_be_bool(self):
        with pytest.raises(InvalidArgument):
            validate_review_fields(_full(featured="yes"))

    def test_partial_only_supplied_fields(self):
        cleaned = validate_review_fields({"short_summary": "  tense  "}, partial=True)
        assert cleaned == {"short_summary": "tense"}

    def test_unknown_keys_ignored(self):
        cleaned = validate_review_fields(_full(slug="hacked", rating=5))
        assert "slug" not in cleaned
        assert "rating" not in cleaned

    def test_non_mapping_rejected(self):
        with pytest.raises(InvalidArgument):
            validate_review_fields(["title"])


class TestValidateScore:
    """validate_score 테스트"""

    @pytest.mark.parametrize("score", [1, 3, 5])
    def test_valid(self, score):
        assert validate_score(score) == score

    @pytest.mark.parametrize("score", [0, 6, -1, 2.5, "4", None, True])
    def test_invalid(self, score):
        with pytest.raises(InvalidArgument):
            validate_score(score)
