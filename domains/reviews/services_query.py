# domains/reviews/services_query.py
"""
Query Pipeline

filter + sort 조합. 모든 목록 화면(전체/추천/최신)이 여기로 들어온다.

  1) Review Repository.list_reviews(filters)   ← 조건에 맞는 후보 (순서 없음)
  2) Rating Ledger.aggregates_for(ids)         ← 평점 집계 배치 1회
  3) sort 전략 적용 (전순서)

읽기 전용이며 상태를 바꾸지 않는다.
주의: 1)과 2)는 한 트랜잭션이 아니다. 두 단계 사이에 제출된 평점은
반영될 수도, 안 될 수도 있다 (허용된 staleness window).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, FrozenSet, List, NamedTuple, Optional

from django.conf import settings
from django.db import connection
from django.db.models import Q, TextChoices

from .exceptions import InvalidArgument
from .models import Genre, Kind, Review
from .services import list_reviews
from .services_ratings import Aggregate, aggregates_for

logger = logging.getLogger(__name__)


class ReviewSort(TextChoices):
    RECENCY = "recency", "Most recent first"
    RATING = "rating", "Highest rated first"


class RatedReview(NamedTuple):
    review: Review
    aggregate: Aggregate


# -----------------------------
# Filters (AND 조건)
# -----------------------------
@dataclass(frozen=True)
class ReviewFilters:
    """
    kind     : 정확히 일치
    text     : 제목(title)만 대소문자 무시 부분 일치 (본문 제외)
    genres   : 리뷰의 장르 집합이 이 집합을 모두 포함해야 함 (superset)
    featured : 추천 여부 일치
    """

    kind: Optional[str] = None
    text: Optional[str] = None
    genres: FrozenSet[str] = frozenset()
    featured: Optional[bool] = None

    def __post_init__(self):
        errors = {}
        if self.kind is not None and self.kind not in Kind.values:
            errors["kind"] = [f"Must be one of: {', '.join(Kind.values)}."]
        raw = self.genres or ()
        if isinstance(raw, str):
            raw = raw.split(",")
        genres = frozenset(g.strip().lower() for g in raw if isinstance(g, str) and g.strip())
        unknown = sorted(genres - set(Genre.values))
        if unknown:
            errors["genres"] = [f"Unknown genre(s): {', '.join(unknown)}."]
        if errors:
            raise InvalidArgument(errors)
        text = (self.text or "").strip() or None
        # frozen dataclass 라 object.__setattr__ 로 정규화 값 반영
        object.__setattr__(self, "genres", genres)
        object.__setattr__(self, "text", text)

    @property
    def _text_in_db(self) -> bool:
        # SQLite LIKE 는 ASCII 만 대소문자 무시 → 그 외 백엔드는 파이썬에서만 비교
        return bool(self.text) and connection.vendor == "postgresql"

    @property
    def _genres_in_db(self) -> bool:
        # PostgreSQL 은 JSON @> 로 DB 에서 처리, SQLite 등은 파이썬 후처리
        return bool(self.genres) and connection.features.supports_json_field_contains

    def to_q(self) -> Q:
        """DB 로 표현 가능한 조건"""
        q = Q()
        if self.kind is not None:
            q &= Q(kind=self.kind)
        if self._text_in_db:
            q &= Q(title__icontains=self.text)
        if self.featured is not None:
            q &= Q(featured=self.featured)
        if self._genres_in_db:
            q &= Q(genres__contains=sorted(self.genres))
        return q

    def matches(self, review: Review) -> bool:
        """to_q 와 같은 의미의 전체 predicate (장르 포함 검사는 여기서 최종 확인)"""
        if self.kind is not None and review.kind != self.kind:
            return False
        if self.text and self.text.casefold() not in (review.title or "").casefold():
            return False
        if self.featured is not None and review.featured != self.featured:
            return False
        if self.genres and not self.genres.issubset(set(review.genres or ())):
            return False
        return True


# -----------------------------
# Sort
# -----------------------------
def _recency_key(item: RatedReview):
    r = item.review
    return (r.date_watched, r.created_at, r.slug)


def _sort(items: List[RatedReview], sort: str) -> List[RatedReview]:
    # 1차: 최신순 (date_watched ↓, created_at ↓, slug ↓ 로 전순서)
    ordered = sorted(items, key=_recency_key, reverse=True)
    if sort == ReviewSort.RATING:
        # 안정 정렬이라 같은 평균끼리는 최신순 유지, 평점 없는 리뷰는 맨 뒤
        ordered.sort(key=lambda it: (not it.aggregate.is_rated, -it.aggregate.average))
    return ordered


def _coerce_sort(sort: Any) -> str:
    if sort in (None, ""):
        return ReviewSort.RECENCY
    if sort not in ReviewSort.values:
        raise InvalidArgument({"sort": [f"Must be one of: {', '.join(ReviewSort.values)}."]})
    return sort


# -----------------------------
# 공개 API
# -----------------------------
def query_reviews(
    filters: Optional[ReviewFilters] = None,
    sort: str = ReviewSort.RECENCY,
) -> List[RatedReview]:
    """조건에 맞는 (review, aggregate) 목록을 정렬해서 반환"""
    sort = _coerce_sort(sort)
    filters = filters or ReviewFilters()

    reviews = list_reviews(filters)
    aggregates = aggregates_for(r.id for r in reviews)
    items = [RatedReview(r, aggregates[r.id]) for r in reviews]

    logger.debug("query: %s sort=%s -> %d rows", filters, sort, len(items))
    return _sort(items, sort)


def _coerce_limit(limit: Any, default_setting: str, default: int) -> int:
    if limit is None:
        limit = int(getattr(settings, default_setting, default))
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise InvalidArgument({"limit": ["Must be a positive integer."]})
    return min(limit, int(getattr(settings, "REVIEWS_MAX_PAGE_SIZE", 50)))


def featured_reviews(limit: Optional[int] = None) -> List[RatedReview]:
    """추천 리뷰 (featured=True, 최신순, 최대 limit 개)"""
    limit = _coerce_limit(limit, "REVIEWS_FEATURED_LIMIT", 3)
    return query_reviews(ReviewFilters(featured=True), ReviewSort.RECENCY)[:limit]


def latest_reviews(limit: Optional[int] = None) -> List[RatedReview]:
    """최신 리뷰 (조건 없음, 최신순, 최대 limit 개)"""
    limit = _coerce_limit(limit, "REVIEWS_LATEST_LIMIT", 6)
    return query_reviews(ReviewFilters(), ReviewSort.RECENCY)[:limit]


def genre_vocabulary() -> List[dict]:
    return [{"value": value, "label": label} for value, label in Genre.choices]


__all__ = [
    "ReviewSort",
    "RatedReview",
    "ReviewFilters",
    "query_reviews",
    "featured_reviews",
    "latest_reviews",
    "genre_vocabulary",
]
