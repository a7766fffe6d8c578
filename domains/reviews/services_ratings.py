# domains/reviews/services_ratings.py
"""
Rating Ledger

(review, rater) 당 평점 1개. 재제출은 기존 행을 덮어쓴다.
submit 은 read-then-write 가 아니라 INSERT ... ON CONFLICT DO UPDATE 한 번으로 처리하고,
유일성은 DB 제약(uniq_rating_review_rater)이 보장한다.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

from django.db import IntegrityError, transaction
from django.db.models import Avg, Count
from django.utils import timezone

from domains.accounts.identity import Identity

from .exceptions import NotFound, Unauthorized
from .models import Rating, Review
from .validators import MAX_SCORE, MIN_SCORE, validate_score

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Aggregate:
    """파생값 (저장하지 않음). 평점이 없으면 average=0.0, count=0"""

    average: float = 0.0
    count: int = 0

    @property
    def is_rated(self) -> bool:
        return self.count > 0


ZERO = Aggregate()


def _as_uuid(value) -> Optional[uuid.UUID]:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        return None


def _to_aggregate(avg: Any, count: Any) -> Aggregate:
    count = int(count or 0)
    if not count:
        return ZERO
    return Aggregate(average=float(avg), count=count)


# -----------------------------
# 조회
# -----------------------------
def aggregate_for(review_id) -> Aggregate:
    """리뷰 하나의 평균/개수. 매 호출마다 다시 계산"""
    review_id = _as_uuid(review_id)
    if review_id is None:
        return ZERO
    agg = Rating.objects.filter(review_id=review_id).aggregate(avg=Avg("score"), count=Count("id"))
    return _to_aggregate(agg["avg"], agg["count"])


def aggregates_for(review_ids: Iterable) -> Dict[Any, Aggregate]:
    """
    배치 버전 (쿼리 1회).
    입력의 모든 id 에 대해 항목을 돌려준다 (평점 없으면 ZERO).
    """
    requested = set(review_ids)
    result: Dict[Any, Aggregate] = {rid: ZERO for rid in requested}
    # 입력 키 그대로 돌려주기 위해 UUID → 원래 키 매핑
    keys_by_uuid: Dict[uuid.UUID, list] = {}
    for rid in requested:
        as_uuid = _as_uuid(rid)
        if as_uuid is not None:
            keys_by_uuid.setdefault(as_uuid, []).append(rid)
    if not keys_by_uuid:
        return result

    rows = (
        Rating.objects.filter(review_id__in=list(keys_by_uuid))
        .values("review_id")
        .annotate(avg=Avg("score"), count=Count("id"))
        .order_by()
    )
    for row in rows:
        for key in keys_by_uuid.get(row["review_id"], ()):
            result[key] = _to_aggregate(row["avg"], row["count"])
    return result


def user_rating_for(review_id, rater: Optional[Identity]) -> Optional[int]:
    """rater 본인의 점수 (별점 컨트롤 pre-fill 용). 익명/미평가면 None"""
    review_id = _as_uuid(review_id)
    if rater is None or review_id is None:
        return None
    return (
        Rating.objects.filter(review_id=review_id, rater_id=rater.id)
        .values_list("score", flat=True)
        .first()
    )


def rating_distribution(review_id) -> Dict[int, int]:
    """별점 분포 {1: n1, ..., 5: n5}. 없는 점수는 0"""
    dist = {score: 0 for score in range(MIN_SCORE, MAX_SCORE + 1)}
    review_id = _as_uuid(review_id)
    if review_id is None:
        return dist
    rows = (
        Rating.objects.filter(review_id=review_id)
        .values("score")
        .annotate(n=Count("id"))
        .order_by()
    )
    for row in rows:
        dist[row["score"]] = row["n"]
    return dist


# -----------------------------
# 쓰기
# -----------------------------
def submit_rating(review_id, rater: Optional[Identity], score: Any) -> Aggregate:
    """
    평점 제출 (upsert).
    - score 1~5 정수 아니면 InvalidArgument
    - rater 없으면 Unauthorized
    - review 없으면 NotFound
    같은 rater 의 재제출은 score/updated_at 만 갱신 (created_at 유지).
    다른 rater 의 행은 서로 독립이라 덮어쓰지 않는다.
    """
    score = validate_score(score)
    if rater is None:
        logger.warning("anonymous rating rejected for review %s", review_id)
        raise Unauthorized()
    review_id = _as_uuid(review_id)
    if review_id is None or not Review.objects.filter(pk=review_id).exists():
        raise NotFound(f"review {review_id} not found")

    now = timezone.now()
    row = Rating(review_id=review_id, rater_id=rater.id, score=score, created_at=now, updated_at=now)
    try:
        with transaction.atomic():
            Rating.objects.bulk_create(
                [row],
                update_conflicts=True,
                unique_fields=["review", "rater"],
                update_fields=["score", "updated_at"],
            )
    except IntegrityError:
        # 사전 확인과 insert 사이에 리뷰가 삭제된 경우 (FK 위반)
        logger.info("rating rejected: review %s vanished before write", review_id)
        raise NotFound(f"review {review_id} not found")

    logger.info("rating submitted: review=%s rater=%s score=%s", review_id, rater.id, score)
    return aggregate_for(review_id)


__all__ = [
    "Aggregate",
    "ZERO",
    "aggregate_for",
    "aggregates_for",
    "user_rating_for",
    "rating_distribution",
    "submit_rating",
]
