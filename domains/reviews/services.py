# domains/reviews/services.py
"""
Review Repository

slug 로 식별되는 Review CRUD.
- slug 유일성은 DB unique 제약이 최종 보장 (앱 레벨 사전 체크는 메시지용)
- 쓰기는 모두 identity 필요 (None → Unauthorized)
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional

from django.conf import settings
from django.db import IntegrityError, transaction

from domains.accounts.identity import Identity

from .exceptions import Conflict, Forbidden, InvalidArgument, NotFound, Unauthorized
from .models import Review
from .slugs import generate_slug
from .validators import validate_review_fields

if TYPE_CHECKING:
    from .services_query import ReviewFilters

logger = logging.getLogger(__name__)


# -----------------------------
# 내부 유틸
# -----------------------------
def _require_identity(identity: Optional[Identity], action: str) -> Identity:
    if identity is None:
        logger.warning("anonymous %s rejected", action)
        raise Unauthorized()
    return identity


def _check_ownership(identity: Identity, review: Review) -> None:
    """
    REVIEWS_ENFORCE_OWNERSHIP=True 일 때만 owner 검사.
    owner 가 없는 레거시 행과 staff 는 통과.
    """
    if not getattr(settings, "REVIEWS_ENFORCE_OWNERSHIP", False):
        return
    if identity.is_staff or review.owner_id is None:
        return
    if review.owner_id != identity.id:
        logger.warning("review %s: non-owner %s rejected", review.slug, identity.id)
        raise Forbidden()


def _get_or_404(slug: str, *, for_update: bool = False) -> Review:
    qs = Review.objects.all()
    if for_update:
        qs = qs.select_for_update()
    review = qs.filter(slug=slug).first() if isinstance(slug, str) else None
    if review is None:
        raise NotFound(f"review {slug!r} not found")
    return review


# -----------------------------
# 조회
# -----------------------------
def get_review(slug: str) -> Optional[Review]:
    """slug 정확 일치(대소문자 구분) 조회. 없으면 None"""
    if not isinstance(slug, str) or not slug:
        return None
    return Review.objects.select_related("owner").filter(slug=slug).first()


def list_reviews(filters: Optional["ReviewFilters"] = None) -> List[Review]:
    """
    predicate(ReviewFilters)를 만족하는 리뷰 전체. 순서 없음.
    DB 로 표현 가능한 조건은 쿼리로, 나머지는 파이썬에서 거른다.
    """
    if filters is None:
        return list(Review.objects.select_related("owner"))
    qs = Review.objects.select_related("owner").filter(filters.to_q())
    return [r for r in qs if filters.matches(r)]


# -----------------------------
# 쓰기
# -----------------------------
@transaction.atomic
def create_review(identity: Optional[Identity], data: Mapping[str, Any]) -> Review:
    """
    새 리뷰 생성.
    - 필수: title, body, kind, date_watched
    - slug 는 제목에서 파생, 이미 있으면 Conflict (자동 suffix 없음)
    """
    identity = _require_identity(identity, "create")
    fields = validate_review_fields(data, partial=False)

    slug = generate_slug(fields["title"])
    if not slug:
        raise InvalidArgument({"title": ["Title must contain at least one letter or digit."]})

    if Review.objects.filter(slug=slug).exists():
        logger.info("create rejected: slug %r already exists", slug)
        raise Conflict(f"a review with slug {slug!r} already exists")

    try:
        # 동시 생성 경합은 unique 제약이 막는다
        with transaction.atomic():
            review = Review.objects.create(slug=slug, owner_id=identity.id, **fields)
    except IntegrityError:
        logger.info("create rejected by unique constraint: slug %r", slug)
        raise Conflict(f"a review with slug {slug!r} already exists")

    logger.info("review created: %s by %s", slug, identity.id)
    return review


@transaction.atomic
def update_review(
    identity: Optional[Identity],
    slug: str,
    data: Mapping[str, Any],
    *,
    partial: bool = False,
) -> Review:
    """
    리뷰 수정.
    - partial=False: 전체 필드 교체 (빠진 선택 필드는 기본값)
    - partial=True : 넘어온 필드만 변경
    - slug 는 제목이 바뀌어도 절대 변경하지 않음
    """
    identity = _require_identity(identity, "update")
    review = _get_or_404(slug, for_update=True)
    _check_ownership(identity, review)

    fields: Dict[str, Any] = validate_review_fields(data, partial=partial)
    for name, value in fields.items():
        setattr(review, name, value)
    review.save(update_fields=[*fields.keys(), "updated_at"])

    logger.info("review updated: %s by %s (%s)", review.slug, identity.id, ",".join(sorted(fields)))
    return review


@transaction.atomic
def delete_review(identity: Optional[Identity], slug: str) -> None:
    """
    리뷰 삭제 + 평점 cascade (한 트랜잭션, 읽는 쪽은 중간 상태를 보지 못함)
    """
    identity = _require_identity(identity, "delete")
    review = _get_or_404(slug, for_update=True)
    _check_ownership(identity, review)

    # FK on_delete=CASCADE → Rating 도 같은 트랜잭션에서 삭제
    _, deleted = review.delete()
    logger.info(
        "review deleted: %s by %s (ratings removed: %s)",
        slug,
        identity.id,
        deleted.get("reviews.Rating", 0),
    )


__all__ = [
    "get_review",
    "list_reviews",
    "create_review",
    "update_review",
    "delete_review",
]
