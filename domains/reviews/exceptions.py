# domains/reviews/exceptions.py
"""
리뷰/평점 스토어 에러 분류

모든 에러는 DRF APIException 하위 클래스라서 뷰에서 따로 잡지 않아도
프레임워크가 상태 코드와 detail 로 렌더링한다.
어떤 에러도 재시도 대상이 아니다 (호출자가 입력을 고쳐야 함).
"""
from __future__ import annotations

from rest_framework import exceptions, status


class ReviewStoreError(exceptions.APIException):
    """스토어 에러 공통 베이스"""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "review store error"
    default_code = "review_store_error"


class InvalidArgument(ReviewStoreError, exceptions.ValidationError):
    """
    잘못된 입력 (빈 제목, 범위 밖 점수, 잘못된 날짜/enum 등)
    detail 은 필드별 dict 로 넘기는 것을 권장: {"title": ["..."]}
    """

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "invalid argument"
    default_code = "invalid"


class Unauthorized(ReviewStoreError, exceptions.NotAuthenticated):
    """익명(identity 없음)으로 쓰기 시도"""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "sign-in required for this operation"
    default_code = "not_authenticated"


class Forbidden(ReviewStoreError, exceptions.PermissionDenied):
    """owner 강제 모드에서 다른 사용자의 리뷰를 수정/삭제하려 할 때"""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "only the owner may modify this review"
    default_code = "permission_denied"


class NotFound(ReviewStoreError, exceptions.NotFound):
    """slug 또는 review id 가 존재하지 않음"""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "review not found"
    default_code = "not_found"


class Conflict(ReviewStoreError):
    """생성 시 slug 충돌 (자동 suffix 없음, 호출자가 제목을 바꿔야 함)"""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "a review with this slug already exists"
    default_code = "conflict"


__all__ = [
    "ReviewStoreError",
    "InvalidArgument",
    "Unauthorized",
    "Forbidden",
    "NotFound",
    "Conflict",
]
