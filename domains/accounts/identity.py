# domains/accounts/identity.py
"""
Identity Provider 경계

스토어(domains.reviews)는 사용자 모델을 직접 보지 않고
이 모듈이 넘겨주는 Identity(또는 None=익명)만 사용한다.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional
from uuid import UUID

from rest_framework.exceptions import ValidationError
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    id: UUID
    display_name: str
    is_staff: bool = False


def identity_from_user(user: Any) -> Optional[Identity]:
    """Django user(또는 AnonymousUser/None) → Identity | None"""
    if user is None or not getattr(user, "is_authenticated", False):
        return None
    if not getattr(user, "is_active", True):
        return None
    display = getattr(user, "display_name", None) or str(user)
    return Identity(
        id=user.pk,
        display_name=display,
        is_staff=bool(getattr(user, "is_staff", False)),
    )


def current_user(request) -> Optional[Identity]:
    """현재 세션의 사용자. 익명이면 None"""
    return identity_from_user(getattr(request, "user", None))


def sign_out(refresh_token: str) -> None:
    """
    refresh 토큰을 블랙리스트에 올려 세션을 종료한다.
    잘못된/만료된 토큰은 ValidationError (400)
    """
    if not refresh_token:
        raise ValidationError({"refresh": ["This field is required."]})
    try:
        RefreshToken(refresh_token).blacklist()
    except TokenError as e:
        logger.info("sign-out rejected: %s", e)
        raise ValidationError({"refresh": [str(e)]})


__all__ = ["Identity", "identity_from_user", "current_user", "sign_out"]
