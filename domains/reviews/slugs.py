# domains/reviews/slugs.py
from __future__ import annotations

import re

_NON_SLUG_RUN = re.compile(r"[^a-z0-9]+")


def generate_slug(title: str) -> str:
    """
    제목 → URL 안전 slug 후보 (순수 함수, 유일성 보장 없음)
    예: "The Matrix: Reloaded!!" -> "the-matrix-reloaded"

    - 소문자화 후 [a-z0-9] 밖의 연속 구간을 '-' 하나로 치환
    - 앞뒤 '-' 제거
    - 영숫자가 하나도 없으면 빈 문자열 (저장소에서 거부)
    """
    return _NON_SLUG_RUN.sub("-", (title or "").lower()).strip("-")


__all__ = ["generate_slug"]
