# domains/reviews/validators.py
from __future__ import annotations

import datetime
from typing import Any, Dict, List, Mapping

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import URLValidator
from django.utils.dateparse import parse_date

from .exceptions import InvalidArgument
from .models import Genre, Kind

REQUIRED_FIELDS = ("title", "body", "kind", "date_watched")
OPTIONAL_FIELDS = (
    "poster_url",
    "short_summary",
    "tags",
    "genres",
    "gallery_images",
    "featured",
)
REVIEW_FIELDS = REQUIRED_FIELDS + OPTIONAL_FIELDS

# 전체 수정(full update) 때 빠진 선택 필드는 이 값으로 초기화
OPTIONAL_DEFAULTS: Dict[str, Any] = {
    "poster_url": None,
    "short_summary": None,
    "tags": [],
    "genres": [],
    "gallery_images": [],
    "featured": False,
}

MIN_SCORE = 1
MAX_SCORE = 5

_url_validator = URLValidator(schemes=["http", "https"])


class _FieldError(Exception):
    pass


# -----------------------------
# 필드별 정규화
# -----------------------------
def _required_text(value: Any, *, max_length: int | None = None) -> str:
    if not isinstance(value, str) or not value.strip():
        raise _FieldError("This field may not be blank.")
    value = value.strip()
    if max_length is not None and len(value) > max_length:
        raise _FieldError(f"Ensure this field has no more than {max_length} characters.")
    return value


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise _FieldError("Must be a string.")
    return value.strip() or None


def _url(value: Any) -> str:
    if not isinstance(value, str):
        raise _FieldError("Enter a valid URL.")
    value = value.strip()
    try:
        _url_validator(value)
    except DjangoValidationError:
        raise _FieldError(f"Enter a valid URL: {value!r}")
    return value


def _kind(value: Any) -> str:
    if value not in Kind.values:
        raise _FieldError(f"Must be one of: {', '.join(Kind.values)}.")
    return value


def _date(value: Any) -> datetime.date:
    if isinstance(value, datetime.datetime):
        raise _FieldError("Must be a calendar date without a time component.")
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str):
        try:
            parsed = parse_date(value.strip())
        except ValueError:
            parsed = None
        if parsed is not None:
            return parsed
    raise _FieldError("Date has wrong format. Use YYYY-MM-DD.")


def _string_items(value: Any) -> List[str]:
    """None/빈값 → [], "a, b" → ["a", "b"], 리스트는 공백 제거 후 빈 항목 제외"""
    if value is None or value == "":
        return []
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, (list, tuple, set, frozenset)):
        raise _FieldError("Must be a list of strings.")
    items = []
    for item in value:
        if not isinstance(item, str):
            raise _FieldError("Must be a list of strings.")
        item = item.strip()
        if item:
            items.append(item)
    return items


def _tags(value: Any) -> List[str]:
    # 집합 의미: 중복 제거 + 정렬해서 저장
    return sorted(set(_string_items(value)))


def _genres(value: Any) -> List[str]:
    items = [g.lower() for g in _string_items(value)]
    unknown = sorted(set(items) - set(Genre.values))
    if unknown:
        raise _FieldError(f"Unknown genre(s): {', '.join(unknown)}.")
    return sorted(set(items))


def _gallery(value: Any) -> List[str]:
    # 순서 유지 (표시 순서)
    items = _string_items(value)
    limit = int(getattr(settings, "REVIEWS_GALLERY_MAX", 10))
    if len(items) > limit:
        raise _FieldError(f"At most {limit} gallery images are allowed.")
    return [_url(u) for u in items]


def _featured(value: Any) -> bool:
    if not isinstance(value, bool):
        raise _FieldError("Must be a boolean.")
    return value


_NORMALIZERS = {
    "title": lambda v: _required_text(v, max_length=255),
    "body": _required_text,
    "kind": _kind,
    "date_watched": _date,
    "poster_url": lambda v: None if _optional_text(v) is None else _url(v),
    "short_summary": _optional_text,
    "tags": _tags,
    "genres": _genres,
    "gallery_images": _gallery,
    "featured": _featured,
}


# -----------------------------
# 공개 API
# -----------------------------
def validate_review_fields(data: Mapping[str, Any], *, partial: bool = False) -> Dict[str, Any]:
    """
    리뷰 입력을 고정 스키마로 검증/정규화한다.
    - partial=False: 필수 필드(title/body/kind/date_watched) 모두 필요,
      빠진 선택 필드는 기본값으로 채움 (전체 수정 의미)
    - partial=True : 넘어온 필드만 검증
    - 알 수 없는 키(slug 포함)는 무시
    실패 시 필드별 메시지를 모아 InvalidArgument 로 던진다.
    """
    if not isinstance(data, Mapping):
        raise InvalidArgument({"non_field_errors": ["Expected an object of review fields."]})

    errors: Dict[str, List[str]] = {}
    cleaned: Dict[str, Any] = {}

    if not partial:
        for name in REQUIRED_FIELDS:
            if data.get(name) in (None, ""):
                errors[name] = ["This field is required."]

    for name in REVIEW_FIELDS:
        if name not in data or name in errors:
            continue
        try:
            cleaned[name] = _NORMALIZERS[name](data[name])
        except _FieldError as e:
            errors[name] = [str(e)]

    if errors:
        raise InvalidArgument(errors)

    if not partial:
        for name, default in OPTIONAL_DEFAULTS.items():
            cleaned.setdefault(name, list(default) if isinstance(default, list) else default)

    return cleaned


def validate_score(score: Any) -> int:
    """1~5 정수만 허용 (bool 은 int 하위형이라 별도 차단)"""
    if isinstance(score, bool) or not isinstance(score, int):
        raise InvalidArgument({"score": ["Score must be an integer."]})
    if not (MIN_SCORE <= score <= MAX_SCORE):
        raise InvalidArgument({"score": [f"Score must be between {MIN_SCORE} and {MAX_SCORE}."]})
    return score


__all__ = [
    "REQUIRED_FIELDS",
    "OPTIONAL_FIELDS",
    "REVIEW_FIELDS",
    "validate_review_fields",
    "validate_score",
]
