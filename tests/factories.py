# tests/factories.py
import datetime
import itertools
from uuid import uuid4

from django.contrib.auth import get_user_model

from domains.reviews.models import Kind, Rating, Review
from domains.reviews.slugs import generate_slug

_email_seq = itertools.count(1)
_title_seq = itertools.count(1)
User = get_user_model()


def unique_email(prefix="user", domain="example.com"):
    return f"{prefix}{next(_email_seq)}@{domain}"


def create_user(email=None, password="Test1234!A", **extra):
    """username 은 이메일 앞부분 + suffix 로 자동 세팅"""
    if email is None:
        email = unique_email()
    extra.setdefault("username", f"{email.split('@')[0]}_{uuid4().hex[:6]}")
    return User.objects.create_user(email=email, password=password, **extra)


def create_review(
    title=None,
    kind=Kind.MOVIE,
    body="Watched it again.",
    date_watched=None,
    owner=None,
    **extra,
):
    """
    저장소 검증을 거치지 않고 바로 행을 만든다 (정렬/필터 테스트용).
    slug 는 실제 규칙과 같은 generate_slug 로 파생.
    """
    if title is None:
        title = f"Untitled {next(_title_seq)}"
    if date_watched is None:
        date_watched = datetime.date(2024, 1, 1)
    return Review.objects.create(
        slug=extra.pop("slug", None) or generate_slug(title),
        title=title,
        kind=kind,
        body=body,
        date_watched=date_watched,
        owner=owner,
        **extra,
    )


def create_rating(review, rater, score):
    return Rating.objects.create(review=review, rater=rater, score=score)
