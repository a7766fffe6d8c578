# tests/conftest.py
from uuid import uuid4

from django.contrib.auth import get_user_model

import pytest
from rest_framework.test import APIClient

from domains.accounts.identity import identity_from_user

from tests.factories import create_review

User = get_user_model()


# ─────────────────────────────────────────────────────────────
# 클라이언트 & 인증
# ─────────────────────────────────────────────────────────────
@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def user_factory(db):
    def _make(**kw):
        email = kw.pop("email", f"user{uuid4().hex[:6]}@example.com")
        password = kw.pop("password", "Test1234!A")
        kw.setdefault("username", f"{email.split('@')[0]}_{uuid4().hex[:6]}")

        u = User.objects.create_user(email=email, password=password, **kw)
        # 로그인 테스트용 원문 비밀번호 보관
        u.raw_password = password
        return u

    return _make


@pytest.fixture
def user(user_factory):
    """기본 로그인 사용자"""
    return user_factory(email="user@example.com", nickname="Dorothy")


@pytest.fixture
def other_user(user_factory):
    return user_factory(email="other@example.com", nickname="Toto")


@pytest.fixture
def staff_user(user_factory):
    return user_factory(email="staff@example.com", is_staff=True)


@pytest.fixture
def identity(user):
    return identity_from_user(user)


@pytest.fixture
def other_identity(other_user):
    return identity_from_user(other_user)


@pytest.fixture
def staff_identity(staff_user):
    return identity_from_user(staff_user)


def _token_client(u):
    c = APIClient()
    resp = c.post(
        "/api/v1/auth/token/",
        {"email": u.email, "password": u.raw_password},
        format="json",
    )
    assert resp.status_code == 200, getattr(resp, "data", resp.content)
    c.credentials(HTTP_AUTHORIZATION=f"Bearer {resp.data['access']}")
    c.refresh_token = resp.data["refresh"]
    return c


@pytest.fixture
def auth_client(user):
    """SimpleJWT 토큰을 받아 Authorization 헤더 세팅된 APIClient"""
    return _token_client(user)


@pytest.fixture
def other_client(other_user):
    return _token_client(other_user)


# ─────────────────────────────────────────────────────────────
# 리뷰 팩토리
# ─────────────────────────────────────────────────────────────
@pytest.fixture
def review_factory(db):
    """
    사용법: review_factory(title="Heat", genres=["drama"], date_watched=date(2024, 1, 1))
    """
    return create_review


@pytest.fixture
def review(review_factory, user):
    return review_factory(title="The Matrix: Reloaded!!", owner=user, genres=["action", "sci-fi"])
