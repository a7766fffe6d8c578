# domains/accounts/models.py
from __future__ import annotations

import uuid
from django.db import models
from django.contrib.auth.models import AbstractUser


class User(AbstractUser):
    """
    저널 사용자
    - PK: UUID (db_column='user_id')
    - email: unique (로그인 식별자)
    - nickname: 화면 표시용 이름 (없으면 email 앞부분)
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        db_column="user_id",
    )
    email = models.EmailField(max_length=254, unique=True)
    nickname = models.CharField(max_length=150, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "users"
        indexes = [
            models.Index(fields=["email"], name="users_email_idx"),
        ]

    @property
    def display_name(self) -> str:
        if self.nickname:
            return self.nickname
        return (self.email or "").split("@")[0] or self.username

    def __str__(self) -> str:
        # email 우선, 없으면 username
        return self.email or self.username
