# domains/accounts/jwt.py
import logging

from django.contrib.auth import get_user_model
from django.contrib.auth.hashers import check_password

from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer
from rest_framework_simplejwt.views import TokenObtainPairView

from .identity import identity_from_user

User = get_user_model()
logger = logging.getLogger(__name__)


class EmailTokenObtainPairSerializer(TokenObtainPairSerializer):
    # 입력 필드로 email 사용 (폼/스키마용)
    username_field = "email"

    def validate(self, attrs):
        email = (attrs.get("email") or "").strip()
        password = attrs.get("password") or ""

        # 이메일 대소문자 무시 조회
        user = User.objects.filter(email__iexact=email).first()

        if (
            not user
            or not getattr(user, "is_active", True)
            or not check_password(password, user.password)
        ):
            logger.info("token rejected for %r", email)
            raise AuthenticationFailed(
                detail="No active account found with the given credentials",
                code="no_active_account",
            )

        refresh = self.get_token(user)
        identity = identity_from_user(user)
        return {
            "refresh": str(refresh),
            "access": str(refresh.access_token),
            "user": {"id": str(identity.id), "display_name": identity.display_name},
        }


class EmailTokenObtainPairView(TokenObtainPairView):
    """POST /api/v1/auth/token/  {email, password} → access/refresh + 사용자 요약"""

    serializer_class = EmailTokenObtainPairSerializer
