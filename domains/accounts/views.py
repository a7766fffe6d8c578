# domains/accounts/views.py
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import permissions, status
from rest_framework.exceptions import NotAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .identity import current_user, sign_out
from .serializers import IdentitySerializer, LogoutSerializer


class MeView(APIView):
    """GET /api/v1/auth/me/  현재 사용자 (익명이면 401)"""

    permission_classes = [permissions.AllowAny]

    @extend_schema(operation_id="GetMe", responses={200: IdentitySerializer}, tags=["auth"])
    def get(self, request):
        identity = current_user(request)
        if identity is None:
            raise NotAuthenticated()
        return Response(IdentitySerializer(identity).data)


class LogoutView(APIView):
    """POST /api/v1/auth/logout/  {refresh} 블랙리스트 등록"""

    permission_classes = [permissions.AllowAny]

    @extend_schema(
        operation_id="Logout",
        request=LogoutSerializer,
        responses={204: OpenApiResponse(description="로그아웃 완료")},
        tags=["auth"],
    )
    def post(self, request):
        ser = LogoutSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        sign_out(ser.validated_data["refresh"])
        return Response(status=status.HTTP_204_NO_CONTENT)
