from django.urls import path

from rest_framework_simplejwt.views import TokenRefreshView

from .jwt import EmailTokenObtainPairView
from .views import LogoutView, MeView

app_name = "accounts_auth"

urlpatterns = [
    # 로그인 (email + password)
    path("token/", EmailTokenObtainPairView.as_view(), name="token"),
    # 토큰 갱신
    path("token/refresh/", TokenRefreshView.as_view(), name="token-refresh"),
    # 현재 사용자
    path("me/", MeView.as_view(), name="me"),
    # 로그아웃
    path("logout/", LogoutView.as_view(), name="logout"),
]
