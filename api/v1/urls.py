from django.urls import include, path

from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

urlpatterns = [
    # --- Auth ---
    path("auth/", include(("domains.accounts.urls_auth", "accounts_auth"))),
    # --- Reviews ---
    path("reviews/", include(("domains.reviews.urls", "reviews"))),
    # 추천/최신/장르 (slug 경로와 겹치지 않게 reviews/ 밖에 둔다)
    path("", include(("domains.reviews.urls_browse", "reviews_browse"))),
    # --- API Docs ---
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    path("docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
]
