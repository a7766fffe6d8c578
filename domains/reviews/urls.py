# domains/reviews/urls.py
from django.urls import path

from .views_ratings import ReviewRatingAPI
from .views_reviews import ReviewDetailAPI, ReviewListCreateAPI

app_name = "reviews"

urlpatterns = [
    # /api/v1/reviews/
    path("", ReviewListCreateAPI.as_view(), name="list"),
    # /api/v1/reviews/<slug>/
    path("<slug:slug>/", ReviewDetailAPI.as_view(), name="detail"),
    # /api/v1/reviews/<slug>/rating/
    path("<slug:slug>/rating/", ReviewRatingAPI.as_view(), name="rating"),
]
