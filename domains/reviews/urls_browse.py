# domains/reviews/urls_browse.py
from django.urls import path

from .views_reviews import FeaturedReviewsAPI, GenreListAPI, LatestReviewsAPI

app_name = "reviews_browse"

urlpatterns = [
    path("featured/", FeaturedReviewsAPI.as_view(), name="featured"),
    path("latest/", LatestReviewsAPI.as_view(), name="latest"),
    path("genres/", GenreListAPI.as_view(), name="genres"),
]
