# domains/reviews/admin.py
from django.contrib import admin

from .models import Rating, Review
from .slugs import generate_slug


class RatingInline(admin.TabularInline):
    model = Rating
    extra = 0
    fields = ("rater", "score", "created_at", "updated_at")
    readonly_fields = ("created_at", "updated_at")


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ("slug", "title", "kind", "date_watched", "featured", "owner", "created_at")
    list_filter = ("kind", "featured", "date_watched")
    search_fields = ("slug", "title", "owner__email")
    ordering = ("-date_watched", "-created_at")
    readonly_fields = ("slug", "created_at", "updated_at")
    inlines = [RatingInline]

    def save_model(self, request, obj, form, change):
        # slug 는 생성 시 제목에서 한 번만 파생
        if not change and not obj.slug:
            obj.slug = generate_slug(obj.title)
        super().save_model(request, obj, form, change)


@admin.register(Rating)
class RatingAdmin(admin.ModelAdmin):
    list_display = ("id", "review", "rater", "score", "updated_at")
    list_filter = ("score",)
    search_fields = ("review__slug", "rater__email")
    ordering = ("-updated_at",)
