"""Admin registration for reviews."""

from __future__ import annotations

from django.contrib import admin

from .models import Review


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ("property", "user", "user_name", "rating", "helpful_count", "created_at")
    list_filter = ("rating",)
    search_fields = ("property__name", "user__email", "comment")
    # The rating aggregate on the property is maintained by the API only.
    readonly_fields = ("property", "user", "rating", "helpful_count", "created_at")
