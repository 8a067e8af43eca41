"""Admin registrations for properties domain."""

from __future__ import annotations

from django.contrib import admin

from .models import Property, PropertyImage


class PropertyImageInline(admin.TabularInline):
    model = PropertyImage
    extra = 0
    fields = ("content_type", "position", "uploaded_at")
    readonly_fields = ("uploaded_at",)


@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "type",
        "location",
        "price",
        "discount",
        "status",
        "average_rating",
        "total_reviews",
        "created_at",
    )
    list_filter = ("status", "type")
    search_fields = ("name", "location", "email")
    readonly_fields = ("average_rating", "total_reviews", "created_at", "updated_at")
    inlines = [PropertyImageInline]
