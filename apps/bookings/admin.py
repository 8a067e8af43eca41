"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "property_id",
        "user_id",
        "status",
        "check_in",
        "check_out",
        "created_at",
    )
    list_filter = ("status", "check_in", "check_out")
    search_fields = ("id", "message")
    readonly_fields = ("id", "property", "user", "decided_at", "created_at", "updated_at")
