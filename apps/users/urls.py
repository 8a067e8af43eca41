"""URL declarations for the users app."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import ProfileView

urlpatterns = [
    path("profile/", ProfileView.as_view(), name="user-profile"),
]
