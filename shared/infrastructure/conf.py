"""Access to the ``RENTALS`` settings block.

Policy points that the domain leaves open (who may moderate bookings,
whether booking creation is serialized per property, image limits) are
configured here instead of being hard-coded in views.
"""

from __future__ import annotations

from typing import Any

from django.conf import settings  # type: ignore
from django.utils.module_loading import import_string  # type: ignore

DEFAULTS: dict[str, Any] = {
    "BOOKING_ADMIN_PERMISSION_CLASSES": ["rest_framework.permissions.IsAuthenticated"],
    "SERIALIZE_BOOKING_CREATION": True,
    "MAX_PROPERTY_IMAGES": 5,
    "ALLOWED_IMAGE_CONTENT_TYPES": ["image/png", "image/jpeg", "image/jpg", "image/webp"],
}


def rentals_setting(name: str) -> Any:
    if name not in DEFAULTS:
        raise KeyError(f"Unknown RENTALS setting: {name}")
    overrides = getattr(settings, "RENTALS", {}) or {}
    return overrides.get(name, DEFAULTS[name])


def permission_classes_setting(name: str) -> list[type]:
    """Resolve a dotted-path list setting into permission classes."""
    return [import_string(path) for path in rentals_setting(name)]
