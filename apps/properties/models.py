"""Property models for the rental platform.

Persistence side of the property catalog. A listing stores its pricing,
availability window, house rules, amenity names and the denormalized
rating aggregate maintained by the review aggregator. Images are kept as
raw bytes next to their content type.
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MaxValueValidator, MinValueValidator, RegexValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from .domain.entities import DEFAULT_MINIMUM_STAY, Amenity, PropertyStatus


PHONE_VALIDATOR = RegexValidator(
    regex=r"^\+?[\d\s-]+$",
    message=_("Please enter a valid phone number"),
)

AMENITY_CHOICES = [(amenity.value, amenity.value) for amenity in Amenity]


class Property(models.Model):
    """A listing offered for rent."""

    class Status(models.TextChoices):
        AVAILABLE = PropertyStatus.AVAILABLE.value, _("Available")
        BOOKED = PropertyStatus.BOOKED.value, _("Booked")
        MAINTENANCE = PropertyStatus.MAINTENANCE.value, _("Maintenance")
        INACTIVE = PropertyStatus.INACTIVE.value, _("Inactive")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="properties",
    )
    name = models.CharField(max_length=255)
    type = models.CharField(max_length=100)
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )
    location = models.CharField(max_length=255)
    latitude = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)
    longitude = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)
    description = models.TextField()
    bedrooms = models.PositiveSmallIntegerField(default=1)
    bathrooms = models.PositiveSmallIntegerField(default=1)
    max_guests = models.PositiveSmallIntegerField(default=2)
    area = models.DecimalField(max_digits=8, decimal_places=2, null=True, blank=True)
    amenities = models.JSONField(default=list, blank=True)

    smoking_allowed = models.BooleanField(default=False)
    pets_allowed = models.BooleanField(default=False)
    events_allowed = models.BooleanField(default=False)
    cooking_allowed = models.BooleanField(default=True)

    available_from = models.DateField(null=True, blank=True)
    available_until = models.DateField(null=True, blank=True)
    minimum_stay = models.PositiveSmallIntegerField(
        default=DEFAULT_MINIMUM_STAY,
        validators=[MinValueValidator(1)],
        help_text=_("Minimum stay in days."),
    )

    email = models.EmailField(help_text=_("Contact email"))
    phone = models.CharField(max_length=30, blank=True, validators=[PHONE_VALIDATOR])
    discount = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal("0"),
        validators=[MinValueValidator(Decimal("0")), MaxValueValidator(Decimal("100"))],
    )
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.AVAILABLE)

    average_rating = models.FloatField(default=0)
    total_reviews = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Property")
        verbose_name_plural = _("Properties")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(discount__gte=0) & models.Q(discount__lte=100),
                name="property_discount_range",
            ),
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="property_price_non_negative",
            ),
        ]
        indexes = [
            models.Index(fields=["type", "status"], name="property_type_status_idx"),
            models.Index(fields=["location"], name="property_location_idx"),
        ]

    def __str__(self) -> str:
        return self.name

    @property
    def is_available(self) -> bool:
        return self.status == self.Status.AVAILABLE


class PropertyImage(models.Model):
    """Image bytes attached to a listing, served back with their content type."""

    class ContentType(models.TextChoices):
        PNG = "image/png", "PNG"
        JPEG = "image/jpeg", "JPEG"
        JPG = "image/jpg", "JPG"
        WEBP = "image/webp", "WebP"

    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name="images")
    data = models.BinaryField()
    content_type = models.CharField(max_length=20, choices=ContentType.choices)
    position = models.PositiveSmallIntegerField(default=0)
    uploaded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Property image")
        verbose_name_plural = _("Property images")
        ordering = ["position", "id"]

    def __str__(self) -> str:
        return f"{self.property_id} [{self.position}]"
