"""Serializers for the properties domain."""

from __future__ import annotations

import json

from django.db import transaction  # type: ignore
from django.db.models import Prefetch  # type: ignore
from django.urls import reverse  # type: ignore
from rest_framework import serializers  # type: ignore

from apps.bookings.serializers import StayDateField
from apps.reviews.serializers import ReviewSerializer
from shared.domain.exceptions import DomainValidationError
from shared.infrastructure.conf import rentals_setting

from .domain.entities import Amenity, AvailabilityWindow
from .domain.entities import Property as PropertyEntity
from .models import Property, PropertyImage

# Image listings only need positions; the bytes are served by the images endpoint.
IMAGES_WITHOUT_DATA = Prefetch("images", queryset=PropertyImage.objects.defer("data"))


class AmenityListField(serializers.Field):
    """
    Amenity names as a list

    Multipart forms send the list either as repeated keys or as one JSON
    encoded string; both are accepted.
    """

    default_error_messages = {
        "invalid": "Amenities must be a list of names or a JSON encoded list.",
    }

    def get_value(self, dictionary):  # type: ignore
        if hasattr(dictionary, "getlist") and self.field_name in dictionary:
            values = dictionary.getlist(self.field_name)
            return values[0] if len(values) == 1 else values
        return super().get_value(dictionary)

    def to_internal_value(self, data):  # type: ignore
        if isinstance(data, str):
            text = data.strip()
            if text.startswith("["):
                try:
                    data = json.loads(text)
                except ValueError:
                    self.fail("invalid")
            else:
                data = [part.strip() for part in text.split(",") if part.strip()]
        if not isinstance(data, (list, tuple)):
            self.fail("invalid")
        try:
            return [amenity.value for amenity in Amenity.parse_many(data)]
        except DomainValidationError as exc:
            raise serializers.ValidationError(exc.message) from exc

    def to_representation(self, value):  # type: ignore
        return list(value or [])


class PropertyImageUrlsField(serializers.Field):
    """Read-only list of URLs of a listing's images, in display order."""

    def __init__(self, **kwargs):
        kwargs["read_only"] = True
        kwargs.setdefault("source", "*")
        super().__init__(**kwargs)

    def to_representation(self, obj: Property):  # type: ignore
        request = self.context.get("request")
        urls = []
        for index, _image in enumerate(obj.images.all()):
            url = reverse("property-images", kwargs={"pk": str(obj.pk), "index": index})
            urls.append(request.build_absolute_uri(url) if request else url)
        return urls


class PropertySummarySerializer(serializers.ModelSerializer):
    """Compact listing shape used in profiles and favorites."""

    averageRating = serializers.FloatField(source="average_rating", read_only=True)
    totalReviews = serializers.IntegerField(source="total_reviews", read_only=True)
    images = PropertyImageUrlsField()

    class Meta:
        model = Property
        fields = [
            "id",
            "name",
            "type",
            "price",
            "location",
            "discount",
            "status",
            "averageRating",
            "totalReviews",
            "images",
        ]
        read_only_fields = fields


class PropertySerializer(serializers.ModelSerializer):
    """Full listing including reviews and the rating aggregate."""

    owner = serializers.UUIDField(source="owner_id", read_only=True)
    maxGuests = serializers.IntegerField(source="max_guests", read_only=True)
    smokingAllowed = serializers.BooleanField(source="smoking_allowed", read_only=True)
    petsAllowed = serializers.BooleanField(source="pets_allowed", read_only=True)
    eventsAllowed = serializers.BooleanField(source="events_allowed", read_only=True)
    cookingAllowed = serializers.BooleanField(source="cooking_allowed", read_only=True)
    availableFrom = serializers.DateField(source="available_from", read_only=True)
    availableUntil = serializers.DateField(source="available_until", read_only=True)
    minimumStay = serializers.IntegerField(source="minimum_stay", read_only=True)
    averageRating = serializers.FloatField(source="average_rating", read_only=True)
    totalReviews = serializers.IntegerField(source="total_reviews", read_only=True)
    reviews = ReviewSerializer(many=True, read_only=True)
    images = PropertyImageUrlsField()
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Property
        fields = [
            "id",
            "owner",
            "name",
            "type",
            "price",
            "location",
            "latitude",
            "longitude",
            "description",
            "bedrooms",
            "bathrooms",
            "maxGuests",
            "area",
            "amenities",
            "smokingAllowed",
            "petsAllowed",
            "eventsAllowed",
            "cookingAllowed",
            "availableFrom",
            "availableUntil",
            "minimumStay",
            "email",
            "phone",
            "discount",
            "status",
            "averageRating",
            "totalReviews",
            "reviews",
            "images",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields


class PropertyWriteSerializer(serializers.ModelSerializer):
    """
    Create and update listings from multipart or JSON input

    ``images`` sets the image list on create; on update, a single ``image``
    (or an ``images`` list) replaces every stored image. The values that
    the property catalog constrains (price, discount, status, amenities,
    availability window) are validated by building the domain aggregate.
    """

    amenities = AmenityListField(required=False)
    images = serializers.ListField(
        child=serializers.FileField(), required=False, write_only=True, allow_empty=True
    )
    image = serializers.FileField(required=False, write_only=True)
    maxGuests = serializers.IntegerField(source="max_guests", required=False, min_value=1)
    smokingAllowed = serializers.BooleanField(source="smoking_allowed", required=False)
    petsAllowed = serializers.BooleanField(source="pets_allowed", required=False)
    eventsAllowed = serializers.BooleanField(source="events_allowed", required=False)
    cookingAllowed = serializers.BooleanField(source="cooking_allowed", required=False)
    availableFrom = serializers.DateField(source="available_from", required=False, allow_null=True)
    availableUntil = serializers.DateField(source="available_until", required=False, allow_null=True)
    minimumStay = serializers.IntegerField(source="minimum_stay", required=False)

    class Meta:
        model = Property
        fields = [
            "name",
            "type",
            "price",
            "location",
            "latitude",
            "longitude",
            "description",
            "bedrooms",
            "bathrooms",
            "maxGuests",
            "area",
            "amenities",
            "smokingAllowed",
            "petsAllowed",
            "eventsAllowed",
            "cookingAllowed",
            "availableFrom",
            "availableUntil",
            "minimumStay",
            "email",
            "phone",
            "discount",
            "status",
            "images",
            "image",
        ]
        # Range checks are left to the domain so every entry point agrees.
        extra_kwargs = {
            "price": {"validators": []},
            "discount": {"validators": []},
        }

    def _validate_upload(self, upload):
        allowed = rentals_setting("ALLOWED_IMAGE_CONTENT_TYPES")
        content_type = getattr(upload, "content_type", None)
        if content_type not in allowed:
            raise serializers.ValidationError(
                f"Unsupported image type {content_type!r}. Allowed: {', '.join(allowed)}."
            )
        return upload

    def validate_images(self, value):  # type: ignore
        limit = rentals_setting("MAX_PROPERTY_IMAGES")
        if len(value) > limit:
            raise serializers.ValidationError(f"At most {limit} images can be uploaded.")
        return [self._validate_upload(upload) for upload in value]

    def validate_image(self, value):  # type: ignore
        return self._validate_upload(value)

    def validate_minimumStay(self, value):  # type: ignore
        # Domain rejects it as well; a field error gives a clearer message.
        if value < 1:
            raise serializers.ValidationError("Minimum stay must be at least 1 day")
        return value

    def validate(self, attrs):  # type: ignore
        def current(name, default=None):
            if name in attrs:
                return attrs[name]
            if self.instance is not None:
                return getattr(self.instance, name)
            return default

        try:
            PropertyEntity(
                name=current("name", ""),
                type=current("type", ""),
                location=current("location", ""),
                price=current("price", 0),
                discount=current("discount", 0),
                status=current("status", Property.Status.AVAILABLE),
                amenities=current("amenities", []) or [],
                availability=AvailabilityWindow(
                    start_date=current("available_from"),
                    end_date=current("available_until"),
                    minimum_stay=current("minimum_stay", 30),
                ),
            )
        except DomainValidationError as exc:
            raise serializers.ValidationError(exc.message) from exc
        return attrs

    def _store_images(self, instance: Property, uploads) -> None:
        PropertyImage.objects.bulk_create(
            [
                PropertyImage(
                    property=instance,
                    data=upload.read(),
                    content_type=upload.content_type,
                    position=position,
                )
                for position, upload in enumerate(uploads)
            ]
        )

    @transaction.atomic
    def create(self, validated_data):  # type: ignore
        uploads = validated_data.pop("images", [])
        single = validated_data.pop("image", None)
        if single is not None:
            uploads = [*uploads, single]
        if len(uploads) > rentals_setting("MAX_PROPERTY_IMAGES"):
            raise serializers.ValidationError({"images": "Too many images."})

        instance = super().create(validated_data)
        self._store_images(instance, uploads)
        return instance

    @transaction.atomic
    def update(self, instance, validated_data):  # type: ignore
        uploads = validated_data.pop("images", None)
        single = validated_data.pop("image", None)
        if single is not None:
            uploads = [single]

        instance = super().update(instance, validated_data)
        if uploads is not None:
            instance.images.all().delete()
            self._store_images(instance, uploads)
        return instance


class AvailabilityQuerySerializer(serializers.Serializer):
    """Query string of ``GET /properties/{id}/availability/``."""

    checkIn = StayDateField()
    checkOut = StayDateField()
