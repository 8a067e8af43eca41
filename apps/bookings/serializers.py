"""Serializers for the booking domain."""

from __future__ import annotations

from datetime import datetime

from django.core.exceptions import ObjectDoesNotExist  # type: ignore
from django.utils.dateparse import parse_datetime  # type: ignore
from rest_framework import serializers  # type: ignore

from apps.users.serializers import UserSerializer

from .domain.entities import BookingStatus
from .models import Booking


class StayDateField(serializers.DateField):
    """Accepts ``YYYY-MM-DD`` or a full ISO timestamp, truncated to its date."""

    def to_internal_value(self, value):  # type: ignore
        if isinstance(value, str) and "T" in value:
            parsed = parse_datetime(value)
            if parsed is None:
                self.fail("invalid", format="YYYY-MM-DD")
            return parsed.date()
        if isinstance(value, datetime):
            return value.date()
        return super().to_internal_value(value)


class BookingRequestSerializer(serializers.Serializer):
    """Input of ``POST /properties/{id}/book/``."""

    checkIn = StayDateField()
    checkOut = StayDateField()
    message = serializers.CharField(required=False, allow_blank=True, default="")


class BookingPropertySerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()
    location = serializers.CharField()


class BookingSerializer(serializers.ModelSerializer):
    """
    Read shape of a booking

    ``property`` and ``user`` are resolved for display; when the referenced
    row no longer exists they are ``null`` and the stored ids stay available
    as ``propertyId`` and ``userId``.
    """

    property = serializers.SerializerMethodField()
    user = serializers.SerializerMethodField()
    propertyId = serializers.UUIDField(source="property_id", read_only=True)
    userId = serializers.UUIDField(source="user_id", read_only=True)
    checkIn = serializers.DateField(source="check_in", read_only=True)
    checkOut = serializers.DateField(source="check_out", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    decidedAt = serializers.DateTimeField(source="decided_at", read_only=True)

    class Meta:
        model = Booking
        fields = [
            "id",
            "property",
            "propertyId",
            "user",
            "userId",
            "checkIn",
            "checkOut",
            "message",
            "status",
            "createdAt",
            "decidedAt",
        ]
        read_only_fields = fields

    @staticmethod
    def _resolve(obj: Booking, name: str):
        try:
            return getattr(obj, name)
        except ObjectDoesNotExist:
            return None

    def get_property(self, obj: Booking):  # type: ignore
        prop = self._resolve(obj, "property")
        return BookingPropertySerializer(prop).data if prop is not None else None

    def get_user(self, obj: Booking):  # type: ignore
        user = self._resolve(obj, "user")
        return UserSerializer(user).data if user is not None else None


class BookingStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=[
            (BookingStatus.CONFIRMED.value, "Confirmed"),
            (BookingStatus.REJECTED.value, "Rejected"),
        ]
    )
