"""API views for the booking domain."""

from __future__ import annotations

from uuid import UUID

import structlog
from rest_framework import mixins, permissions, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from shared.application.message_bus import message_bus
from shared.infrastructure.conf import permission_classes_setting
from shared.infrastructure.lookups import UUID_LOOKUP_REGEX, parse_lookup_id
from apps.bookings.application.command_handlers import UpdateBookingStatusCommand

from .models import Booking
from .serializers import BookingSerializer, BookingStatusSerializer

logger = structlog.get_logger(__name__)


class BookingViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """
    Booking ledger endpoints

    Bookings are created through ``POST /properties/{id}/book/``. Listing
    every booking and changing a booking's status are moderation actions
    guarded by ``RENTALS['BOOKING_ADMIN_PERMISSION_CLASSES']``.
    """

    queryset = Booking.objects.select_related("property", "user")
    serializer_class = BookingSerializer
    lookup_value_regex = UUID_LOOKUP_REGEX

    def get_permissions(self):  # type: ignore
        if self.action == "mine" or (
            self.action == "list" and self.request.query_params.get("property")
        ):
            return [permissions.IsAuthenticated()]
        return [permission() for permission in permission_classes_setting("BOOKING_ADMIN_PERMISSION_CLASSES")]

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        property_id = self.request.query_params.get("property")
        if self.action == "list" and property_id:
            try:
                return qs.filter(property_id=UUID(property_id)).order_by("check_in", "created_at")
            except ValueError:
                return qs.none()
        return qs.order_by("-created_at")

    @action(detail=False, methods=["get"])
    def mine(self, request):  # type: ignore
        qs = self.get_queryset().filter(user=request.user)
        return Response(self.get_serializer(qs, many=True).data)

    @action(detail=True, methods=["put"], url_path="status")
    def update_status(self, request, pk=None):  # type: ignore
        serializer = BookingStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        booking = message_bus.handle_command(
            UpdateBookingStatusCommand(
                booking_id=parse_lookup_id(pk, "Booking"),
                status=serializer.validated_data["status"],
            )
        )
        logger.info(
            "booking.status_changed",
            booking_id=str(booking.id),
            status=booking.status.value,
            changed_by=str(request.user.pk),
        )

        instance = self.get_queryset().get(pk=booking.id)
        return Response(self.get_serializer(instance).data)
