"""Repository for the Booking aggregate."""

from __future__ import annotations

from uuid import UUID

from django.core.exceptions import ValidationError as DjangoValidationError  # type: ignore

from shared.domain.exceptions import NotFoundError
from shared.domain.value_objects import DateRange
from shared.infrastructure.locking import lock_queryset_if_possible

from .domain.entities import Booking, BookingStatus
from .models import Booking as BookingModel


def booking_to_domain(model: BookingModel) -> Booking:
    return Booking(
        id=model.id,
        property_id=model.property_id,
        user_id=model.user_id,
        dates=DateRange(model.check_in, model.check_out),
        message=model.message,
        status=BookingStatus(model.status),
        decided_at=model.decided_at,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


class BookingRepository:
    """Django ORM backed storage for Booking aggregates."""

    def get(self, booking_id: UUID, *, lock: bool = False) -> Booking:
        queryset = BookingModel.objects.all()
        if lock:
            queryset = lock_queryset_if_possible(queryset)
        try:
            return booking_to_domain(queryset.get(pk=booking_id))
        except (BookingModel.DoesNotExist, ValueError, DjangoValidationError):
            raise NotFoundError(f"Booking {booking_id} not found")

    def save(self, booking: Booking) -> None:
        BookingModel.objects.update_or_create(
            id=booking.id,
            defaults={
                "property_id": booking.property_id,
                "user_id": booking.user_id,
                "check_in": booking.check_in,
                "check_out": booking.check_out,
                "message": booking.message,
                "status": booking.status.value,
                "decided_at": booking.decided_at,
                "created_at": booking.created_at,
            },
        )
