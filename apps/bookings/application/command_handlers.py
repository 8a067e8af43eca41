"""
Booking Command Handlers

These are the use cases for the booking ledger.
They orchestrate domain operations within transactions.

Commands:
- CreateBookingCommand: Ask to stay at a property for a date range
- UpdateBookingStatusCommand: Confirm or reject a pending booking
"""

from dataclasses import dataclass
from datetime import date
from uuid import UUID
import logging

import structlog

from shared.application.uow import DjangoUnitOfWork
from shared.infrastructure.conf import rentals_setting
from apps.bookings.domain.entities import Booking
from apps.bookings.domain.events import BookingConfirmed, BookingRejected, BookingRequested
from apps.bookings.repositories import BookingRepository
from apps.properties.repositories import PropertyRepository

logger = logging.getLogger(__name__)
audit_logger = structlog.get_logger("apps.bookings.events")


# ===== Commands =====

@dataclass
class CreateBookingCommand:
    """Command to request a booking"""
    property_id: UUID
    user_id: UUID
    check_in: date
    check_out: date
    message: str = ''


@dataclass
class UpdateBookingStatusCommand:
    """Command to move a booking out of pending"""
    booking_id: UUID
    status: str


# ===== Command Handlers =====

class CreateBookingHandler:
    """
    Handler for CreateBooking command

    The availability check and the insert run in one transaction. When
    ``RENTALS['SERIALIZE_BOOKING_CREATION']`` is on, the property row is
    locked with SELECT FOR UPDATE so concurrent requests for the same
    property are processed one at a time.

    Overlapping bookings are NOT rejected: availability is decided by the
    property's status and availability window only.
    """

    def __init__(self, booking_repo, property_repo):
        self.booking_repo = booking_repo
        self.property_repo = property_repo

    def handle(self, command: CreateBookingCommand) -> Booking:
        """
        Handle booking creation

        Returns: Created Booking aggregate

        Raises:
            NotFoundError: property does not exist
            DomainValidationError: check_out is not after check_in
            BookingConflictError: the property cannot accept the stay
        """
        logger.info(
            f"Creating booking for property {command.property_id}, "
            f"user {command.user_id}, dates {command.check_in} - {command.check_out}"
        )

        with DjangoUnitOfWork() as uow:
            prop = self.property_repo.get(
                command.property_id,
                lock=rentals_setting("SERIALIZE_BOOKING_CREATION"),
                with_reviews=False,
            )

            booking = Booking.request(
                prop,
                command.user_id,
                command.check_in,
                command.check_out,
                command.message,
            )

            uow.collect_events(booking)
            self.booking_repo.save(booking)

        logger.info(f"Booking {booking.id} created for property {booking.property_id}")
        return booking


class UpdateBookingStatusHandler:
    """Handler for confirming or rejecting a booking"""

    def __init__(self, booking_repo):
        self.booking_repo = booking_repo

    def handle(self, command: UpdateBookingStatusCommand) -> Booking:
        """
        Apply a status change

        Raises:
            NotFoundError: booking does not exist
            DomainValidationError: status is not a known value
            InvalidStatusTransitionError: booking is no longer pending
        """
        logger.info(f"Updating booking {command.booking_id} to {command.status}")

        with DjangoUnitOfWork() as uow:
            booking = self.booking_repo.get(command.booking_id, lock=True)
            booking.transition_to(command.status)

            uow.collect_events(booking)
            self.booking_repo.save(booking)

        logger.info(f"Booking {booking.id} is now {booking.status.value}")
        return booking


# ===== Event Handlers =====

def log_booking_requested(event: BookingRequested):
    audit_logger.info(
        "booking.requested",
        booking_id=str(event.booking_id),
        property_id=str(event.property_id),
        user_id=str(event.user_id),
        check_in=event.dates.start_date.isoformat(),
        check_out=event.dates.end_date.isoformat(),
    )


def log_booking_decided(event):
    audit_logger.info(
        "booking.decided",
        booking_id=str(event.booking_id),
        property_id=str(event.property_id),
        decision=type(event).__name__,
    )


def register_handlers(bus):
    """Wire booking commands and events into the message bus"""
    if not bus.has_command_handler(CreateBookingCommand):
        bus.register_command_handler(
            CreateBookingCommand,
            lambda cmd: CreateBookingHandler(BookingRepository(), PropertyRepository()).handle(cmd),
        )
    if not bus.has_command_handler(UpdateBookingStatusCommand):
        bus.register_command_handler(
            UpdateBookingStatusCommand,
            lambda cmd: UpdateBookingStatusHandler(BookingRepository()).handle(cmd),
        )

    bus.register_event_handler(BookingRequested, log_booking_requested)
    bus.register_event_handler(BookingConfirmed, log_booking_decided)
    bus.register_event_handler(BookingRejected, log_booking_decided)
