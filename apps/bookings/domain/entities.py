"""
Booking Domain Entities

Core business entities for the booking ledger:
- Booking: Aggregate representing a stay request for a property
- BookingStatus: FSM states for the booking lifecycle
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from uuid import UUID

from shared.domain.base import Aggregate, utcnow
from shared.domain.exceptions import (
    BookingConflictError,
    DomainValidationError,
    InvalidStatusTransitionError,
)
from shared.domain.value_objects import DateRange
from apps.properties.domain.entities import Property


class BookingStatus(Enum):
    """
    Booking Status Finite State Machine

    State transitions:
    - PENDING -> CONFIRMED (owner/admin accepted the request)
    - PENDING -> REJECTED (owner/admin declined the request)

    CONFIRMED and REJECTED are terminal.
    """
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    REJECTED = 'rejected'

    @classmethod
    def parse(cls, value: str | 'BookingStatus') -> 'BookingStatus':
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise DomainValidationError(f"Invalid booking status: {value!r}") from None


TRANSITIONS = {
    BookingStatus.PENDING: {BookingStatus.CONFIRMED, BookingStatus.REJECTED},
    BookingStatus.CONFIRMED: set(),
    BookingStatus.REJECTED: set(),
}


@dataclass(eq=False, kw_only=True)
class Booking(Aggregate):
    """
    Booking Aggregate Root

    A user's request to stay at a property for specific dates. References
    the property and the user by identifier only.

    Key invariants:
    - check_out is strictly after check_in
    - a booking is only created for a stay the property can accept
    - status only moves out of PENDING, and only once
    """

    property_id: UUID
    user_id: UUID
    dates: DateRange
    message: str = ''
    status: BookingStatus = BookingStatus.PENDING
    decided_at: datetime | None = None

    @classmethod
    def request(
        cls,
        prop: Property,
        user_id: UUID,
        check_in: date | datetime,
        check_out: date | datetime,
        message: str = '',
    ) -> 'Booking':
        """
        Create a pending booking

        Raises:
            DomainValidationError: check_out is not after check_in
            BookingConflictError: the stay fails the property's availability check
        """
        dates = DateRange(check_in, check_out)
        if not prop.check_availability(dates.start_date, dates.end_date):
            raise BookingConflictError(
                f"Property {prop.id} is not available for {dates} "
                f"(status {prop.status.value}, minimum stay {prop.availability.minimum_stay} days)"
            )

        from apps.bookings.domain.events import BookingRequested

        booking = cls(
            property_id=prop.id,
            user_id=user_id,
            dates=dates,
            message=message or '',
        )
        booking.add_event(BookingRequested(
            aggregate_id=booking.id,
            booking_id=booking.id,
            property_id=prop.id,
            user_id=user_id,
            dates=dates,
        ))
        return booking

    def can_transition_to(self, status: BookingStatus) -> bool:
        return status in TRANSITIONS[self.status]

    def transition_to(self, status: str | BookingStatus):
        """Move to a new status, enforcing the FSM"""
        target = BookingStatus.parse(status)
        if target == BookingStatus.CONFIRMED:
            self.confirm()
        elif target == BookingStatus.REJECTED:
            self.reject()
        else:
            raise InvalidStatusTransitionError(
                f"Cannot move booking from {self.status.value} to {target.value}"
            )

    def confirm(self):
        """
        Confirm booking (PENDING -> CONFIRMED)

        Events: BookingConfirmed
        """
        self._ensure_can_move_to(BookingStatus.CONFIRMED)

        from apps.bookings.domain.events import BookingConfirmed

        self.status = BookingStatus.CONFIRMED
        self.decided_at = utcnow()
        self.touch()

        self.add_event(BookingConfirmed(
            aggregate_id=self.id,
            booking_id=self.id,
            property_id=self.property_id,
            user_id=self.user_id,
        ))

    def reject(self):
        """
        Reject booking (PENDING -> REJECTED)

        Events: BookingRejected
        """
        self._ensure_can_move_to(BookingStatus.REJECTED)

        from apps.bookings.domain.events import BookingRejected

        self.status = BookingStatus.REJECTED
        self.decided_at = utcnow()
        self.touch()

        self.add_event(BookingRejected(
            aggregate_id=self.id,
            booking_id=self.id,
            property_id=self.property_id,
            user_id=self.user_id,
        ))

    def _ensure_can_move_to(self, target: BookingStatus):
        if not self.can_transition_to(target):
            raise InvalidStatusTransitionError(
                f"Cannot move booking from {self.status.value} to {target.value}. "
                f"Booking must be {BookingStatus.PENDING.value}."
            )

    @property
    def check_in(self) -> date:
        return self.dates.start_date

    @property
    def check_out(self) -> date:
        return self.dates.end_date

    @property
    def nights(self) -> int:
        return len(self.dates)

    @property
    def is_pending(self) -> bool:
        return self.status == BookingStatus.PENDING

    def __str__(self):
        return f"Booking {self.id} ({self.status.value})"

    def __repr__(self):
        return (
            f"Booking(id={self.id}, property_id={self.property_id}, "
            f"status={self.status.value}, dates={self.dates})"
        )
