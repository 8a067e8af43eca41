"""
Booking Domain Events

Events that represent things that have happened in the booking ledger.
These are published after successful transaction commits.
"""

from dataclasses import dataclass
from uuid import UUID

from shared.domain.base import DomainEvent
from shared.domain.value_objects import DateRange


@dataclass(kw_only=True)
class BookingRequested(DomainEvent):
    """
    Event: A user asked to book a property

    The booking starts as pending and waits for the owner or an admin.
    """
    booking_id: UUID
    property_id: UUID
    user_id: UUID
    dates: DateRange


@dataclass(kw_only=True)
class BookingConfirmed(DomainEvent):
    """Event: Booking accepted (PENDING -> CONFIRMED)"""
    booking_id: UUID
    property_id: UUID
    user_id: UUID


@dataclass(kw_only=True)
class BookingRejected(DomainEvent):
    """Event: Booking declined (PENDING -> REJECTED)"""
    booking_id: UUID
    property_id: UUID
    user_id: UUID
