"""
Property Domain Entities

Core business entities for the property catalog:
- Property: Aggregate root owning its reviews and rating aggregate
- PropertyStatus: Listing states
- Amenity: Closed set of amenities a listing may advertise
- AvailabilityWindow: Bookable date range plus minimum stay
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import TYPE_CHECKING, Iterable, List
from uuid import UUID

from shared.domain.base import Aggregate, ValueObject
from shared.domain.exceptions import DomainValidationError
from shared.domain.value_objects import as_date

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from apps.reviews.domain.entities import Review

DEFAULT_MINIMUM_STAY = 30
CENTS = Decimal('0.01')


class PropertyStatus(Enum):
    AVAILABLE = 'available'
    BOOKED = 'booked'
    MAINTENANCE = 'maintenance'
    INACTIVE = 'inactive'


class Amenity(Enum):
    WIFI = 'WiFi'
    TV = 'TV'
    AIR_CONDITIONING = 'Air Conditioning'
    HEATING = 'Heating'
    KITCHEN = 'Kitchen'
    WASHING_MACHINE = 'Washing Machine'
    PARKING = 'Parking'
    ELEVATOR = 'Elevator'
    SWIMMING_POOL = 'Swimming Pool'
    GYM = 'Gym'
    SECURITY = 'Security'
    BALCONY = 'Balcony'
    GARDEN = 'Garden'
    FURNITURE = 'Furniture'

    @classmethod
    def parse_many(cls, values: Iterable[str | 'Amenity']) -> List['Amenity']:
        """Parse amenity names, rejecting anything outside the closed set"""
        parsed: List[Amenity] = []
        for value in values:
            try:
                amenity = value if isinstance(value, cls) else cls(value)
            except ValueError:
                raise DomainValidationError(f"Unknown amenity: {value!r}") from None
            if amenity not in parsed:
                parsed.append(amenity)
        return parsed


@dataclass(frozen=True)
class AvailabilityWindow(ValueObject):
    """
    Availability window value object

    Both bounds are optional and inclusive. A stay fits the window when it
    starts on or after start_date, ends on or before end_date and lasts at
    least minimum_stay whole days.
    """
    start_date: date | None = None
    end_date: date | None = None
    minimum_stay: int = DEFAULT_MINIMUM_STAY

    def __post_init__(self):
        if self.start_date is not None:
            object.__setattr__(self, 'start_date', as_date(self.start_date))
        if self.end_date is not None:
            object.__setattr__(self, 'end_date', as_date(self.end_date))
        if self.minimum_stay < 1:
            raise DomainValidationError("Minimum stay must be at least 1 day")
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise DomainValidationError(
                f"Availability start ({self.start_date}) is after its end ({self.end_date})"
            )

    def permits(self, check_in: date, check_out: date) -> bool:
        if self.start_date is not None and check_in < self.start_date:
            return False
        if self.end_date is not None and check_out > self.end_date:
            return False
        return (check_out - check_in).days >= self.minimum_stay


@dataclass(eq=False, kw_only=True)
class Property(Aggregate):
    """
    Property Aggregate Root

    A rental listing with its availability rules, pricing and the embedded
    review collection.

    Key invariants:
    - price is never negative and discount stays within [0, 100]
    - average_rating equals the mean of review ratings (0 without reviews)
    - total_reviews equals the number of reviews

    The rating invariants are maintained by apps.reviews.domain.aggregator,
    which is the only code that mutates ``reviews``.
    """

    name: str
    type: str
    location: str
    price: Decimal
    discount: Decimal = Decimal('0')
    status: PropertyStatus = PropertyStatus.AVAILABLE
    availability: AvailabilityWindow = field(default_factory=AvailabilityWindow)
    amenities: List[Amenity] = field(default_factory=list)
    owner_id: UUID | None = None
    reviews: List['Review'] = field(default_factory=list)
    average_rating: float = 0.0
    total_reviews: int = 0

    def __post_init__(self):
        self.price = Decimal(str(self.price))
        self.discount = Decimal(str(self.discount))
        if self.price < 0:
            raise DomainValidationError("Price must be a positive number")
        if not Decimal('0') <= self.discount <= Decimal('100'):
            raise DomainValidationError("Discount must be between 0 and 100")
        if not isinstance(self.status, PropertyStatus):
            try:
                self.status = PropertyStatus(self.status)
            except ValueError:
                raise DomainValidationError(f"Unknown property status: {self.status!r}") from None
        self.amenities = Amenity.parse_many(self.amenities)

    @property
    def is_available(self) -> bool:
        return self.status == PropertyStatus.AVAILABLE

    def check_availability(self, check_in: date | datetime, check_out: date | datetime) -> bool:
        """
        Check whether a stay can be booked

        Fails closed: returns True only if the property is available and the
        stay fits the availability window. Same state and inputs always give
        the same answer.
        """
        if not self.is_available:
            return False
        return self.availability.permits(as_date(check_in), as_date(check_out))

    def calculate_total_price(self, days: int) -> Decimal:
        """Price for a stay of ``days`` days after the listing discount"""
        if days < 0:
            raise DomainValidationError("Number of days cannot be negative")
        base_price = self.price * days
        total = base_price * (1 - self.discount / Decimal('100'))
        return total.quantize(CENTS, rounding=ROUND_HALF_UP)

    def matches_search(self, location: str | None = None, type: str | None = None) -> bool:
        """
        Search predicate

        Location is a case-insensitive substring match, type a
        case-insensitive exact match; blank filters match everything.
        """
        location = (location or '').strip()
        type = (type or '').strip()
        if location and location.casefold() not in self.location.casefold():
            return False
        if type and type.casefold() != self.type.strip().casefold():
            return False
        return True

    def find_review(self, review_id: UUID) -> 'Review | None':
        return next((review for review in self.reviews if review.id == review_id), None)

    def __str__(self):
        return f"{self.name} ({self.location})"

    def __repr__(self):
        return (
            f"Property(id={self.id}, name={self.name!r}, status={self.status.value}, "
            f"reviews={len(self.reviews)})"
        )
