"""
Common Value Objects

Value objects used across multiple domains:
- DateRange: Represents a stay from check-in to check-out
"""

from dataclasses import dataclass
from datetime import date, datetime

from shared.domain.base import ValueObject
from shared.domain.exceptions import DomainValidationError


def as_date(value: date | datetime) -> date:
    """
    Reduce a date or datetime to day granularity

    Datetimes are assumed to be already normalized by the caller;
    no timezone conversion happens here.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise DomainValidationError(f"Expected a date, got {type(value).__name__}")


@dataclass(frozen=True)
class DateRange(ValueObject):
    """
    Date range value object

    Represents a range from start_date (inclusive) to end_date (exclusive).
    Used for booking periods.
    """
    start_date: date
    end_date: date

    def __post_init__(self):
        object.__setattr__(self, 'start_date', as_date(self.start_date))
        object.__setattr__(self, 'end_date', as_date(self.end_date))
        if self.start_date >= self.end_date:
            raise DomainValidationError(
                f"Check-out ({self.end_date}) must be after check-in ({self.start_date})"
            )

    def __len__(self) -> int:
        """Number of whole days (nights) in this range"""
        return (self.end_date - self.start_date).days

    def __str__(self):
        return f"{self.start_date.isoformat()} - {self.end_date.isoformat()}"

    def __repr__(self):
        return f"DateRange({self.start_date}, {self.end_date})"
