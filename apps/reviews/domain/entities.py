"""
Review Domain Entities

A review belongs to exactly one property and lives inside the Property
aggregate. Authored reviews reference a user; anonymous ratings do not.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from shared.domain.base import Entity
from shared.domain.exceptions import DomainValidationError

MIN_RATING = 1
MAX_RATING = 5
ANONYMOUS_RATING_COMMENT = 'User rating'


def validate_rating(rating) -> int:
    """Ratings are integers from 1 to 5; booleans and floats are rejected"""
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise DomainValidationError(f"Rating must be an integer, got {rating!r}")
    if not MIN_RATING <= rating <= MAX_RATING:
        raise DomainValidationError(
            f"Rating must be between {MIN_RATING} and {MAX_RATING}, got {rating}"
        )
    return rating


@dataclass(eq=False, kw_only=True)
class Review(Entity):
    rating: int
    comment: str
    user_id: UUID | None = None
    user_name: str = ''
    title: str = ''
    helpful_count: int = 0

    def __post_init__(self):
        validate_rating(self.rating)
        if self.helpful_count < 0:
            raise DomainValidationError("Helpful count cannot be negative")

    @property
    def is_anonymous(self) -> bool:
        return self.user_id is None

    def mark_helpful(self) -> int:
        self.helpful_count += 1
        self.touch()
        return self.helpful_count

    def __repr__(self):
        return f"Review(id={self.id}, user_id={self.user_id}, rating={self.rating})"
