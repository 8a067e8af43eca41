"""
Review Domain Events

Raised on the Property aggregate whenever its review collection changes.
"""

from dataclasses import dataclass
from uuid import UUID

from shared.domain.base import DomainEvent


@dataclass(kw_only=True)
class ReviewAdded(DomainEvent):
    """An authenticated user reviewed a property"""
    property_id: UUID
    review_id: UUID
    user_id: UUID
    rating: int
    average_rating: float
    total_reviews: int


@dataclass(kw_only=True)
class PropertyRated(DomainEvent):
    """An anonymous rating was recorded"""
    property_id: UUID
    review_id: UUID
    rating: int
    average_rating: float
    total_reviews: int


@dataclass(kw_only=True)
class ReviewMarkedHelpful(DomainEvent):
    property_id: UUID
    review_id: UUID
    helpful_count: int
