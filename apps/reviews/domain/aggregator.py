"""
Review Aggregator

The only code allowed to change a property's review collection. Each
mutator validates first, then changes the collection and recomputes the
rating aggregate in the same call, so a caller never sees one without the
other. A rejected call leaves the property untouched.
"""

from __future__ import annotations

from uuid import UUID

from apps.properties.domain.entities import Property
from apps.reviews.domain.entities import ANONYMOUS_RATING_COMMENT, Review, validate_rating
from apps.reviews.domain.events import PropertyRated, ReviewAdded, ReviewMarkedHelpful
from shared.domain.exceptions import DuplicateReviewError, NotFoundError


def recompute_rating(prop: Property) -> None:
    """Set average_rating and total_reviews from the current reviews"""
    total = len(prop.reviews)
    prop.total_reviews = total
    prop.average_rating = (
        sum(review.rating for review in prop.reviews) / total if total else 0.0
    )
    prop.touch()


def has_reviewed(prop: Property, user_id: UUID) -> bool:
    return any(review.user_id == user_id for review in prop.reviews)


def add_review(
    prop: Property,
    user_id: UUID,
    rating: int,
    comment: str,
    *,
    user_name: str = '',
    title: str = '',
) -> Review:
    """
    Add an authored review

    Raises:
        DuplicateReviewError: the user already reviewed this property
        DomainValidationError: rating outside 1..5
    """
    if has_reviewed(prop, user_id):
        raise DuplicateReviewError("You've already reviewed this property")

    review = Review(
        user_id=user_id,
        user_name=user_name,
        rating=validate_rating(rating),
        title=title,
        comment=comment,
    )
    prop.reviews.append(review)
    recompute_rating(prop)

    prop.add_event(ReviewAdded(
        aggregate_id=prop.id,
        property_id=prop.id,
        review_id=review.id,
        user_id=user_id,
        rating=review.rating,
        average_rating=prop.average_rating,
        total_reviews=prop.total_reviews,
    ))
    return review


def rate_property(prop: Property, rating: int) -> Review:
    """
    Record an anonymous rating

    Separate channel from authored reviews: no user, no dedup,
    generic comment.
    """
    review = Review(rating=validate_rating(rating), comment=ANONYMOUS_RATING_COMMENT)
    prop.reviews.append(review)
    recompute_rating(prop)

    prop.add_event(PropertyRated(
        aggregate_id=prop.id,
        property_id=prop.id,
        review_id=review.id,
        rating=review.rating,
        average_rating=prop.average_rating,
        total_reviews=prop.total_reviews,
    ))
    return review


def mark_helpful(prop: Property, review_id: UUID) -> Review:
    """Increment a review's helpful counter"""
    review = prop.find_review(review_id)
    if review is None:
        raise NotFoundError(f"Review {review_id} not found")

    review.mark_helpful()
    prop.add_event(ReviewMarkedHelpful(
        aggregate_id=prop.id,
        property_id=prop.id,
        review_id=review.id,
        helpful_count=review.helpful_count,
    ))
    return review
