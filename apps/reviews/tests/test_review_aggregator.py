"""Tests for the review aggregator."""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest

from apps.properties.domain.entities import Property
from apps.reviews.domain import aggregator
from apps.reviews.domain.entities import ANONYMOUS_RATING_COMMENT
from apps.reviews.domain.events import PropertyRated, ReviewAdded, ReviewMarkedHelpful
from shared.domain.exceptions import DomainValidationError, DuplicateReviewError, NotFoundError


@pytest.fixture
def listing() -> Property:
    return Property(name="Loft", type="Apartment", location="Astana", price=Decimal("80"))


def test_empty_property_has_zero_rating(listing) -> None:
    aggregator.recompute_rating(listing)
    assert listing.average_rating == 0
    assert listing.total_reviews == 0


def test_add_review_updates_mean_and_count(listing) -> None:
    aggregator.add_review(listing, uuid4(), 4, "Nice")
    aggregator.add_review(listing, uuid4(), 5, "Great", user_name="Aida", title="Loved it")

    assert listing.total_reviews == 2
    assert listing.average_rating == pytest.approx(4.5)
    assert [type(e) for e in listing.events] == [ReviewAdded, ReviewAdded]


def test_second_review_by_same_user_is_rejected(listing) -> None:
    user_id = uuid4()
    aggregator.add_review(listing, user_id, 2, "Meh")

    with pytest.raises(DuplicateReviewError):
        aggregator.add_review(listing, user_id, 5, "Changed my mind")

    assert listing.total_reviews == 1
    assert listing.average_rating == 2


@pytest.mark.parametrize("rating", [0, 6, 3.5, "4", True])
def test_invalid_rating_leaves_aggregate_untouched(listing, rating) -> None:
    aggregator.add_review(listing, uuid4(), 3, "Ok")

    with pytest.raises(DomainValidationError):
        aggregator.add_review(listing, uuid4(), rating, "Bad input")

    assert listing.total_reviews == 1
    assert listing.average_rating == 3


def test_anonymous_ratings_are_not_deduplicated(listing) -> None:
    aggregator.rate_property(listing, 5)
    review = aggregator.rate_property(listing, 3)

    assert review.is_anonymous
    assert review.comment == ANONYMOUS_RATING_COMMENT
    assert listing.total_reviews == 2
    assert listing.average_rating == 4
    assert all(isinstance(e, PropertyRated) for e in listing.events)


def test_mark_helpful_increments_counter(listing) -> None:
    review = aggregator.add_review(listing, uuid4(), 4, "Useful")
    listing.clear_events()

    aggregator.mark_helpful(listing, review.id)
    aggregator.mark_helpful(listing, review.id)

    assert review.helpful_count == 2
    assert [type(e) for e in listing.events] == [ReviewMarkedHelpful, ReviewMarkedHelpful]


def test_mark_helpful_on_unknown_review(listing) -> None:
    review = aggregator.add_review(listing, uuid4(), 4, "Useful")

    with pytest.raises(NotFoundError):
        aggregator.mark_helpful(listing, uuid4())

    assert review.helpful_count == 0
    assert listing.total_reviews == 1
