"""Repository for the Property aggregate.

Loads a listing together with its review collection into the pure domain
model and writes back the parts the domain is allowed to change: the
review collection and the rating aggregate.
"""

from __future__ import annotations

import logging
from uuid import UUID

from django.core.exceptions import ValidationError as DjangoValidationError  # type: ignore
from django.db import IntegrityError  # type: ignore
from django.utils import timezone  # type: ignore

from apps.reviews.domain.entities import Review
from apps.reviews.models import Review as ReviewModel
from shared.domain.exceptions import DuplicateReviewError, NotFoundError
from shared.infrastructure.locking import lock_queryset_if_possible

from .domain.entities import AvailabilityWindow, Property, PropertyStatus
from .models import Property as PropertyModel

logger = logging.getLogger(__name__)


def review_to_domain(model: ReviewModel) -> Review:
    return Review(
        id=model.id,
        user_id=model.user_id,
        user_name=model.user_name,
        rating=model.rating,
        title=model.title,
        comment=model.comment,
        helpful_count=model.helpful_count,
        created_at=model.created_at,
        updated_at=model.created_at,
    )


def property_to_domain(model: PropertyModel, reviews: list[Review] | None = None) -> Property:
    return Property(
        id=model.id,
        name=model.name,
        type=model.type,
        location=model.location,
        price=model.price,
        discount=model.discount,
        status=PropertyStatus(model.status),
        availability=AvailabilityWindow(
            start_date=model.available_from,
            end_date=model.available_until,
            minimum_stay=model.minimum_stay,
        ),
        amenities=model.amenities or [],
        owner_id=model.owner_id,
        reviews=reviews or [],
        average_rating=model.average_rating,
        total_reviews=model.total_reviews,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


class PropertyRepository:
    """Django ORM backed storage for Property aggregates."""

    def get(self, property_id: UUID, *, lock: bool = False, with_reviews: bool = True) -> Property:
        """
        Load a property aggregate

        With ``lock=True`` the row is selected for update when running
        inside a transaction, serializing writers of the same property.

        Raises:
            NotFoundError: no property with this id
        """
        queryset = PropertyModel.objects.all()
        if lock:
            queryset = lock_queryset_if_possible(queryset)
        try:
            model = queryset.get(pk=property_id)
        except (PropertyModel.DoesNotExist, ValueError, DjangoValidationError):
            raise NotFoundError(f"Property {property_id} not found")

        reviews = None
        if with_reviews:
            reviews = [
                review_to_domain(review)
                for review in ReviewModel.objects.filter(property_id=model.pk).order_by('created_at', 'id')
            ]
        return property_to_domain(model, reviews)

    def get_by_review(self, review_id: UUID, *, lock: bool = False) -> Property:
        """Load the property that owns a review"""
        try:
            property_id = ReviewModel.objects.values_list('property_id', flat=True).get(pk=review_id)
        except (ReviewModel.DoesNotExist, ValueError, DjangoValidationError):
            raise NotFoundError(f"Review {review_id} not found")
        return self.get(property_id, lock=lock)

    def exists(self, property_id: UUID) -> bool:
        try:
            return PropertyModel.objects.filter(pk=property_id).exists()
        except (ValueError, DjangoValidationError):
            return False

    def save(self, prop: Property) -> None:
        """
        Persist the review collection and the rating aggregate

        Must run inside the caller's transaction so that new reviews and
        the recomputed aggregate become visible together.
        """
        existing = dict(
            ReviewModel.objects.filter(property_id=prop.id).values_list('id', 'helpful_count')
        )

        new_rows = [
            ReviewModel(
                id=review.id,
                property_id=prop.id,
                user_id=review.user_id,
                user_name=review.user_name,
                rating=review.rating,
                title=review.title,
                comment=review.comment,
                helpful_count=review.helpful_count,
                created_at=review.created_at,
            )
            for review in prop.reviews
            if review.id not in existing
        ]
        if new_rows:
            try:
                ReviewModel.objects.bulk_create(new_rows)
            except IntegrityError as exc:
                # Lost a race against a concurrent review by the same user.
                logger.warning(f"Review insert rejected for property {prop.id}: {exc}")
                raise DuplicateReviewError("You've already reviewed this property") from exc

        for review in prop.reviews:
            if review.id in existing and existing[review.id] != review.helpful_count:
                ReviewModel.objects.filter(pk=review.id).update(helpful_count=review.helpful_count)

        PropertyModel.objects.filter(pk=prop.id).update(
            average_rating=prop.average_rating,
            total_reviews=prop.total_reviews,
            updated_at=timezone.now(),
        )
