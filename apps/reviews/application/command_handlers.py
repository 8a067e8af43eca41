"""
Review Command Handlers

Every change to a property's review collection goes through one of
these handlers. The property row is locked for the duration of the
transaction so the collection and its rating aggregate are updated
together and concurrent raters do not lose each other's votes.
"""

from dataclasses import dataclass
from uuid import UUID
import logging

import structlog

from shared.application.uow import DjangoUnitOfWork
from apps.properties.domain.entities import Property
from apps.properties.repositories import PropertyRepository
from apps.reviews.domain import aggregator
from apps.reviews.domain.entities import Review
from apps.reviews.domain.events import PropertyRated, ReviewAdded, ReviewMarkedHelpful

logger = logging.getLogger(__name__)
audit_logger = structlog.get_logger("apps.reviews.events")


# ===== Commands =====

@dataclass
class AddReviewCommand:
    property_id: UUID
    user_id: UUID
    rating: int
    comment: str
    user_name: str = ''
    title: str = ''


@dataclass
class RatePropertyCommand:
    """Anonymous rating, no author and no dedup"""
    property_id: UUID
    rating: int


@dataclass
class MarkReviewHelpfulCommand:
    review_id: UUID


@dataclass
class ReviewResult:
    review: Review
    property: Property


# ===== Command Handlers =====

class AddReviewHandler:
    def __init__(self, property_repo):
        self.property_repo = property_repo

    def handle(self, command: AddReviewCommand) -> ReviewResult:
        with DjangoUnitOfWork() as uow:
            prop = self.property_repo.get(command.property_id, lock=True)
            review = aggregator.add_review(
                prop,
                command.user_id,
                command.rating,
                command.comment,
                user_name=command.user_name,
                title=command.title,
            )
            uow.collect_events(prop)
            self.property_repo.save(prop)

        logger.info(f"Review {review.id} added to property {prop.id}")
        return ReviewResult(review=review, property=prop)


class RatePropertyHandler:
    def __init__(self, property_repo):
        self.property_repo = property_repo

    def handle(self, command: RatePropertyCommand) -> ReviewResult:
        with DjangoUnitOfWork() as uow:
            prop = self.property_repo.get(command.property_id, lock=True)
            review = aggregator.rate_property(prop, command.rating)
            uow.collect_events(prop)
            self.property_repo.save(prop)

        logger.info(f"Anonymous rating recorded for property {prop.id}, new average {prop.average_rating}")
        return ReviewResult(review=review, property=prop)


class MarkReviewHelpfulHandler:
    def __init__(self, property_repo):
        self.property_repo = property_repo

    def handle(self, command: MarkReviewHelpfulCommand) -> ReviewResult:
        """
        Raises:
            NotFoundError: no review with this id
        """
        with DjangoUnitOfWork() as uow:
            prop = self.property_repo.get_by_review(command.review_id, lock=True)
            review = aggregator.mark_helpful(prop, command.review_id)
            uow.collect_events(prop)
            self.property_repo.save(prop)

        return ReviewResult(review=review, property=prop)


# ===== Event Handlers =====

def log_rating_changed(event):
    audit_logger.info(
        "property.rating_changed",
        property_id=str(event.property_id),
        review_id=str(event.review_id),
        rating=event.rating,
        average_rating=event.average_rating,
        total_reviews=event.total_reviews,
    )


def log_review_helpful(event: ReviewMarkedHelpful):
    audit_logger.info(
        "review.marked_helpful",
        review_id=str(event.review_id),
        helpful_count=event.helpful_count,
    )


def register_handlers(bus):
    """Wire review commands and events into the message bus"""
    handlers = {
        AddReviewCommand: lambda cmd: AddReviewHandler(PropertyRepository()).handle(cmd),
        RatePropertyCommand: lambda cmd: RatePropertyHandler(PropertyRepository()).handle(cmd),
        MarkReviewHelpfulCommand: lambda cmd: MarkReviewHelpfulHandler(PropertyRepository()).handle(cmd),
    }
    for command_type, handler in handlers.items():
        if not bus.has_command_handler(command_type):
            bus.register_command_handler(command_type, handler)

    bus.register_event_handler(ReviewAdded, log_rating_changed)
    bus.register_event_handler(PropertyRated, log_rating_changed)
    bus.register_event_handler(ReviewMarkedHelpful, log_review_helpful)
