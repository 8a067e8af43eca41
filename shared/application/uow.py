"""
Unit of Work

One database transaction per command. Events collected from the
aggregates a handler touched reach the message bus only once that
transaction has committed; a rollback drops them.
"""

from typing import List
import logging

from django.db import transaction

from shared.domain.base import Aggregate, DomainEvent

logger = logging.getLogger(__name__)


class DjangoUnitOfWork:
    """
    transaction.atomic() plus the events to publish on commit

        with DjangoUnitOfWork() as uow:
            prop = property_repo.get(property_id, lock=True)
            add_review(prop, user_id, rating, comment)
            uow.collect_events(prop)
            property_repo.save(prop)

    Nested use joins the caller's transaction, and publication then waits
    for the outermost commit.
    """

    def __init__(self):
        self._events: List[DomainEvent] = []
        self._atomic = transaction.atomic()

    def __enter__(self):
        self._atomic.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            events, self._events = self._events, []
            if events:
                transaction.on_commit(lambda: self._publish(events))
        else:
            if self._events:
                logger.info(f"Transaction aborted, dropping {len(self._events)} events")
            self._events = []
        return self._atomic.__exit__(exc_type, exc_val, exc_tb)

    def collect_events(self, aggregate: Aggregate):
        """Move the aggregate's pending events into this unit of work"""
        events = aggregate.events
        if events:
            self._events.extend(events)
            aggregate.clear_events()

    @staticmethod
    def _publish(events: List[DomainEvent]):
        from shared.application.message_bus import message_bus

        message_bus.publish_events(events)
