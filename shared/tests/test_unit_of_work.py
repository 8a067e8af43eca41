"""Tests for publish-after-commit in the Django unit of work."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from shared.application.message_bus import message_bus
from shared.application.uow import DjangoUnitOfWork
from shared.domain.base import Aggregate, DomainEvent


@dataclass(kw_only=True)
class CounterBumped(DomainEvent):
    amount: int


@dataclass(eq=False, kw_only=True)
class Counter(Aggregate):
    value: int = 0

    def bump(self, amount: int) -> None:
        self.value += amount
        self.add_event(CounterBumped(aggregate_id=self.id, amount=amount))


@pytest.fixture
def received():
    seen: list[CounterBumped] = []

    def handler(event):
        seen.append(event)

    message_bus.register_event_handler(CounterBumped, handler)
    yield seen
    message_bus._event_handlers.pop(CounterBumped, None)


@pytest.mark.django_db
def test_events_are_published_after_commit(received, django_capture_on_commit_callbacks) -> None:
    counter = Counter()

    with django_capture_on_commit_callbacks(execute=True):
        with DjangoUnitOfWork() as uow:
            counter.bump(2)
            uow.collect_events(counter)
            assert received == []

    assert [event.amount for event in received] == [2]
    assert counter.events == []


@pytest.mark.django_db
def test_events_are_discarded_on_rollback(received, django_capture_on_commit_callbacks) -> None:
    counter = Counter()

    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        with pytest.raises(RuntimeError):
            with DjangoUnitOfWork() as uow:
                counter.bump(5)
                uow.collect_events(counter)
                raise RuntimeError("abort")

    assert callbacks == []
    assert received == []
