"""Tests for the message bus."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from shared.application.message_bus import MessageBus
from shared.domain.base import DomainEvent
from shared.domain.exceptions import NotFoundError


@dataclass
class Ping:
    value: int


@dataclass(kw_only=True)
class Pinged(DomainEvent):
    value: int


def test_command_is_routed_to_its_handler() -> None:
    bus = MessageBus()
    bus.register_command_handler(Ping, lambda cmd: cmd.value * 2)

    assert bus.handle_command(Ping(21)) == 42


def test_command_type_accepts_one_handler() -> None:
    bus = MessageBus()
    bus.register_command_handler(Ping, lambda cmd: None)

    with pytest.raises(ValueError):
        bus.register_command_handler(Ping, lambda cmd: None)


def test_unregistered_command() -> None:
    with pytest.raises(ValueError):
        MessageBus().handle_command(Ping(1))


def test_domain_errors_propagate_from_handlers() -> None:
    bus = MessageBus()

    def handler(cmd):
        raise NotFoundError("missing")

    bus.register_command_handler(Ping, handler)

    with pytest.raises(NotFoundError):
        bus.handle_command(Ping(1))


def test_events_reach_every_handler() -> None:
    bus = MessageBus()
    seen: list[tuple[str, int]] = []
    bus.register_event_handler(Pinged, lambda e: seen.append(("a", e.value)))
    bus.register_event_handler(Pinged, lambda e: seen.append(("b", e.value)))

    bus.publish_events([Pinged(value=7)])

    assert seen == [("a", 7), ("b", 7)]


def test_failing_event_handler_does_not_stop_others() -> None:
    bus = MessageBus()
    seen: list[int] = []

    def broken(event):
        raise RuntimeError("boom")

    bus.register_event_handler(Pinged, broken)
    bus.register_event_handler(Pinged, lambda e: seen.append(e.value))

    bus.publish_events([Pinged(value=1)])

    assert seen == [1]


def test_same_event_handler_is_registered_once() -> None:
    bus = MessageBus()
    seen: list[int] = []

    def handler(event):
        seen.append(event.value)

    bus.register_event_handler(Pinged, handler)
    bus.register_event_handler(Pinged, handler)
    bus.publish_events([Pinged(value=3)])

    assert seen == [3]
