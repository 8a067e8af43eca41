"""Tests for the favorites index."""

from uuid import uuid4

from apps.favorites.domain.entities import FavoritesIndex
from apps.favorites.domain.events import FavoriteToggled


def test_toggle_adds_then_removes() -> None:
    index = FavoritesIndex(user_id=uuid4())
    property_id = uuid4()

    assert index.toggle(property_id) is True
    assert index.contains(property_id)

    assert index.toggle(property_id) is False
    assert not index.contains(property_id)
    assert len(index) == 0


def test_toggle_records_resulting_membership() -> None:
    index = FavoritesIndex(user_id=uuid4())
    property_id = uuid4()

    index.toggle(property_id)
    index.toggle(property_id)

    events = index.events
    assert all(isinstance(event, FavoriteToggled) for event in events)
    assert [event.is_favorite for event in events] == [True, False]


def test_toggle_keeps_other_members() -> None:
    kept, toggled = uuid4(), uuid4()
    index = FavoritesIndex(user_id=uuid4(), property_ids={kept})

    index.toggle(toggled)
    index.toggle(toggled)

    assert index.property_ids == {kept}
