"""Tests for the toggle favorite command handler."""

from uuid import uuid4

import pytest
from django.db import IntegrityError

from apps.favorites.application.command_handlers import ToggleFavoriteCommand, ToggleFavoriteHandler
from apps.favorites.domain.entities import FavoritesIndex
from shared.domain.exceptions import NotFoundError


class StubPropertyRepository:
    def __init__(self, exists: bool):
        self._exists = exists

    def exists(self, property_id) -> bool:
        return self._exists


class StubFavoriteRepository:
    def __init__(self, save_error: Exception | None = None):
        self.save_error = save_error
        self.saved: list[FavoritesIndex] = []

    def get_for_user(self, user_id) -> FavoritesIndex:
        return FavoritesIndex(user_id=user_id)

    def save(self, index: FavoritesIndex) -> None:
        if self.save_error is not None:
            raise self.save_error
        self.saved.append(index)


@pytest.mark.django_db
def test_toggle_returns_membership() -> None:
    favorites = StubFavoriteRepository()
    handler = ToggleFavoriteHandler(favorites, StubPropertyRepository(exists=True))
    property_id = uuid4()

    assert handler.handle(ToggleFavoriteCommand(user_id=uuid4(), property_id=property_id)) is True
    assert favorites.saved[0].contains(property_id)


@pytest.mark.django_db
def test_unknown_property_is_not_found_and_nothing_is_saved() -> None:
    favorites = StubFavoriteRepository()
    handler = ToggleFavoriteHandler(favorites, StubPropertyRepository(exists=False))

    with pytest.raises(NotFoundError):
        handler.handle(ToggleFavoriteCommand(user_id=uuid4(), property_id=uuid4()))
    assert favorites.saved == []


@pytest.mark.django_db
def test_property_deleted_before_insert_is_not_found() -> None:
    favorites = StubFavoriteRepository(save_error=IntegrityError("FOREIGN KEY constraint failed"))
    handler = ToggleFavoriteHandler(favorites, StubPropertyRepository(exists=True))

    with pytest.raises(NotFoundError):
        handler.handle(ToggleFavoriteCommand(user_id=uuid4(), property_id=uuid4()))
