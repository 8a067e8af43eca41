"""Repository for a user's favorites set."""

from __future__ import annotations

from uuid import UUID

from .domain.entities import FavoritesIndex
from .models import Favorite


class FavoriteRepository:
    """Stores a FavoritesIndex as one Favorite row per member."""

    def get_for_user(self, user_id: UUID) -> FavoritesIndex:
        property_ids = set(
            Favorite.objects.filter(user_id=user_id).values_list("property_id", flat=True)
        )
        return FavoritesIndex(user_id=user_id, property_ids=property_ids)

    def save(self, index: FavoritesIndex) -> None:
        stored = set(
            Favorite.objects.filter(user_id=index.user_id).values_list("property_id", flat=True)
        )
        removed = stored - index.property_ids
        added = index.property_ids - stored

        if removed:
            Favorite.objects.filter(user_id=index.user_id, property_id__in=removed).delete()
        if added:
            Favorite.objects.bulk_create(
                [Favorite(user_id=index.user_id, property_id=property_id) for property_id in added],
                ignore_conflicts=True,
            )
