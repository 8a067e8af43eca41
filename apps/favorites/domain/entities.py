"""
Favorites Domain Entities

Each user owns one FavoritesIndex: an unordered set of property ids.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Set
from uuid import UUID

from shared.domain.base import Aggregate


@dataclass(eq=False, kw_only=True)
class FavoritesIndex(Aggregate):
    user_id: UUID
    property_ids: Set[UUID] = field(default_factory=set)

    def contains(self, property_id: UUID) -> bool:
        return property_id in self.property_ids

    def toggle(self, property_id: UUID) -> bool:
        """
        Add the property if absent, remove it if present

        Returns the resulting membership.
        """
        from apps.favorites.domain.events import FavoriteToggled

        if property_id in self.property_ids:
            self.property_ids.discard(property_id)
            is_favorite = False
        else:
            self.property_ids.add(property_id)
            is_favorite = True
        self.touch()

        self.add_event(FavoriteToggled(
            aggregate_id=self.id,
            user_id=self.user_id,
            property_id=property_id,
            is_favorite=is_favorite,
        ))
        return is_favorite

    def __len__(self) -> int:
        return len(self.property_ids)
