"""Favorites Domain Events"""

from dataclasses import dataclass
from uuid import UUID

from shared.domain.base import DomainEvent


@dataclass(kw_only=True)
class FavoriteToggled(DomainEvent):
    user_id: UUID
    property_id: UUID
    is_favorite: bool
