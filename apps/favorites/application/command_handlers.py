"""Favorites command handlers."""

from dataclasses import dataclass
from uuid import UUID

import structlog
from django.db import IntegrityError

from shared.application.uow import DjangoUnitOfWork
from shared.domain.exceptions import NotFoundError
from apps.favorites.domain.events import FavoriteToggled
from apps.favorites.repositories import FavoriteRepository
from apps.properties.repositories import PropertyRepository

logger = structlog.get_logger(__name__)


@dataclass
class ToggleFavoriteCommand:
    user_id: UUID
    property_id: UUID


class ToggleFavoriteHandler:
    def __init__(self, favorite_repo, property_repo):
        self.favorite_repo = favorite_repo
        self.property_repo = property_repo

    def handle(self, command: ToggleFavoriteCommand) -> bool:
        """
        Flip membership of the property in the user's favorites

        Returns the resulting membership.

        Raises:
            NotFoundError: property does not exist
        """
        try:
            with DjangoUnitOfWork() as uow:
                if not self.property_repo.exists(command.property_id):
                    raise NotFoundError(f"Property {command.property_id} not found")

                index = self.favorite_repo.get_for_user(command.user_id)
                is_favorite = index.toggle(command.property_id)
                uow.collect_events(index)
                self.favorite_repo.save(index)
        except IntegrityError as exc:
            # Property deleted between the check and the insert.
            logger.warning("favorite.property_vanished", property_id=str(command.property_id))
            raise NotFoundError(f"Property {command.property_id} not found") from exc

        return is_favorite


def log_favorite_toggled(event: FavoriteToggled):
    logger.info(
        "favorite.toggled",
        user_id=str(event.user_id),
        property_id=str(event.property_id),
        is_favorite=event.is_favorite,
    )


def register_handlers(bus):
    if not bus.has_command_handler(ToggleFavoriteCommand):
        bus.register_command_handler(
            ToggleFavoriteCommand,
            lambda cmd: ToggleFavoriteHandler(FavoriteRepository(), PropertyRepository()).handle(cmd),
        )
    bus.register_event_handler(FavoriteToggled, log_favorite_toggled)
