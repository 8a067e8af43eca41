"""API views for favorites."""

from __future__ import annotations

from django.db.models import Prefetch  # type: ignore
from rest_framework import mixins, permissions, viewsets  # type: ignore

from apps.properties.models import PropertyImage

from .models import Favorite
from .serializers import FavoriteSerializer


class FavoriteViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    The caller's favorite properties, most recently added first.

    Membership is toggled through ``POST /properties/{id}/favorite/``.
    """

    serializer_class = FavoriteSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):  # type: ignore
        return (
            Favorite.objects.filter(user=self.request.user)
            .select_related('property')
            .prefetch_related(Prefetch('property__images', queryset=PropertyImage.objects.defer('data')))
            .order_by('-created_at')
        )
