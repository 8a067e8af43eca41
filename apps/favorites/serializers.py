"""Serializers for the favorites domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.properties.serializers import PropertySummarySerializer

from .models import Favorite


class FavoriteSerializer(serializers.ModelSerializer):
    """A favorited property together with when it was added."""

    property = PropertySummarySerializer(read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Favorite
        fields = ['id', 'property', 'createdAt']
        read_only_fields = fields
