"""Serializers for reviews.

Reviews are read through ``ReviewSerializer``. Writes never go through a
model serializer: the input serializers below only shape the request,
and the review aggregator decides whether the change is allowed.
"""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.users.serializers import UserSerializer

from .models import Review


class ReviewSerializer(serializers.ModelSerializer):
    """Serializer for displaying a review."""

    user = UserSerializer(read_only=True, allow_null=True)
    userName = serializers.CharField(source='user_name', read_only=True)
    helpfulCount = serializers.IntegerField(source='helpful_count', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Review
        fields = [
            'id',
            'property',
            'user',
            'userName',
            'rating',
            'title',
            'comment',
            'helpfulCount',
            'createdAt',
        ]
        read_only_fields = fields


class ReviewCreateSerializer(serializers.Serializer):
    """Input of an authored review. Range checks belong to the domain."""

    rating = serializers.IntegerField()
    comment = serializers.CharField(allow_blank=True, trim_whitespace=True)
    title = serializers.CharField(required=False, allow_blank=True, default='', max_length=200)


class RatingSerializer(serializers.Serializer):
    rating = serializers.IntegerField()
