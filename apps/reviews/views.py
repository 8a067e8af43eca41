"""API views for reading reviews and marking them helpful."""

from __future__ import annotations

from uuid import UUID

from rest_framework import mixins, permissions, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from shared.application.message_bus import message_bus
from shared.infrastructure.lookups import UUID_LOOKUP_REGEX, parse_lookup_id
from apps.reviews.application.command_handlers import MarkReviewHelpfulCommand

from .models import Review
from .serializers import ReviewSerializer


class ReviewViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """
    Read-only access to reviews

    Reviews are created through ``POST /properties/{id}/review/`` and
    ``POST /properties/{id}/rate/`` so the property's rating aggregate is
    always updated with them.
    """

    queryset = Review.objects.select_related('user').order_by('created_at', 'id')
    serializer_class = ReviewSerializer
    permission_classes = [permissions.AllowAny]
    lookup_value_regex = UUID_LOOKUP_REGEX

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        property_id = self.request.query_params.get('property')
        if property_id:
            try:
                qs = qs.filter(property_id=UUID(property_id))
            except ValueError:
                return qs.none()
        return qs

    @action(detail=True, methods=['post'])
    def helpful(self, request, pk=None):  # type: ignore
        result = message_bus.handle_command(
            MarkReviewHelpfulCommand(review_id=parse_lookup_id(pk, 'Review'))
        )
        return Response({'helpfulCount': result.review.helpful_count})
