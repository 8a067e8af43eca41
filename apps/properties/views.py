"""Property API views."""

from __future__ import annotations

import structlog
from django.http import Http404, HttpResponse  # type: ignore
from django.utils import timezone  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from shared.application.message_bus import message_bus
from shared.infrastructure.lookups import UUID_LOOKUP_REGEX, parse_lookup_id
from shared.domain.value_objects import DateRange
from apps.bookings.application.command_handlers import CreateBookingCommand
from apps.bookings.models import Booking
from apps.bookings.serializers import BookingRequestSerializer, BookingSerializer
from apps.favorites.application.command_handlers import ToggleFavoriteCommand
from apps.reviews.application.command_handlers import AddReviewCommand, RatePropertyCommand
from apps.reviews.models import Review
from apps.reviews.serializers import RatingSerializer, ReviewCreateSerializer, ReviewSerializer

from .filters import PropertyFilterSet
from .models import Property, PropertyImage
from .repositories import PropertyRepository
from .serializers import (
    IMAGES_WITHOUT_DATA,
    AvailabilityQuerySerializer,
    PropertySerializer,
    PropertyWriteSerializer,
)

logger = structlog.get_logger(__name__)


class IsPropertyOwnerOrAdmin(permissions.BasePermission):
    """Anyone may read; a listing is changed by its owner or staff."""

    def has_permission(self, request, view):  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        return bool(request.user and request.user.is_authenticated)

    def has_object_permission(self, request, view, obj: Property):  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        user = request.user
        if getattr(user, "is_staff", False) or getattr(user, "is_superuser", False):
            return True
        return obj.owner_id is not None and obj.owner_id == user.pk


class PropertyViewSet(viewsets.ModelViewSet):
    """
    Listings plus the per-listing actions of the rental flow

    Availability quotes and anonymous ratings are public. Booking,
    reviewing and favoriting require an authenticated user.
    """

    queryset = Property.objects.prefetch_related(IMAGES_WITHOUT_DATA, "reviews__user")
    permission_classes = [IsPropertyOwnerOrAdmin]
    filter_backends = [DjangoFilterBackend]
    filterset_class = PropertyFilterSet
    lookup_value_regex = UUID_LOOKUP_REGEX

    def get_permissions(self):  # type: ignore
        if self.action in {"list", "retrieve", "count", "images", "availability", "rate"}:
            return [permissions.AllowAny()]
        if self.action in {"book", "review", "favorite"}:
            return [permissions.IsAuthenticated()]
        return super().get_permissions()

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "update", "partial_update"}:
            return PropertyWriteSerializer
        return PropertySerializer

    def perform_create(self, serializer):  # type: ignore
        instance = serializer.save(owner=self.request.user)
        logger.info("property.created", property_id=str(instance.pk), owner_id=str(self.request.user.pk))

    def perform_destroy(self, instance):  # type: ignore
        property_id = str(instance.pk)
        # Reviews, images and favorites go with the listing; bookings keep their ids.
        instance.delete()
        logger.info("property.deleted", property_id=property_id)

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.perform_create(serializer)
        instance = self.get_queryset().get(pk=serializer.instance.pk)
        data = PropertySerializer(instance, context=self.get_serializer_context()).data
        return Response(data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):  # type: ignore
        partial = kwargs.pop("partial", False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        instance = self.get_queryset().get(pk=instance.pk)
        return Response(PropertySerializer(instance, context=self.get_serializer_context()).data)

    @action(detail=False, methods=["get"])
    def count(self, request):  # type: ignore
        return Response({"count": self.filter_queryset(Property.objects.all()).count()})

    @action(detail=True, methods=["get"], url_path=r"images/(?P<index>\d+)")
    def images(self, request, pk=None, index=None):  # type: ignore
        try:
            image = PropertyImage.objects.filter(property_id=pk).order_by("position", "id")[int(index)]
        except IndexError:
            raise Http404("Image not found")
        return HttpResponse(bytes(image.data), content_type=image.content_type)

    @action(detail=True, methods=["get"])
    def availability(self, request, pk=None):  # type: ignore
        query = AvailabilityQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        dates = DateRange(query.validated_data["checkIn"], query.validated_data["checkOut"])

        prop = PropertyRepository().get(parse_lookup_id(pk, "Property"), with_reviews=False)
        nights = len(dates)
        return Response(
            {
                "available": prop.check_availability(dates.start_date, dates.end_date),
                "nights": nights,
                "totalPrice": prop.calculate_total_price(nights),
            }
        )

    @action(detail=True, methods=["post"])
    def book(self, request, pk=None):  # type: ignore
        serializer = BookingRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        booking = message_bus.handle_command(
            CreateBookingCommand(
                property_id=parse_lookup_id(pk, "Property"),
                user_id=request.user.pk,
                check_in=serializer.validated_data["checkIn"],
                check_out=serializer.validated_data["checkOut"],
                message=serializer.validated_data["message"],
            )
        )
        instance = Booking.objects.select_related("property", "user").get(pk=booking.id)
        return Response(
            BookingSerializer(instance, context=self.get_serializer_context()).data,
            status=status.HTTP_201_CREATED,
        )

    @action(detail=True, methods=["post"])
    def review(self, request, pk=None):  # type: ignore
        serializer = ReviewCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = message_bus.handle_command(
            AddReviewCommand(
                property_id=parse_lookup_id(pk, "Property"),
                user_id=request.user.pk,
                user_name=request.user.name,
                **serializer.validated_data,
            )
        )
        reviews = Review.objects.filter(property_id=result.property.id).select_related("user").order_by(
            "created_at", "id"
        )
        return Response(
            {
                "reviews": ReviewSerializer(reviews, many=True).data,
                "averageRating": result.property.average_rating,
                "totalReviews": result.property.total_reviews,
            },
            status=status.HTTP_201_CREATED,
        )

    @action(detail=True, methods=["post"])
    def rate(self, request, pk=None):  # type: ignore
        serializer = RatingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = message_bus.handle_command(
            RatePropertyCommand(
                property_id=parse_lookup_id(pk, "Property"),
                rating=serializer.validated_data["rating"],
            )
        )
        return Response({"success": True, "newRating": result.property.average_rating})

    @action(detail=True, methods=["post"])
    def favorite(self, request, pk=None):  # type: ignore
        is_favorite = message_bus.handle_command(
            ToggleFavoriteCommand(user_id=request.user.pk, property_id=parse_lookup_id(pk, "Property"))
        )
        return Response({"isFavorite": is_favorite})


class SystemDateView(APIView):
    """Server's current time, used by clients to validate stay dates."""

    permission_classes = [permissions.AllowAny]

    def get(self, request):  # type: ignore
        return Response({"currentDate": timezone.now().isoformat()})
