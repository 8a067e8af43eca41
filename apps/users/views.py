"""User API views."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.properties.models import Property
from apps.properties.serializers import IMAGES_WITHOUT_DATA, PropertySummarySerializer

from .serializers import UserSerializer


class ProfileView(APIView):
    """Current user together with the listings published under their email."""

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):  # type: ignore
        user = request.user
        properties = Property.objects.filter(email__iexact=user.email).prefetch_related(IMAGES_WITHOUT_DATA)
        return Response(
            {
                "user": UserSerializer(user).data,
                "properties": PropertySummarySerializer(
                    properties, many=True, context={"request": request}
                ).data,
            }
        )
