"""FilterSet definitions for properties search and listing."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Property


class PropertyFilterSet(django_filters.FilterSet):
    """
    Listing search

    ``location`` is a case-insensitive substring match and ``type`` a
    case-insensitive exact match, the same rule as
    ``Property.matches_search``. Blank parameters are ignored.
    """

    location = django_filters.CharFilter(method="filter_location")
    type = django_filters.CharFilter(method="filter_type")
    status = django_filters.ChoiceFilter(choices=Property.Status.choices)
    price_min = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    price_max = django_filters.NumberFilter(field_name="price", lookup_expr="lte")

    class Meta:
        model = Property
        fields = ["location", "type", "status"]

    def filter_location(self, queryset, name, value):  # type: ignore
        value = value.strip()
        return queryset.filter(location__icontains=value) if value else queryset

    def filter_type(self, queryset, name, value):  # type: ignore
        value = value.strip()
        return queryset.filter(type__iexact=value) if value else queryset
