"""FilterSet definitions for room listing."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Room


class RoomFilterSet(django_filters.FilterSet):
    """Room type, nightly price range and the administrative availability flag."""

    type = django_filters.ChoiceFilter(field_name="room_type", choices=Room.RoomType.choices)
    min_price = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="price", lookup_expr="lte")
    is_available = django_filters.BooleanFilter(field_name="is_available")

    class Meta:
        model = Room
        fields = ["type", "min_price", "max_price", "is_available"]
