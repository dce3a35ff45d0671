"""Serializers for the room catalogue."""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers  # type: ignore

from .models import Room


class RoomSerializer(serializers.ModelSerializer):
    class Meta:
        model = Room
        fields = [
            "id",
            "room_number",
            "room_type",
            "price",
            "capacity",
            "description",
            "amenities",
            "images",
            "is_available",
            "floor",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]


class RoomWriteSerializer(serializers.Serializer):
    """Input shape for create/update; uniqueness is checked by the catalog."""

    room_number = serializers.CharField(max_length=20, trim_whitespace=True)
    # Left out on update keeps the stored type; the model default applies on create
    room_type = serializers.ChoiceField(choices=Room.RoomType.choices, required=False)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0"))
    capacity = serializers.IntegerField(min_value=1)
    description = serializers.CharField(required=False, allow_blank=True)
    amenities = serializers.ListField(child=serializers.CharField(), required=False)
    images = serializers.ListField(child=serializers.URLField(), required=False)
    is_available = serializers.BooleanField(required=False)
    floor = serializers.IntegerField(min_value=1, required=False, allow_null=True)


class AvailabilityQuerySerializer(serializers.Serializer):
    check_in_date = serializers.DateField()
    check_out_date = serializers.DateField()


class AvailabilitySerializer(serializers.Serializer):
    is_available = serializers.BooleanField()
    message = serializers.CharField()
