"""Serializers for the booking domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.rooms.models import Room

from .domain.lifecycle import BookingStatus
from .models import Booking
from .services import CreateBookingCommand


class RoomSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Room
        fields = ["id", "room_number", "room_type", "price", "capacity"]


class BookingUserSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    username = serializers.CharField()
    email = serializers.EmailField()


class BookingCreateSerializer(serializers.Serializer):
    """Guest booking request. Business rules are checked by BookingService."""

    room = serializers.IntegerField(min_value=1)
    check_in_date = serializers.DateField()
    check_out_date = serializers.DateField()
    number_of_guests = serializers.IntegerField(min_value=1)
    guest_name = serializers.CharField(max_length=255)
    guest_email = serializers.EmailField()
    guest_phone = serializers.CharField(max_length=32)
    special_requests = serializers.CharField(required=False, allow_blank=True, default="")

    def to_command(self) -> CreateBookingCommand:
        data = self.validated_data
        return CreateBookingCommand(
            room_id=data["room"],
            check_in_date=data["check_in_date"],
            check_out_date=data["check_out_date"],
            number_of_guests=data["number_of_guests"],
            guest_name=data["guest_name"],
            guest_email=data["guest_email"],
            guest_phone=data["guest_phone"],
            special_requests=data.get("special_requests", ""),
        )


class BookingUpdateSerializer(serializers.Serializer):
    check_in_date = serializers.DateField(required=False)
    check_out_date = serializers.DateField(required=False)
    number_of_guests = serializers.IntegerField(min_value=1, required=False)
    special_requests = serializers.CharField(required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=BookingStatus.choices, required=False)


class BookingStatusQuerySerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=BookingStatus.choices, required=False)


class BookingSerializer(serializers.ModelSerializer):
    """Booking detail with the booked room and the owning account."""

    room = RoomSummarySerializer(read_only=True)
    user = BookingUserSerializer(read_only=True)
    nights = serializers.IntegerField(read_only=True)

    class Meta:
        model = Booking
        fields = [
            "id",
            "room",
            "user",
            "check_in_date",
            "check_out_date",
            "nights",
            "number_of_guests",
            "total_price",
            "status",
            "special_requests",
            "guest_name",
            "guest_email",
            "guest_phone",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
