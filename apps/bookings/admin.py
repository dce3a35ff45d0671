"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "room",
        "user",
        "guest_name",
        "status",
        "check_in_date",
        "check_out_date",
        "total_price",
        "created_at",
    )
    list_filter = ("status", "check_in_date", "check_out_date", "room__room_type")
    search_fields = ("guest_name", "guest_email", "room__room_number", "user__email")
    readonly_fields = (
        "status",
        "total_price",
        "created_at",
        "updated_at",
    )
