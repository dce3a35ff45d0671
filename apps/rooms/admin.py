"""Admin registration for rooms."""

from __future__ import annotations

from django.contrib import admin

from .models import Room


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = (
        "room_number",
        "room_type",
        "price",
        "capacity",
        "floor",
        "is_available",
        "updated_at",
    )
    list_filter = ("room_type", "is_available", "floor")
    search_fields = ("room_number", "description")
    readonly_fields = ("created_at", "updated_at")
