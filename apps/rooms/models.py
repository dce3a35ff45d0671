"""Room catalogue models.

A room's `is_available` flag is an administrative switch (maintenance,
renovation). Date based occupancy lives in the bookings ledger and is
never stored on the room.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Room(models.Model):
    """A bookable hotel room."""

    class RoomType(models.TextChoices):
        SINGLE = "Single", _("Single")
        DOUBLE = "Double", _("Double")
        SUITE = "Suite", _("Suite")
        DELUXE = "Deluxe", _("Deluxe")
        PRESIDENTIAL = "Presidential", _("Presidential")

    room_number = models.CharField(max_length=20, unique=True)
    room_type = models.CharField(
        max_length=20,
        choices=RoomType.choices,
        default=RoomType.SINGLE,
    )
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text=_("Nightly rate."),
    )
    capacity = models.PositiveSmallIntegerField(validators=[MinValueValidator(1)])
    description = models.TextField(blank=True)
    amenities = models.JSONField(default=list, blank=True)
    images = models.JSONField(default=list, blank=True)
    is_available = models.BooleanField(default=True)
    floor = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(1)],
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Room")
        verbose_name_plural = _("Rooms")
        ordering = ["room_number"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="room_price_non_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(capacity__gte=1),
                name="room_capacity_positive",
            ),
        ]
        indexes = [
            models.Index(fields=["room_type", "price"], name="room_type_price_idx"),
        ]

    def __str__(self) -> str:
        return f"Room {self.room_number} ({self.room_type})"
