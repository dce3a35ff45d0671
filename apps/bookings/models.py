"""Booking models for the hotel booking service."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.value_objects import DateRange

from .domain.lifecycle import ACTIVE_STATUSES, INITIAL_STATUS, BookingStatus, is_terminal


class BookingQuerySet(models.QuerySet):
    def active(self):
        return self.filter(status__in=ACTIVE_STATUSES)

    def overlapping(self, check_in, check_out):
        """Half-open [check_in, check_out): touching stays do not overlap."""
        return self.filter(check_in_date__lt=check_out, check_out_date__gt=check_in)


class Booking(models.Model):
    """A guest's reservation of one room for a date range."""

    Status = BookingStatus

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    room = models.ForeignKey(
        "rooms.Room",
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    check_in_date = models.DateField()
    check_out_date = models.DateField()
    number_of_guests = models.PositiveSmallIntegerField(validators=[MinValueValidator(1)])
    total_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text=_("Nights multiplied by the room's nightly rate."),
    )
    status = models.CharField(
        max_length=20,
        choices=BookingStatus.choices,
        default=INITIAL_STATUS,
    )
    special_requests = models.TextField(blank=True)
    guest_name = models.CharField(max_length=255)
    guest_email = models.EmailField()
    guest_phone = models.CharField(max_length=32)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = BookingQuerySet.as_manager()

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(check_out_date__gt=models.F("check_in_date")),
                name="booking_valid_dates",
            ),
            models.CheckConstraint(
                condition=models.Q(number_of_guests__gte=1),
                name="booking_guests_positive",
            ),
        ]
        indexes = [
            models.Index(
                fields=["room", "check_in_date", "check_out_date"],
                name="booking_room_dates_idx",
            ),
            models.Index(fields=["user", "-created_at"], name="booking_user_created_idx"),
            models.Index(fields=["status"], name="booking_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} for room {self.room_id} ({self.status})"

    @property
    def dates(self) -> DateRange:
        return DateRange(self.check_in_date, self.check_out_date)

    @property
    def nights(self) -> int:
        return self.dates.nights

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES

    @property
    def is_terminal(self) -> bool:
        return is_terminal(self.status)
