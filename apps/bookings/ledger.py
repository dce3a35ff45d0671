"""
Reservation Ledger

The set of bookings per room and the source of truth for occupancy.
Callers that check for overlaps and then write must do both inside one
transaction after locking the room (see RoomCatalog.lock); the ledger
itself only reads and writes rows.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from typing import Any

from shared.domain.errors import BookingNotFound

from .domain.lifecycle import ACTIVE_STATUSES
from .models import Booking


class ReservationLedger:
    """Booking persistence and occupancy queries."""

    def get(self, booking_id: Any, *, for_update: bool = False) -> Booking:
        qs = Booking.objects.select_related("room", "user")
        if for_update:
            qs = qs.select_for_update(of=("self",))
        try:
            return qs.get(pk=booking_id)
        except (Booking.DoesNotExist, ValueError, TypeError):
            raise BookingNotFound()

    def find_overlapping(
        self,
        room_id: Any,
        check_in: date,
        check_out: date,
        statuses: Iterable[str] = ACTIVE_STATUSES,
        *,
        exclude_booking_id: Any = None,
    ):
        qs = Booking.objects.filter(room_id=room_id, status__in=list(statuses)).overlapping(
            check_in, check_out
        )
        if exclude_booking_id is not None:
            qs = qs.exclude(pk=exclude_booking_id)
        return qs

    def has_active_bookings(self, room_id: Any, *, after: date) -> bool:
        """Active bookings whose check-out is still ahead of ``after``."""
        return Booking.objects.active().filter(room_id=room_id, check_out_date__gt=after).exists()

    def for_user(self, user_id: Any, *, status: str | None = None):
        qs = Booking.objects.select_related("room").filter(user_id=user_id)
        if status:
            qs = qs.filter(status=status)
        return qs.order_by("-created_at")

    def all(self, *, status: str | None = None):
        qs = Booking.objects.select_related("room", "user")
        if status:
            qs = qs.filter(status=status)
        return qs.order_by("-created_at")

    def insert(self, **fields: Any) -> Booking:
        booking = Booking(**fields)
        booking.save(force_insert=True)
        return booking

    def update(self, booking: Booking | Any, **fields: Any) -> Booking:
        """Write the given fields; accepts a loaded booking or its id."""
        if not isinstance(booking, Booking):
            booking = self.get(booking)
        for name, value in fields.items():
            setattr(booking, name, value)
        booking.save(update_fields=[*fields, "updated_at"])
        return booking

    def delete(self, booking_id: Any) -> None:
        try:
            deleted, _ = Booking.objects.filter(pk=booking_id).delete()
        except (ValueError, TypeError):
            raise BookingNotFound()
        if not deleted:
            raise BookingNotFound()
