"""
Room Catalog

Reads and administrative writes of rooms. The catalog is also the
per-room serialization point for booking writes: ``lock`` re-reads the
room row with SELECT ... FOR UPDATE so concurrent check-then-write
sequences on the same room queue behind each other.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any

import structlog
from django.db import IntegrityError, OperationalError, transaction  # type: ignore
from django.utils import timezone  # type: ignore

from shared.domain.errors import (
    DuplicateRoomNumber,
    RoomBusy,
    RoomHasActiveBookings,
    RoomNotFound,
    ValidationFailed,
)
from shared.infrastructure.db import is_lock_timeout

from .filters import RoomFilterSet
from .models import Room

logger = structlog.get_logger(__name__)

WRITABLE_FIELDS = (
    "room_number",
    "room_type",
    "price",
    "capacity",
    "description",
    "amenities",
    "images",
    "is_available",
    "floor",
)


class RoomCatalog:
    """Room lookups, filtering and guarded administrative mutations."""

    def __init__(self, ledger=None):
        self._ledger = ledger

    @property
    def ledger(self):
        if self._ledger is None:
            from apps.bookings.ledger import ReservationLedger  # local import to avoid circular

            self._ledger = ReservationLedger()
        return self._ledger

    # --- Reads ---------------------------------------------------------------

    def find_by_id(self, room_id: Any) -> Room:
        try:
            return Room.objects.get(pk=room_id)
        except (Room.DoesNotExist, ValueError, TypeError):
            raise RoomNotFound()

    def lock(self, room_id: Any) -> Room:
        """Load the room under a row lock; call inside a transaction."""

        if not transaction.get_connection().in_atomic_block:
            raise RuntimeError("RoomCatalog.lock() must run inside transaction.atomic()")
        try:
            return Room.objects.select_for_update().get(pk=room_id)
        except (Room.DoesNotExist, ValueError, TypeError):
            raise RoomNotFound()

    def list(self, filters: Mapping[str, Any] | None = None):
        filterset = RoomFilterSet(filters or {}, queryset=Room.objects.all())
        if not filterset.is_valid():
            raise ValidationFailed(f"Invalid room filters: {dict(filterset.errors)}")
        return filterset.qs

    # --- Writes --------------------------------------------------------------

    def create(self, attrs: Mapping[str, Any]) -> Room:
        fields = self._clean(attrs, creating=True)
        if Room.objects.filter(room_number=fields["room_number"]).exists():
            raise DuplicateRoomNumber(fields["room_number"])
        try:
            with transaction.atomic():
                room = Room.objects.create(**fields)
        except IntegrityError:
            raise DuplicateRoomNumber(fields["room_number"])
        logger.info("room.created", room_id=room.pk, room_number=room.room_number)
        return room

    def update(self, room_id: Any, attrs: Mapping[str, Any]) -> Room:
        room = self.find_by_id(room_id)
        fields = self._clean(attrs, creating=False)
        number = fields.get("room_number")
        if number and Room.objects.filter(room_number=number).exclude(pk=room.pk).exists():
            raise DuplicateRoomNumber(number)

        for name, value in fields.items():
            setattr(room, name, value)
        try:
            with transaction.atomic():
                room.save()
        except IntegrityError:
            raise DuplicateRoomNumber(room.room_number)
        logger.info("room.updated", room_id=room.pk, fields=sorted(fields))
        return room

    def delete(self, room_id: Any, *, today: date | None = None) -> None:
        """
        Delete a room unless it still has active bookings ahead.

        The guard runs under the room lock, so a booking write on the same
        room either commits first and is seen, or waits and then finds the
        room gone.
        """

        today = today or timezone.localdate()
        try:
            with transaction.atomic():
                room = self.lock(room_id)
                if self.ledger.has_active_bookings(room.pk, after=today):
                    raise RoomHasActiveBookings()
                room.delete()
        except OperationalError as exc:
            if not is_lock_timeout(exc):
                raise
            logger.warning("room.busy", room_id=room_id, error=str(exc))
            raise RoomBusy() from exc
        logger.info("room.deleted", room_id=room_id)

    # --- Helpers -------------------------------------------------------------

    @staticmethod
    def _clean(attrs: Mapping[str, Any], *, creating: bool) -> dict[str, Any]:
        fields = {name: attrs[name] for name in WRITABLE_FIELDS if name in attrs}

        if "room_number" in fields or creating:
            number = str(fields.get("room_number") or "").strip()
            if not number:
                raise ValidationFailed("Room number is required")
            fields["room_number"] = number

        if "price" in fields or creating:
            try:
                price = Decimal(str(fields.get("price")))
            except (InvalidOperation, ValueError):
                raise ValidationFailed("Price must be a number")
            if not price.is_finite() or price < 0:
                raise ValidationFailed("Price cannot be negative")
            fields["price"] = price

        if "capacity" in fields or creating:
            capacity = fields.get("capacity")
            if not isinstance(capacity, int) or isinstance(capacity, bool) or capacity < 1:
                raise ValidationFailed("Capacity must be at least 1")

        if "room_type" in fields and fields["room_type"] not in Room.RoomType.values:
            raise ValidationFailed(f"Invalid room type: {fields['room_type']}")

        if fields.get("floor") is not None and fields["floor"] < 1:
            raise ValidationFailed("Floor must be at least 1")

        return fields
