"""
Booking Use Cases

Every write runs in one DjangoUnitOfWork:

1. Lock the room row (RoomCatalog.lock) so writers on the same room queue
2. Validate guests and dates before touching the ledger
3. Check availability against active bookings
4. Price the stay and write the ledger row
5. Collect events; they are published only after commit

A lock wait that exceeds the configured bound surfaces from the database
as OperationalError and is reported as RoomBusy. Other database errors
propagate unchanged.
"""

from __future__ import annotations

from collections.abc import Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date
from typing import Any

import structlog
from django.db import OperationalError  # type: ignore
from django.utils import timezone  # type: ignore

from apps.rooms.catalog import RoomCatalog
from apps.users.permissions import Actor, Capability, authorize, is_allowed
from shared.application.uow import DjangoUnitOfWork
from shared.infrastructure.db import is_lock_timeout
from shared.domain.errors import (
    CapacityExceeded,
    DateConflict,
    Forbidden,
    RoomBusy,
    ValidationFailed,
)

from .availability import AvailabilityChecker, validate_new_stay, validate_stay_order
from .domain.events import BookingCancelled, BookingCreated
from .domain.lifecycle import (
    INITIAL_STATUS,
    BookingStatus,
    ensure_cancellable,
    ensure_mutable,
    ensure_transition,
)
from .domain.pricing import calculate_total_price
from .ledger import ReservationLedger
from .models import Booking

logger = structlog.get_logger(__name__)

UPDATABLE_FIELDS = ("check_in_date", "check_out_date", "number_of_guests", "special_requests")

LIST_SCOPE_OWN = "own"
LIST_SCOPE_ALL = "all"


@dataclass
class CreateBookingCommand:
    """Input of a booking request, already parsed by the outer layer."""

    room_id: Any
    check_in_date: date
    check_out_date: date
    number_of_guests: int
    guest_name: str
    guest_email: str
    guest_phone: str
    special_requests: str = ""


@contextmanager
def _room_write(room_id: Any):
    """Unit of work for a per-room write; lock timeouts become RoomBusy."""
    try:
        with DjangoUnitOfWork() as uow:
            yield uow
    except OperationalError as exc:
        if not is_lock_timeout(exc):
            raise
        logger.warning("booking.room_busy", room_id=room_id, error=str(exc))
        raise RoomBusy() from exc


class BookingService:
    """Create, read, modify and cancel bookings on behalf of an actor."""

    def __init__(
        self,
        ledger: ReservationLedger | None = None,
        catalog: RoomCatalog | None = None,
        checker: AvailabilityChecker | None = None,
    ):
        self.ledger = ledger or ReservationLedger()
        self.catalog = catalog or RoomCatalog(ledger=self.ledger)
        self.checker = checker or AvailabilityChecker(ledger=self.ledger, catalog=self.catalog)

    # --- Create --------------------------------------------------------------

    def create_booking(
        self,
        actor: Actor,
        command: CreateBookingCommand,
        *,
        today: date | None = None,
    ) -> Booking:
        today = today or timezone.localdate()

        with _room_write(command.room_id) as uow:
            room = self.catalog.lock(command.room_id)

            if command.number_of_guests > room.capacity:
                raise CapacityExceeded(room.capacity)
            validate_new_stay(command.check_in_date, command.check_out_date, today)

            if not self.checker.is_available(room.pk, command.check_in_date, command.check_out_date):
                raise DateConflict()

            booking = self.ledger.insert(
                user_id=actor.user_id,
                room=room,
                check_in_date=command.check_in_date,
                check_out_date=command.check_out_date,
                number_of_guests=command.number_of_guests,
                total_price=calculate_total_price(
                    command.check_in_date, command.check_out_date, room.price
                ),
                status=INITIAL_STATUS,
                special_requests=command.special_requests or "",
                guest_name=command.guest_name,
                guest_email=command.guest_email,
                guest_phone=command.guest_phone,
            )
            uow.add_event(
                BookingCreated(booking_id=booking.pk, room_id=room.pk, user_id=actor.user_id)
            )

        logger.info(
            "booking.created",
            booking_id=booking.pk,
            room_id=room.pk,
            user_id=actor.user_id,
            nights=booking.nights,
            total_price=str(booking.total_price),
        )
        return booking

    # --- Read ----------------------------------------------------------------

    def list_bookings(self, actor: Actor, *, scope: str = LIST_SCOPE_OWN, status: str | None = None):
        if status and status not in BookingStatus.values:
            raise ValidationFailed(f"Invalid booking status: {status}")
        if scope == LIST_SCOPE_ALL:
            authorize(actor, Capability.LIST_ALL_BOOKINGS)
            return self.ledger.all(status=status)
        return self.ledger.for_user(actor.user_id, status=status)

    def get_booking(self, actor: Actor, booking_id: Any) -> Booking:
        booking = self.ledger.get(booking_id)
        authorize(actor, Capability.VIEW_BOOKING, owner_id=booking.user_id)
        return booking

    # --- Modify --------------------------------------------------------------

    def update_booking(self, actor: Actor, booking_id: Any, changes: Mapping[str, Any]) -> Booking:
        """
        Apply a partial update.

        Dates are re-checked for order and availability (the booking itself
        excluded) and the price is recomputed at the room's current rate.
        ``status`` is only accepted from actors allowed to change it, and only
        along the lifecycle table.
        """
        current = self.ledger.get(booking_id)
        authorize(actor, Capability.UPDATE_BOOKING, owner_id=current.user_id)

        target_status = changes.get("status")
        if target_status is not None and not is_allowed(actor, Capability.CHANGE_BOOKING_STATUS):
            raise Forbidden("Only managers and admins can change booking status")

        with _room_write(current.room_id) as uow:
            room = self.catalog.lock(current.room_id)
            booking = self.ledger.get(current.pk, for_update=True)
            ensure_mutable(booking.status)

            fields = {name: changes[name] for name in UPDATABLE_FIELDS if name in changes}

            if target_status is not None and target_status != booking.status:
                ensure_transition(booking.status, target_status)
                fields["status"] = target_status

            if "number_of_guests" in fields and fields["number_of_guests"] > room.capacity:
                raise CapacityExceeded(room.capacity)

            if "check_in_date" in fields or "check_out_date" in fields:
                check_in = fields.get("check_in_date", booking.check_in_date)
                check_out = fields.get("check_out_date", booking.check_out_date)
                validate_stay_order(check_in, check_out)
                if fields.get("status") != BookingStatus.CANCELLED and not self.checker.is_available(
                    room.pk, check_in, check_out, exclude_booking_id=booking.pk
                ):
                    raise DateConflict()
                fields["total_price"] = calculate_total_price(check_in, check_out, room.price)

            old_status = booking.status
            if fields:
                booking = self.ledger.update(booking, **fields)

            if fields.get("status") == BookingStatus.CANCELLED:
                uow.add_event(
                    BookingCancelled(booking_id=booking.pk, room_id=room.pk, old_status=old_status)
                )

        logger.info(
            "booking.updated",
            booking_id=booking.pk,
            actor_id=actor.user_id,
            fields=sorted(fields),
            status=booking.status,
        )
        return booking

    def cancel_booking(self, actor: Actor, booking_id: Any) -> Booking:
        current = self.ledger.get(booking_id)
        authorize(actor, Capability.CANCEL_BOOKING, owner_id=current.user_id)

        with _room_write(current.room_id) as uow:
            booking = self.ledger.get(current.pk, for_update=True)
            ensure_cancellable(booking.status)
            old_status = booking.status
            booking = self.ledger.update(booking, status=BookingStatus.CANCELLED)
            uow.add_event(
                BookingCancelled(
                    booking_id=booking.pk, room_id=booking.room_id, old_status=old_status
                )
            )

        logger.info(
            "booking.cancelled",
            booking_id=booking.pk,
            actor_id=actor.user_id,
            old_status=old_status,
        )
        return booking

    def delete_booking(self, actor: Actor, booking_id: Any) -> None:
        """Administrative hard delete; bypasses the lifecycle."""
        authorize(actor, Capability.DELETE_BOOKING)
        self.ledger.delete(booking_id)
        logger.info("booking.deleted", booking_id=booking_id, actor_id=actor.user_id)
