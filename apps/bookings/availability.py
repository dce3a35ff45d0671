"""
Availability Checker

Decides whether a room is free for a stay by asking the ledger for
overlapping active bookings. Intervals are half-open [check_in, check_out)
so a stay may start on the day another one ends.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

from shared.domain.errors import InvalidDateOrder, PastCheckIn

from .ledger import ReservationLedger

AVAILABLE_MESSAGE = "Room is available"
UNAVAILABLE_MESSAGE = "Room is not available for selected dates"


@dataclass(frozen=True)
class AvailabilityResult:
    is_available: bool
    message: str


def validate_stay_order(check_in: date, check_out: date) -> None:
    if check_out <= check_in:
        raise InvalidDateOrder()


def validate_new_stay(check_in: date, check_out: date, today: date) -> None:
    """Creation rules: no check-in before today, check-out after check-in."""
    if check_in < today:
        raise PastCheckIn()
    validate_stay_order(check_in, check_out)


class AvailabilityChecker:
    def __init__(self, ledger: ReservationLedger | None = None, catalog=None):
        self.ledger = ledger or ReservationLedger()
        self._catalog = catalog

    @property
    def catalog(self):
        if self._catalog is None:
            from apps.rooms.catalog import RoomCatalog

            self._catalog = RoomCatalog(ledger=self.ledger)
        return self._catalog

    def is_available(
        self,
        room_id: Any,
        check_in: date,
        check_out: date,
        *,
        exclude_booking_id: Any = None,
    ) -> bool:
        overlapping = self.ledger.find_overlapping(
            room_id,
            check_in,
            check_out,
            exclude_booking_id=exclude_booking_id,
        )
        return not overlapping.exists()

    def check(self, room_id: Any, check_in: date, check_out: date) -> AvailabilityResult:
        """Public availability query: room must exist, dates must be ordered."""
        room = self.catalog.find_by_id(room_id)
        validate_stay_order(check_in, check_out)
        available = self.is_available(room.pk, check_in, check_out)
        return AvailabilityResult(
            is_available=available,
            message=AVAILABLE_MESSAGE if available else UNAVAILABLE_MESSAGE,
        )
