"""
Booking Lifecycle

Finite state machine for booking statuses:

- PENDING -> CONFIRMED (staff confirmed the reservation)
- PENDING -> CANCELLED (guest or staff cancelled)
- CONFIRMED -> CANCELLED
- CONFIRMED -> COMPLETED (guest checked out)

CANCELLED and COMPLETED are terminal: no transitions and no
changes to dates, guests or price. Hard deletion is an administrative
action outside this machine.
"""

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.errors import (
    BookingAlreadyCancelled,
    BookingTerminal,
    IllegalStatusTransition,
)


class BookingStatus(models.TextChoices):
    PENDING = "pending", _("Pending")
    CONFIRMED = "confirmed", _("Confirmed")
    CANCELLED = "cancelled", _("Cancelled")
    COMPLETED = "completed", _("Completed")


INITIAL_STATUS = BookingStatus.PENDING

ALLOWED_TRANSITIONS: dict[str, frozenset[str]] = {
    BookingStatus.PENDING: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.CANCELLED, BookingStatus.COMPLETED}),
    BookingStatus.CANCELLED: frozenset(),
    BookingStatus.COMPLETED: frozenset(),
}

# Statuses that occupy the room's calendar
ACTIVE_STATUSES = frozenset({BookingStatus.PENDING, BookingStatus.CONFIRMED})
TERMINAL_STATUSES = frozenset({BookingStatus.CANCELLED, BookingStatus.COMPLETED})


def is_terminal(status: str) -> bool:
    return status in TERMINAL_STATUSES


def can_transition(current: str, target: str) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


def ensure_transition(current: str, target: str) -> None:
    """Raise IllegalStatusTransition unless current -> target is in the table."""
    if not can_transition(current, target):
        raise IllegalStatusTransition(current=str(current), target=str(target))


def ensure_mutable(status: str) -> None:
    """Dates, guests and requests may only change on active bookings."""
    if is_terminal(status):
        raise BookingTerminal(status=str(status), action="update")


def ensure_cancellable(status: str) -> None:
    """
    Cancelling twice is an error, not a no-op.
    """
    if status == BookingStatus.CANCELLED:
        raise BookingAlreadyCancelled()
    if status == BookingStatus.COMPLETED:
        raise BookingTerminal(status=str(status), action="cancel")
    ensure_transition(status, BookingStatus.CANCELLED)
