"""
Booking Domain Events

Events that represent things that have happened in the booking domain.
They are published after successful transaction commits.
"""

from dataclasses import dataclass

from shared.domain.base import DomainEvent


@dataclass
class BookingCreated(DomainEvent):
    """
    Event: A new booking was created (status PENDING)

    Triggers:
    - Send booking confirmation email to the guest
    """
    booking_id: int
    room_id: int
    user_id: int


@dataclass
class BookingCancelled(DomainEvent):
    """
    Event: Booking was cancelled

    Triggers:
    - Send cancellation email to the guest
    """
    booking_id: int
    room_id: int
    old_status: str  # Status before cancellation

