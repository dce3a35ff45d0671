"""
Event handlers wiring domain events to notification tasks.

Handlers run after the booking transaction has committed and only
enqueue work; delivery happens in Celery.
"""

from __future__ import annotations

import logging

from apps.bookings.domain.events import BookingCancelled, BookingCreated
from apps.users.services import UserRegistered
from shared.application.message_bus import MessageBus, message_bus

from . import tasks

logger = logging.getLogger(__name__)


def on_booking_created(event: BookingCreated) -> None:
    tasks.send_booking_confirmation.delay(event.booking_id)


def on_booking_cancelled(event: BookingCancelled) -> None:
    tasks.send_booking_cancellation.delay(event.booking_id)


def on_user_registered(event: UserRegistered) -> None:
    tasks.send_welcome.delay(event.user_id)


EVENT_HANDLERS = (
    (BookingCreated, on_booking_created),
    (BookingCancelled, on_booking_cancelled),
    (UserRegistered, on_user_registered),
)


def register_handlers(bus: MessageBus = message_bus) -> None:
    for event_type, handler in EVENT_HANDLERS:
        bus.register_event_handler(event_type, handler)
    logger.debug(f"Registered {len(EVENT_HANDLERS)} notification handlers")
