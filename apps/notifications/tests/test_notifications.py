"""Tests for notification delivery and handler wiring."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from smtplib import SMTPException
from unittest import mock

import pytest
from django.core import mail

from apps.bookings.domain.events import BookingCancelled, BookingCreated
from apps.bookings.models import Booking
from apps.notifications import handlers, services, tasks
from apps.rooms.models import Room
from apps.users.models import User
from apps.users.services import UserRegistered
from shared.application.message_bus import MessageBus, message_bus
from shared.domain.errors import NotificationDeliveryError


@pytest.fixture
def booking(db):
    user = User.objects.create_user(email="owner@example.com", username="owner", password="pass123")
    room = Room.objects.create(room_number="301", room_type=Room.RoomType.SUITE, price=Decimal("200"), capacity=3)
    return Booking.objects.create(
        user=user,
        room=room,
        check_in_date=date(2030, 6, 1),
        check_out_date=date(2030, 6, 3),
        number_of_guests=2,
        total_price=Decimal("400.00"),
        special_requests="Extra pillows",
        guest_name="Jane Guest",
        guest_email="jane@example.com",
        guest_phone="+15550000000",
    )


def test_handlers_registered_on_startup():
    assert handlers.on_booking_created in message_bus.handlers_for(BookingCreated)
    assert handlers.on_booking_cancelled in message_bus.handlers_for(BookingCancelled)
    assert handlers.on_user_registered in message_bus.handlers_for(UserRegistered)


def test_register_handlers_is_idempotent():
    bus = MessageBus()

    handlers.register_handlers(bus)
    handlers.register_handlers(bus)

    assert bus.handlers_for(BookingCreated) == [handlers.on_booking_created]


def test_handlers_enqueue_tasks():
    with mock.patch.object(tasks.send_booking_confirmation, "delay") as delay:
        handlers.on_booking_created(BookingCreated(booking_id=5, room_id=1, user_id=2))

    delay.assert_called_once_with(5)


def test_confirmation_goes_to_guest_snapshot(booking):
    assert tasks.send_booking_confirmation(booking.pk) is True

    message = mail.outbox[0]
    assert message.to == ["jane@example.com"]
    assert "Jane Guest" in message.body
    assert "400.00" in message.body
    assert "Extra pillows" in message.body


def test_cancellation_email(booking):
    assert tasks.send_booking_cancellation(booking.pk) is True

    assert "cancelled" in mail.outbox[0].body


def test_welcome_email(db):
    user = User.objects.create_user(email="new@example.com", username="newbie", password="pass123")

    assert tasks.send_welcome(user.pk) is True

    assert mail.outbox[0].to == ["new@example.com"]
    assert "newbie" in mail.outbox[0].body


def test_missing_records_are_logged_not_raised(db):
    assert tasks.send_booking_confirmation(424242) is False
    assert tasks.send_welcome(424242) is False


def test_delivery_failure_raises_domain_error(booking):
    with mock.patch.object(services, "send_mail", side_effect=SMTPException("down")):
        with pytest.raises(NotificationDeliveryError):
            services.send_booking_confirmation_email(booking)


def test_task_swallows_delivery_failure(booking):
    with mock.patch.object(services, "send_mail", side_effect=SMTPException("down")):
        assert tasks.send_booking_cancellation(booking.pk) is False

    assert mail.outbox == []
