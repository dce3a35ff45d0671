"""Service-level tests for booking use cases and availability."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal
from unittest import mock

import pytest
from django.db import OperationalError

from apps.bookings.availability import (
    AVAILABLE_MESSAGE,
    UNAVAILABLE_MESSAGE,
    AvailabilityChecker,
    validate_new_stay,
)
from apps.bookings.ledger import ReservationLedger
from apps.bookings.models import Booking
from apps.bookings.services import (
    LIST_SCOPE_ALL,
    BookingService,
    CreateBookingCommand,
)
from apps.rooms.catalog import RoomCatalog
from apps.rooms.models import Room
from apps.users.models import User
from apps.users.permissions import Actor
from shared.domain.errors import (
    BookingNotFound,
    CapacityExceeded,
    DateConflict,
    Forbidden,
    InvalidDateOrder,
    PastCheckIn,
    RoomBusy,
    RoomNotFound,
    ValidationFailed,
)

TODAY = date(2024, 5, 1)
JUNE_1 = date(2024, 6, 1)


def june(day: int) -> date:
    return JUNE_1 + timedelta(days=day - 1)


@pytest.fixture
def guest():
    return User.objects.create_user(email="guest@example.com", username="guest", password="pass123")


@pytest.fixture
def manager():
    return User.objects.create_user(
        email="manager@example.com", username="manager", password="pass123", role=User.Role.MANAGER
    )


@pytest.fixture
def room():
    return Room.objects.create(room_number="101", price=Decimal("100.00"), capacity=2)


@pytest.fixture
def service():
    return BookingService()


def command(room, check_in, check_out, guests=2):
    return CreateBookingCommand(
        room_id=room.pk,
        check_in_date=check_in,
        check_out_date=check_out,
        number_of_guests=guests,
        guest_name="Jane Guest",
        guest_email="jane@example.com",
        guest_phone="+15550000000",
    )


def book(service, user, room, check_in, check_out, guests=2):
    return service.create_booking(
        Actor.from_user(user), command(room, check_in, check_out, guests), today=TODAY
    )


# ===== Availability =====

def test_validate_new_stay_order_of_checks():
    with pytest.raises(PastCheckIn):
        validate_new_stay(date(2024, 4, 30), date(2024, 4, 29), TODAY)
    with pytest.raises(InvalidDateOrder):
        validate_new_stay(TODAY, TODAY, TODAY)
    validate_new_stay(TODAY, TODAY + timedelta(days=1), TODAY)


@pytest.mark.django_db
def test_check_reports_reason(service, guest, room):
    book(service, guest, room, june(1), june(3))
    checker = AvailabilityChecker()

    busy = checker.check(room.pk, june(2), june(4))
    free = checker.check(room.pk, june(3), june(5))

    assert (busy.is_available, busy.message) == (False, UNAVAILABLE_MESSAGE)
    assert (free.is_available, free.message) == (True, AVAILABLE_MESSAGE)


@pytest.mark.django_db
def test_check_requires_existing_room_and_ordered_dates(room):
    checker = AvailabilityChecker()

    with pytest.raises(RoomNotFound):
        checker.check(999999, june(1), june(2))
    with pytest.raises(InvalidDateOrder):
        checker.check(room.pk, june(2), june(1))


@pytest.mark.django_db
def test_cancelled_and_completed_bookings_do_not_block(service, guest, room):
    first = book(service, guest, room, june(1), june(3))
    Booking.objects.filter(pk=first.pk).update(status=Booking.Status.COMPLETED)

    assert AvailabilityChecker().is_available(room.pk, june(1), june(3))


@pytest.mark.django_db
def test_booking_does_not_block_itself(service, guest, room):
    booking = book(service, guest, room, june(1), june(3))
    checker = AvailabilityChecker()

    assert not checker.is_available(room.pk, june(2), june(4))
    assert checker.is_available(room.pk, june(2), june(4), exclude_booking_id=booking.pk)


# ===== Create =====

@pytest.mark.django_db
def test_create_validates_before_writing(service, guest, room):
    missing_room = CreateBookingCommand(
        room_id=999999,
        check_in_date=june(1),
        check_out_date=june(2),
        number_of_guests=1,
        guest_name="Jane Guest",
        guest_email="jane@example.com",
        guest_phone="+15550000000",
    )
    with pytest.raises(RoomNotFound):
        service.create_booking(Actor.from_user(guest), missing_room, today=TODAY)
    with pytest.raises(CapacityExceeded):
        book(service, guest, room, june(1), june(2), guests=3)
    with pytest.raises(PastCheckIn):
        book(service, guest, room, TODAY - timedelta(days=1), june(2))
    with pytest.raises(InvalidDateOrder):
        book(service, guest, room, june(2), june(1))

    assert not Booking.objects.exists()


@pytest.mark.django_db
def test_capacity_is_checked_before_dates(service, guest, room):
    with pytest.raises(CapacityExceeded):
        book(service, guest, room, june(2), june(1), guests=5)


@pytest.mark.django_db
def test_check_in_today_is_allowed(service, guest, room):
    booking = book(service, guest, room, TODAY, TODAY + timedelta(days=1))

    assert booking.status == Booking.Status.PENDING
    assert booking.total_price == Decimal("100.00")


@pytest.mark.django_db
def test_overlap_rejected_for_pending_and_confirmed(service, guest, manager, room):
    first = book(service, guest, room, june(1), june(5))
    service.update_booking(Actor.from_user(manager), first.pk, {"status": "confirmed"})

    with pytest.raises(DateConflict):
        book(service, guest, room, june(4), june(6))


@pytest.mark.django_db
def test_unavailable_flag_does_not_block_booking(service, guest, room):
    Room.objects.filter(pk=room.pk).update(is_available=False)

    booking = book(service, guest, room, june(1), june(2))

    assert booking.pk is not None


@pytest.mark.django_db
def test_lock_timeout_surfaces_as_retryable_room_busy(service, guest, room):
    with mock.patch.object(
        service.catalog, "lock", side_effect=OperationalError("database is locked")
    ):
        with pytest.raises(RoomBusy) as exc_info:
            book(service, guest, room, june(1), june(2))

    assert exc_info.value.retryable
    assert not Booking.objects.exists()


@pytest.mark.django_db
def test_other_database_errors_are_not_reported_as_busy(service, guest, room):
    with mock.patch.object(
        service.catalog, "lock", side_effect=OperationalError("no such table: rooms_room")
    ):
        with pytest.raises(OperationalError):
            book(service, guest, room, june(1), june(2))


@pytest.mark.django_db
def test_create_and_update_take_the_room_lock(service, guest, room):
    with mock.patch.object(service.catalog, "lock", wraps=service.catalog.lock) as lock:
        booking = book(service, guest, room, june(1), june(3))
        lock.assert_called_once_with(room.pk)

        lock.reset_mock()
        service.update_booking(Actor.from_user(guest), booking.pk, {"check_out_date": june(4)})
        lock.assert_called_once_with(room.pk)


@pytest.mark.django_db
def test_room_delete_takes_the_room_lock(room):
    catalog = RoomCatalog()

    with mock.patch.object(catalog, "lock", wraps=catalog.lock) as lock:
        catalog.delete(room.pk, today=TODAY)

    lock.assert_called_once_with(room.pk)


# ===== Read =====

@pytest.mark.django_db
def test_list_scopes(service, guest, manager, room):
    other = User.objects.create_user(email="o@example.com", username="other", password="pass123")
    book(service, guest, room, june(1), june(2))
    book(service, other, room, june(3), june(4))

    assert service.list_bookings(Actor.from_user(guest)).count() == 1
    with pytest.raises(Forbidden):
        service.list_bookings(Actor.from_user(guest), scope=LIST_SCOPE_ALL)
    assert service.list_bookings(Actor.from_user(manager), scope=LIST_SCOPE_ALL).count() == 2
    with pytest.raises(ValidationFailed):
        service.list_bookings(Actor.from_user(manager), scope=LIST_SCOPE_ALL, status="archived")


@pytest.mark.django_db
def test_get_booking_not_found(service, guest):
    with pytest.raises(BookingNotFound):
        service.get_booking(Actor.from_user(guest), 424242)
    with pytest.raises(BookingNotFound):
        service.get_booking(Actor.from_user(guest), "not-a-number")


# ===== Update / cancel / delete =====

@pytest.mark.django_db
def test_update_keeps_price_in_sync_with_current_rate(service, guest, room):
    booking = book(service, guest, room, june(1), june(3))
    Room.objects.filter(pk=room.pk).update(price=Decimal("150.00"))

    updated = service.update_booking(
        Actor.from_user(guest), booking.pk, {"check_out_date": june(4)}
    )

    assert updated.total_price == Decimal("450.00")
    assert ReservationLedger().get(booking.pk).total_price == Decimal("450.00")


@pytest.mark.django_db
def test_update_without_date_change_keeps_price(service, guest, room):
    booking = book(service, guest, room, june(1), june(3))
    Room.objects.filter(pk=room.pk).update(price=Decimal("999.00"))

    updated = service.update_booking(
        Actor.from_user(guest), booking.pk, {"special_requests": "Late arrival"}
    )

    assert updated.total_price == Decimal("200.00")
    assert updated.special_requests == "Late arrival"


@pytest.mark.django_db
def test_capacity_reduction_is_not_retroactive(service, guest, room):
    booking = book(service, guest, room, june(1), june(3), guests=2)
    Room.objects.filter(pk=room.pk).update(capacity=1)

    updated = service.update_booking(
        Actor.from_user(guest), booking.pk, {"special_requests": "Quiet room"}
    )

    assert updated.number_of_guests == 2


@pytest.mark.django_db
def test_cancel_then_rebook(service, guest, room):
    booking = book(service, guest, room, june(1), june(3))

    cancelled = service.cancel_booking(Actor.from_user(guest), booking.pk)
    again = book(service, guest, room, june(1), june(3))

    assert cancelled.status == Booking.Status.CANCELLED
    assert again.pk != booking.pk


@pytest.mark.django_db
def test_delete_bypasses_lifecycle_and_requires_admin(service, guest, manager, room):
    admin = User.objects.create_superuser(email="root@example.com", username="root", password="pass123")
    booking = book(service, guest, room, june(1), june(3))
    Booking.objects.filter(pk=booking.pk).update(status=Booking.Status.CANCELLED)

    with pytest.raises(Forbidden):
        service.delete_booking(Actor.from_user(manager), booking.pk)
    service.delete_booking(Actor.from_user(admin), booking.pk)

    assert not Booking.objects.filter(pk=booking.pk).exists()
    with pytest.raises(BookingNotFound):
        service.delete_booking(Actor.from_user(admin), booking.pk)
