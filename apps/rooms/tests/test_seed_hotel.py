"""Tests for the seed_hotel management command."""

from io import StringIO

import pytest
from django.core.management import call_command

from apps.rooms.models import Room
from apps.users.models import User


@pytest.mark.django_db
def test_seed_creates_accounts_and_rooms():
    call_command("seed_hotel", stdout=StringIO())

    assert Room.objects.count() == 8
    assert Room.objects.get(room_number="PH01").capacity == 6
    assert User.objects.get(email="admin@hotel.com").role == User.Role.ADMIN
    assert User.objects.get(email="manager@hotel.com").role == User.Role.MANAGER
    assert User.objects.get(email="john@example.com").check_password("user123")


@pytest.mark.django_db
def test_seed_is_repeatable():
    call_command("seed_hotel", stdout=StringIO())
    call_command("seed_hotel", stdout=StringIO())

    assert Room.objects.count() == 8
    assert User.objects.count() == 3


@pytest.mark.django_db
def test_flush_replaces_existing_catalogue():
    Room.objects.create(room_number="999", price=1, capacity=1)

    call_command("seed_hotel", "--flush", stdout=StringIO())

    assert not Room.objects.filter(room_number="999").exists()
    assert Room.objects.count() == 8
