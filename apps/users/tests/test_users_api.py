"""API tests for profile and user administration endpoints."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.rooms.models import Room
from apps.users.models import User


class UserAPITests(APITestCase):
    def setUp(self) -> None:
        self.guest = User.objects.create_user(email="guest@example.com", username="guest", password="pass123")
        self.manager = User.objects.create_user(
            email="manager@example.com", username="manager", password="pass123", role=User.Role.MANAGER
        )
        self.admin = User.objects.create_user(
            email="admin@example.com", username="admin", password="pass123", role=User.Role.ADMIN
        )

    def test_profile_get_and_update(self) -> None:
        self.client.force_authenticate(self.guest)
        url = reverse("user-profile")

        current = self.client.get(url)
        updated = self.client.patch(
            url, {"first_name": "Gina", "phone_number": "+15551234567"}, format="json"
        )

        self.assertEqual(current.data["email"], "guest@example.com")
        self.assertEqual(updated.status_code, status.HTTP_200_OK, updated.data)
        self.guest.refresh_from_db()
        self.assertEqual(self.guest.first_name, "Gina")
        self.assertEqual(self.guest.phone_number, "+15551234567")

    def test_profile_cannot_change_role_or_steal_email(self) -> None:
        self.client.force_authenticate(self.guest)
        url = reverse("user-profile")

        self.client.patch(url, {"role": "admin"}, format="json")
        taken = self.client.put(url, {"email": "ADMIN@example.com"}, format="json")

        self.guest.refresh_from_db()
        self.assertEqual(self.guest.role, User.Role.USER)
        self.assertEqual(taken.status_code, status.HTTP_400_BAD_REQUEST)

    def test_profile_requires_login(self) -> None:
        self.assertEqual(self.client.get(reverse("user-profile")).status_code, status.HTTP_401_UNAUTHORIZED)

    def test_only_admin_lists_users(self) -> None:
        url = reverse("user-list")

        self.client.force_authenticate(self.manager)
        self.assertEqual(self.client.get(url).status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(self.admin)
        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["count"], 3)

    def test_admin_changes_role(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.put(
            reverse("user-role", args=[self.guest.id]), {"role": "manager"}, format="json"
        )
        invalid = self.client.put(
            reverse("user-role", args=[self.guest.id]), {"role": "owner"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["role"], User.Role.MANAGER)
        self.assertEqual(invalid.status_code, status.HTTP_400_BAD_REQUEST)

    def test_admin_deletes_user_and_their_bookings(self) -> None:
        room = Room.objects.create(room_number="101", price=Decimal("80.00"), capacity=1)
        start = date.today() + timedelta(days=5)
        Booking.objects.create(
            user=self.guest,
            room=room,
            check_in_date=start,
            check_out_date=start + timedelta(days=1),
            number_of_guests=1,
            total_price=Decimal("80.00"),
            guest_name="Guest",
            guest_email="guest@example.com",
            guest_phone="+15550000000",
        )
        self.client.force_authenticate(self.admin)

        response = self.client.delete(reverse("user-detail", args=[self.guest.id]))
        missing = self.client.delete(reverse("user-detail", args=[self.guest.id]))

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Booking.objects.exists())
        self.assertEqual(missing.status_code, status.HTTP_404_NOT_FOUND)

    def test_manager_cannot_delete_users(self) -> None:
        self.client.force_authenticate(self.manager)

        response = self.client.delete(reverse("user-detail", args=[self.guest.id]))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
