"""API tests for authentication endpoints."""

from __future__ import annotations

from django.core import mail
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.users.models import User


class AuthAPITests(APITestCase):
    payload = {
        "username": "jane",
        "email": "jane@example.com",
        "password": "secret1",
        "first_name": "Jane",
        "last_name": "Doe",
        "phone_number": "+15550001111",
    }

    def test_register_returns_tokens(self) -> None:
        response = self.client.post(reverse("auth:register"), self.payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertIn("access", response.data["tokens"])
        self.assertIn("refresh", response.data["tokens"])
        self.assertEqual(response.data["user"]["email"], self.payload["email"])
        self.assertEqual(response.data["user"]["role"], User.Role.USER)
        self.assertNotIn("password", response.data["user"])

    def test_register_sends_welcome_email(self) -> None:
        with self.captureOnCommitCallbacks(execute=True):
            self.client.post(reverse("auth:register"), self.payload, format="json")

        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ["jane@example.com"])
        self.assertIn("Welcome", mail.outbox[0].subject)

    def test_register_with_admin_code_grants_admin(self) -> None:
        response = self.client.post(
            reverse("auth:register"),
            {**self.payload, "admin_code": "test-admin-code"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["user"]["role"], User.Role.ADMIN)

    def test_wrong_admin_code_registers_plain_user(self) -> None:
        response = self.client.post(
            reverse("auth:register"),
            {**self.payload, "admin_code": "guess"},
            format="json",
        )

        self.assertEqual(response.data["user"]["role"], User.Role.USER)

    def test_register_rejects_duplicates_and_short_values(self) -> None:
        User.objects.create_user(email="jane@example.com", username="someone", password="secret1")

        duplicate = self.client.post(reverse("auth:register"), self.payload, format="json")
        short = self.client.post(
            reverse("auth:register"),
            {**self.payload, "email": "x@example.com", "username": "ab", "password": "123"},
            format="json",
        )

        self.assertEqual(duplicate.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("email", duplicate.data)
        self.assertEqual(short.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("username", short.data)
        self.assertIn("password", short.data)

    def test_login_with_email_and_password(self) -> None:
        User.objects.create_user(email="login@example.com", username="login", password="secret1")

        ok = self.client.post(
            reverse("auth:login"), {"email": "login@example.com", "password": "secret1"}, format="json"
        )
        bad = self.client.post(
            reverse("auth:login"), {"email": "login@example.com", "password": "wrong"}, format="json"
        )

        self.assertEqual(ok.status_code, status.HTTP_200_OK, ok.data)
        self.assertIn("access", ok.data["tokens"])
        self.assertEqual(bad.status_code, status.HTTP_400_BAD_REQUEST)

    def test_me_uses_bearer_token(self) -> None:
        registered = self.client.post(reverse("auth:register"), self.payload, format="json")
        access = registered.data["tokens"]["access"]

        anonymous = self.client.get(reverse("auth:me"))
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")
        me = self.client.get(reverse("auth:me"))

        self.assertEqual(anonymous.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(me.status_code, status.HTTP_200_OK)
        self.assertEqual(me.data["username"], "jane")

    def test_refresh_issues_new_access_token(self) -> None:
        registered = self.client.post(reverse("auth:register"), self.payload, format="json")

        response = self.client.post(
            reverse("auth:token_refresh"),
            {"refresh": registered.data["tokens"]["refresh"]},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn("access", response.data)
