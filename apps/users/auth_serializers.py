"""Serializers for authentication flows (register, login)."""

from __future__ import annotations

import secrets
from typing import Any

from django.conf import settings  # type: ignore
from django.contrib.auth import get_user_model  # type: ignore
from django.db import transaction  # type: ignore
from rest_framework import serializers  # type: ignore

from .models import PHONE_VALIDATOR
from .services import publish_user_registered


User = get_user_model()


class RegisterSerializer(serializers.Serializer):
    username = serializers.CharField(min_length=3, max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(min_length=6, write_only=True)
    first_name = serializers.CharField(required=False, allow_blank=True)
    last_name = serializers.CharField(required=False, allow_blank=True)
    phone_number = serializers.CharField(
        required=False, allow_blank=True, validators=[PHONE_VALIDATOR]
    )
    admin_code = serializers.CharField(
        required=False, allow_blank=True, max_length=64, write_only=True
    )

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        attrs["username"] = attrs["username"].strip()
        if User.objects.filter(email__iexact=attrs["email"]).exists():
            raise serializers.ValidationError({"email": "User with this email already exists."})
        if User.objects.filter(username__iexact=attrs["username"]).exists():
            raise serializers.ValidationError({"username": "User with this username already exists."})
        return attrs

    @staticmethod
    def _role_for(admin_code: str) -> str:
        expected = getattr(settings, "HOTEL_ADMIN_REGISTRATION_CODE", "")
        if admin_code and expected and secrets.compare_digest(admin_code.strip(), expected):
            return User.Role.ADMIN
        return User.Role.USER

    @transaction.atomic
    def create(self, validated_data: dict[str, Any]):  # type: ignore
        password = validated_data.pop("password")
        role = self._role_for(validated_data.pop("admin_code", ""))
        user = User.objects.create_user(password=password, role=role, **validated_data)
        publish_user_registered(user)
        return user


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        try:
            user = User.objects.get(email__iexact=attrs["email"])
        except User.DoesNotExist:
            raise serializers.ValidationError({"email": "Invalid email or password."})

        if not user.is_active or not user.check_password(attrs["password"]):
            raise serializers.ValidationError({"email": "Invalid email or password."})

        attrs["user"] = user
        return attrs
