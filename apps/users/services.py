"""User administration use cases."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog
from django.contrib.auth import get_user_model  # type: ignore

from shared.application.uow import DjangoUnitOfWork
from shared.domain.base import DomainEvent
from shared.domain.errors import UserNotFound

from .permissions import Actor, Capability, authorize

logger = structlog.get_logger(__name__)

User = get_user_model()


@dataclass
class UserRegistered(DomainEvent):
    """
    Event: a new account was registered

    Triggers:
    - Send welcome email
    """
    user_id: Any


def publish_user_registered(user) -> None:  # type: ignore
    with DjangoUnitOfWork() as uow:
        uow.add_event(UserRegistered(user_id=user.pk))


def list_users(actor: Actor):
    authorize(actor, Capability.MANAGE_USERS)
    return User.objects.order_by("-created_at")


def get_user(user_id: Any):
    try:
        return User.objects.get(pk=user_id)
    except (User.DoesNotExist, ValueError):
        raise UserNotFound()


def delete_user(actor: Actor, user_id: Any) -> None:
    """Remove an account; its bookings go with it."""

    authorize(actor, Capability.MANAGE_USERS)
    user = get_user(user_id)
    user.delete()
    logger.info("user.deleted", user_id=user_id, actor_id=actor.user_id)


def change_role(actor: Actor, user_id: Any, role: str):
    authorize(actor, Capability.MANAGE_USERS)
    user = get_user(user_id)
    user.role = role
    user.save(update_fields=["role", "updated_at"])
    logger.info("user.role_changed", user_id=user.pk, role=role, actor_id=actor.user_id)
    return user
