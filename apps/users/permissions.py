"""Authorization predicates shared by every booking, room and user operation.

Operations ask for a capability instead of testing role names. A role
grants a fixed set of capabilities; owning a booking grants the owner
capabilities on that booking only.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from rest_framework import permissions  # type: ignore

from shared.domain.errors import Forbidden

from .models import CustomUser


class Capability(str, Enum):
    VIEW_BOOKING = "view_booking"
    UPDATE_BOOKING = "update_booking"
    CANCEL_BOOKING = "cancel_booking"
    LIST_ALL_BOOKINGS = "list_all_bookings"
    CHANGE_BOOKING_STATUS = "change_booking_status"
    DELETE_BOOKING = "delete_booking"
    MANAGE_ROOMS = "manage_rooms"
    MANAGE_USERS = "manage_users"


OWNER_CAPABILITIES = frozenset({
    Capability.VIEW_BOOKING,
    Capability.UPDATE_BOOKING,
    Capability.CANCEL_BOOKING,
})

STAFF_CAPABILITIES = OWNER_CAPABILITIES | {
    Capability.LIST_ALL_BOOKINGS,
    Capability.CHANGE_BOOKING_STATUS,
    Capability.MANAGE_ROOMS,
}

ROLE_CAPABILITIES: dict[str, frozenset[Capability]] = {
    CustomUser.Role.USER: frozenset(),
    CustomUser.Role.MANAGER: STAFF_CAPABILITIES,
    CustomUser.Role.ADMIN: STAFF_CAPABILITIES | {
        Capability.DELETE_BOOKING,
        Capability.MANAGE_USERS,
    },
}


@dataclass(frozen=True)
class Actor:
    """Identity and role of the caller, as supplied by the auth layer."""

    user_id: Any
    role: str

    @classmethod
    def from_user(cls, user) -> "Actor":  # type: ignore
        if getattr(user, "is_superuser", False) or getattr(user, "is_staff", False):
            return cls(user_id=user.pk, role=CustomUser.Role.ADMIN)
        return cls(user_id=user.pk, role=getattr(user, "role", CustomUser.Role.USER))

    @property
    def capabilities(self) -> frozenset[Capability]:
        return ROLE_CAPABILITIES.get(self.role, frozenset())


def is_allowed(actor: Actor, capability: Capability, *, owner_id: Any = None) -> bool:
    """Role capabilities first, then ownership of the target record."""

    if capability in actor.capabilities:
        return True
    if owner_id is not None and capability in OWNER_CAPABILITIES:
        return str(owner_id) == str(actor.user_id)
    return False


def authorize(actor: Actor, capability: Capability, *, owner_id: Any = None) -> None:
    if not is_allowed(actor, capability, owner_id=owner_id):
        raise Forbidden(f"Not authorized to {capability.value.replace('_', ' ')}")


def capability_required(capability: Capability):
    """Build a DRF permission class that checks a role capability."""

    class HasCapability(permissions.BasePermission):
        message = f"Not authorized to {capability.value.replace('_', ' ')}"

        def has_permission(self, request, view) -> bool:  # type: ignore
            user = request.user
            if not user or not user.is_authenticated:
                return False
            return is_allowed(Actor.from_user(user), capability)

    HasCapability.__name__ = f"Can{capability.name.title().replace('_', '')}"
    return HasCapability
