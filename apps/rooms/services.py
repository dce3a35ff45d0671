"""Room administration use cases, authorized against the capability table."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from apps.users.permissions import Actor, Capability, authorize

from .catalog import RoomCatalog
from .models import Room


def list_rooms(filters: Mapping[str, Any] | None = None, *, catalog: RoomCatalog | None = None):
    return (catalog or RoomCatalog()).list(filters)


def get_room(room_id: Any, *, catalog: RoomCatalog | None = None) -> Room:
    return (catalog or RoomCatalog()).find_by_id(room_id)


def create_room(actor: Actor, attrs: Mapping[str, Any], *, catalog: RoomCatalog | None = None) -> Room:
    authorize(actor, Capability.MANAGE_ROOMS)
    return (catalog or RoomCatalog()).create(attrs)


def update_room(
    actor: Actor,
    room_id: Any,
    attrs: Mapping[str, Any],
    *,
    catalog: RoomCatalog | None = None,
) -> Room:
    authorize(actor, Capability.MANAGE_ROOMS)
    return (catalog or RoomCatalog()).update(room_id, attrs)


def delete_room(actor: Actor, room_id: Any, *, catalog: RoomCatalog | None = None) -> None:
    authorize(actor, Capability.MANAGE_ROOMS)
    (catalog or RoomCatalog()).delete(room_id)
