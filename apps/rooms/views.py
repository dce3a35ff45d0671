"""Room API views."""

from __future__ import annotations

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.bookings.availability import AvailabilityChecker
from apps.users.permissions import Actor, Capability, capability_required

from . import services
from .serializers import (
    AvailabilityQuerySerializer,
    AvailabilitySerializer,
    RoomSerializer,
    RoomWriteSerializer,
)


class RoomViewSet(viewsets.GenericViewSet):
    """Public catalogue reads; writes need the MANAGE_ROOMS capability."""

    serializer_class = RoomSerializer

    def get_permissions(self):  # type: ignore
        if self.action in {"list", "retrieve", "check_availability"}:
            return [permissions.AllowAny()]
        return [capability_required(Capability.MANAGE_ROOMS)()]

    def get_queryset(self):  # type: ignore
        return services.list_rooms(self.request.query_params)

    def list(self, request):  # type: ignore
        page = self.paginate_queryset(self.get_queryset())
        if page is not None:
            return self.get_paginated_response(RoomSerializer(page, many=True).data)
        return Response(RoomSerializer(self.get_queryset(), many=True).data)

    def retrieve(self, request, pk=None):  # type: ignore
        return Response(RoomSerializer(services.get_room(pk)).data)

    def create(self, request):  # type: ignore
        serializer = RoomWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        room = services.create_room(Actor.from_user(request.user), serializer.validated_data)
        return Response(RoomSerializer(room).data, status=status.HTTP_201_CREATED)

    def update(self, request, pk=None, partial=False):  # type: ignore
        serializer = RoomWriteSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        room = services.update_room(Actor.from_user(request.user), pk, serializer.validated_data)
        return Response(RoomSerializer(room).data)

    def partial_update(self, request, pk=None):  # type: ignore
        return self.update(request, pk=pk, partial=True)

    def destroy(self, request, pk=None):  # type: ignore
        services.delete_room(Actor.from_user(request.user), pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["post"], url_path="check-availability")
    def check_availability(self, request, pk=None):  # type: ignore
        """Is the room free for the given stay? Returns a flag and a reason."""
        serializer = AvailabilityQuerySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = AvailabilityChecker().check(
            pk,
            serializer.validated_data["check_in_date"],
            serializer.validated_data["check_out_date"],
        )
        return Response(AvailabilitySerializer(result).data)
