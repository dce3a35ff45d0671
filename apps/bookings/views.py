"""API views for the booking domain."""

from __future__ import annotations

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.permissions import Actor

from .serializers import (
    BookingCreateSerializer,
    BookingSerializer,
    BookingStatusQuerySerializer,
    BookingUpdateSerializer,
)
from .services import LIST_SCOPE_ALL, LIST_SCOPE_OWN, BookingService


class BookingViewSet(viewsets.GenericViewSet):
    """
    Guests create and manage their own bookings; staff see and manage all.

    Authorization lives in BookingService, the view only requires a login.
    """

    serializer_class = BookingSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_service(self) -> BookingService:
        return BookingService()

    def get_actor(self) -> Actor:
        return Actor.from_user(self.request.user)

    def _status_filter(self):
        query = BookingStatusQuerySerializer(data=self.request.query_params)
        query.is_valid(raise_exception=True)
        return query.validated_data.get("status")

    def _list(self, scope: str):
        bookings = self.get_service().list_bookings(
            self.get_actor(), scope=scope, status=self._status_filter()
        )
        page = self.paginate_queryset(bookings)
        if page is not None:
            return self.get_paginated_response(BookingSerializer(page, many=True).data)
        return Response(BookingSerializer(bookings, many=True).data)

    def list(self, request):  # type: ignore
        return self._list(LIST_SCOPE_OWN)

    @action(detail=False, methods=["get"], url_path="all")
    def all_bookings(self, request):  # type: ignore
        return self._list(LIST_SCOPE_ALL)

    def create(self, request):  # type: ignore
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = self.get_service().create_booking(self.get_actor(), serializer.to_command())
        return Response(BookingSerializer(booking).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):  # type: ignore
        booking = self.get_service().get_booking(self.get_actor(), pk)
        return Response(BookingSerializer(booking).data)

    def update(self, request, pk=None, partial=True):  # type: ignore
        # PUT and PATCH both apply only the fields sent
        serializer = BookingUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        booking = self.get_service().update_booking(
            self.get_actor(), pk, serializer.validated_data
        )
        return Response(BookingSerializer(booking).data)

    def partial_update(self, request, pk=None):  # type: ignore
        return self.update(request, pk=pk)

    @action(detail=True, methods=["put", "post"])
    def cancel(self, request, pk=None):  # type: ignore
        booking = self.get_service().cancel_booking(self.get_actor(), pk)
        return Response(BookingSerializer(booking).data)

    def destroy(self, request, pk=None):  # type: ignore
        self.get_service().delete_booking(self.get_actor(), pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
