"""User API views."""

from __future__ import annotations

from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from . import services
from .permissions import Actor, Capability, capability_required
from .serializers import ProfileUpdateSerializer, RoleUpdateSerializer, UserSerializer


class UserViewSet(mixins.ListModelMixin, mixins.DestroyModelMixin, viewsets.GenericViewSet):
    """User management.

    - `profile` returns and updates the caller's own profile
    - listing, deletion and role changes require the MANAGE_USERS capability
    """

    serializer_class = UserSerializer

    def get_permissions(self):  # type: ignore
        if self.action == "profile":
            return [permissions.IsAuthenticated()]
        return [capability_required(Capability.MANAGE_USERS)()]

    def get_queryset(self):  # type: ignore
        return services.list_users(Actor.from_user(self.request.user))

    def destroy(self, request, *args, **kwargs):  # type: ignore
        services.delete_user(Actor.from_user(request.user), kwargs["pk"])
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["get", "put", "patch"])
    def profile(self, request):  # type: ignore
        """Current user's profile."""
        if request.method == "GET":
            return Response(UserSerializer(request.user).data)

        serializer = ProfileUpdateSerializer(
            request.user,
            data=request.data,
            partial=True,
        )
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return Response(UserSerializer(user).data)

    @action(detail=True, methods=["put", "patch"])
    def role(self, request, pk=None):  # type: ignore
        serializer = RoleUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = services.change_role(
            Actor.from_user(request.user),
            pk,
            serializer.validated_data["role"],
        )
        return Response(UserSerializer(user).data)
