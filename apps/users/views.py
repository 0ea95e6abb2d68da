"""User API views."""

from __future__ import annotations

import logging

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from .permissions import IsAdminRole
from .serializers import UserSerializer, UserWriteSerializer
from .services import ensure_can_assign_role, ensure_can_delete, ensure_can_manage

User = get_user_model()
logger = logging.getLogger(__name__)


class UserViewSet(viewsets.ModelViewSet):
    """Account administration.

    - every action except `me` is limited to admins
    - regular admins only create, edit and delete plain users
    - only super-admins touch other admins
    """

    queryset = User.objects.all()
    permission_classes = [permissions.IsAuthenticated, IsAdminRole]

    def get_permissions(self):  # type: ignore
        if self.action == "me":
            return [permissions.IsAuthenticated()]
        return super().get_permissions()

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "update", "partial_update"}:
            return UserWriteSerializer
        return UserSerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        ensure_can_assign_role(request.user, request.data.get("role", User.Role.USER))
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info(f"{request.user.username} created account {user.username} ({user.role})")
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):  # type: ignore
        partial = kwargs.pop("partial", False)
        target = self.get_object()
        ensure_can_manage(request.user, target)
        if "role" in request.data:
            ensure_can_assign_role(request.user, request.data["role"])
        serializer = self.get_serializer(target, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info(f"{request.user.username} updated account {user.username}")
        return Response(UserSerializer(user).data)

    def destroy(self, request, *args, **kwargs):  # type: ignore
        target = self.get_object()
        ensure_can_delete(request.user, target)
        username = target.username
        target.delete()
        logger.info(f"{request.user.username} deleted account {username}")
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["get"])
    def me(self, request):
        """Returns the current user's profile."""
        return Response(UserSerializer(request.user).data)
