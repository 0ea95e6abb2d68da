"""Permission classes for the user administration API."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore


class IsAdminRole(permissions.BasePermission):
    """
    Only admins and super-admins pass.

    Finer tier checks (who may touch which account) happen in
    ``apps.users.services``.
    """

    message = "Only admins can access this resource."

    def has_permission(self, request, view) -> bool:  # type: ignore
        user = request.user
        if not user.is_authenticated:
            return False
        return bool(getattr(user, "is_admin", False))
