"""Serializers for the login flow."""

from __future__ import annotations

from typing import Any

from django.contrib.auth import authenticate  # type: ignore
from rest_framework import exceptions, serializers  # type: ignore


class LoginSerializer(serializers.Serializer):
    username = serializers.CharField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        user = authenticate(
            request=self.context.get("request"),
            username=attrs.get("username", ""),
            password=attrs.get("password", ""),
        )
        if user is None:
            raise exceptions.AuthenticationFailed("Invalid credentials.")
        attrs["user"] = user
        return attrs
