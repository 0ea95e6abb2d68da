"""Serializers for user-related API endpoints."""

from __future__ import annotations

from typing import Any

from django.contrib.auth import get_user_model  # type: ignore
from django.contrib.auth.validators import UnicodeUsernameValidator  # type: ignore
from rest_framework import serializers  # type: ignore

from shared.exceptions import BadRequestError

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Public representation of an account."""

    is_admin = serializers.BooleanField(read_only=True)
    display_label = serializers.CharField(read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "display_name",
            "display_label",
            "first_name",
            "last_name",
            "role",
            "is_admin",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class UserWriteSerializer(serializers.ModelSerializer):
    """Create and update accounts from the admin screens."""

    password = serializers.CharField(write_only=True, required=False, allow_blank=False, min_length=4)

    class Meta:
        model = User
        fields = [
            "username",
            "password",
            "display_name",
            "first_name",
            "last_name",
            "role",
            "is_active",
        ]
        extra_kwargs = {
            # Uniqueness is checked in validate_username.
            "username": {"validators": [UnicodeUsernameValidator()]},
            "display_name": {"required": False, "allow_blank": True},
            "first_name": {"required": False, "allow_blank": True},
            "last_name": {"required": False, "allow_blank": True},
            "role": {"required": False},
        }

    def validate_username(self, value: str) -> str:
        clashing = User.objects.filter(username=value)
        if self.instance is not None:
            clashing = clashing.exclude(pk=self.instance.pk)
        if clashing.exists():
            raise BadRequestError("Username already exists.")
        return value

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        if self.instance is None and not attrs.get("password"):
            raise BadRequestError("Password is required.")
        return attrs

    def create(self, validated_data: dict[str, Any]):  # type: ignore
        password = validated_data.pop("password")
        username = validated_data.pop("username")
        return User.objects.create_user(username, password=password, **validated_data)

    def update(self, instance, validated_data: dict[str, Any]):  # type: ignore
        password = validated_data.pop("password", None)
        for field, value in validated_data.items():
            setattr(instance, field, value)
        if password:
            instance.set_password(password)
        instance.save()
        return instance
