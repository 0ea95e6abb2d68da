"""User domain models for the contest room booking service.

Accounts log in with a username. Privilege tiers are an explicit role on
the user: ordinary users book rooms, admins manage rooms, dates and
ordinary users, and super-admins additionally manage other admins.
"""

from __future__ import annotations

from typing import Any

from django.contrib.auth.models import AbstractUser, UserManager  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class CustomUserManager(UserManager):
    """Manager that assigns roles instead of relying on staff flags."""

    use_in_migrations = True

    def create_user(self, username: str, email: str | None = None, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("role", User.Role.USER)
        return super().create_user(username, email, password, **extra_fields)

    def create_superuser(self, username: str, email: str | None = None, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("role", User.Role.SUPER_ADMIN)
        return super().create_superuser(username, email, password, **extra_fields)


class User(AbstractUser):
    """A participant account or an administrator of the booking system."""

    class Role(models.TextChoices):
        USER = "user", _("User")
        ADMIN = "admin", _("Admin")
        SUPER_ADMIN = "super_admin", _("Super admin")

    role = models.CharField(
        _("Role"),
        max_length=20,
        choices=Role.choices,
        default=Role.USER,
    )
    display_name = models.CharField(
        _("Display name"),
        max_length=150,
        blank=True,
        help_text=_("Shown in booking grids and summaries instead of the username."),
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CustomUserManager()

    class Meta:
        verbose_name = _("User")
        verbose_name_plural = _("Users")
        ordering = ["username"]

    def __str__(self) -> str:
        return f"{self.username} ({self.get_role_display()})"

    def save(self, *args, **kwargs):  # type: ignore
        # Admin site access follows the role.
        self.is_staff = self.is_admin or self.is_superuser
        super().save(*args, **kwargs)

    @property
    def is_admin(self) -> bool:
        return self.role in (self.Role.ADMIN, self.Role.SUPER_ADMIN)

    @property
    def is_super_admin(self) -> bool:
        return self.role == self.Role.SUPER_ADMIN

    @property
    def display_label(self) -> str:
        return self.display_name or self.get_full_name() or self.username
