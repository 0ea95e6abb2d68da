"""Admin registration for accounts."""

from __future__ import annotations

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ("username", "display_name", "role", "is_active", "created_at")
    list_filter = ("role", "is_active")
    search_fields = ("username", "display_name", "first_name", "last_name")
    fieldsets = BaseUserAdmin.fieldsets + (
        ("Booking", {"fields": ("role", "display_name")}),
    )
    readonly_fields = ("created_at", "updated_at")
