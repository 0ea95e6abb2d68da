"""Booking ledger models."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from .catalog import default_closed_rooms

SINGLETON_PK = 1


class Booking(models.Model):
    """One half-day slot of one room on one date."""

    class Slot(models.TextChoices):
        AM = "am", _("Morning")
        PM = "pm", _("Afternoon")

    room_id = models.CharField(max_length=64)
    date = models.DateField(db_index=True)
    slot = models.CharField(max_length=2, choices=Slot.choices)
    booked_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name="bookings",
    )
    details = models.TextField(blank=True, default="", help_text=_("Competition name or notes."))
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["date", "room_id", "slot"]
        constraints = [
            models.UniqueConstraint(fields=["room_id", "date", "slot"], name="unique_booking_slot"),
        ]

    def __str__(self) -> str:
        return f"{self.room_id} {self.date:%Y-%m-%d} ({self.slot})"


class RoomStatus(models.Model):
    """Singleton row holding the ids of rooms closed for booking."""

    closed_rooms = models.JSONField(default=list, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Room status")
        verbose_name_plural = _("Room status")

    def __str__(self) -> str:
        return f"{len(self.closed_rooms)} closed rooms"

    @classmethod
    def load(cls) -> "RoomStatus":
        status, _created = cls.objects.get_or_create(
            pk=SINGLETON_PK,
            defaults={"closed_rooms": default_closed_rooms()},
        )
        return status


class CustomRoom(models.Model):
    """Room added by an admin on top of the static catalog."""

    room_id = models.CharField(max_length=64, unique=True, editable=False)
    room_name = models.CharField(max_length=255)
    subtitle = models.CharField(max_length=255, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Custom room")
        verbose_name_plural = _("Custom rooms")
        ordering = ["created_at", "id"]

    def __str__(self) -> str:
        return f"{self.room_id}: {self.room_name}"


class BookingDate(models.Model):
    """Extra bookable date. Removal only deactivates the row."""

    date = models.DateField(unique=True)
    display_name = models.CharField(max_length=255)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Booking date")
        verbose_name_plural = _("Booking dates")
        ordering = ["date"]

    def __str__(self) -> str:
        return f"{self.date:%Y-%m-%d} {self.display_name}"


class AppSettings(models.Model):
    """Singleton row with display-only settings."""

    contest_name = models.CharField(max_length=255)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("App settings")
        verbose_name_plural = _("App settings")

    def __str__(self) -> str:
        return self.contest_name

    @classmethod
    def load(cls) -> "AppSettings":
        app_settings, _created = cls.objects.get_or_create(
            pk=SINGLETON_PK,
            defaults={"contest_name": settings.DEFAULT_CONTEST_NAME},
        )
        return app_settings
