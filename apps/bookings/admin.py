"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import AppSettings, Booking, BookingDate, CustomRoom, RoomStatus


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ("room_id", "date", "slot", "booked_by", "details", "created_at")
    list_filter = ("date", "slot")
    search_fields = ("room_id", "booked_by__username", "booked_by__display_name", "details")
    readonly_fields = ("created_at", "updated_at")


@admin.register(CustomRoom)
class CustomRoomAdmin(admin.ModelAdmin):
    list_display = ("room_id", "room_name", "subtitle", "created_at")
    search_fields = ("room_id", "room_name")
    readonly_fields = ("room_id", "created_at")

    def has_add_permission(self, request):  # type: ignore
        # Ids are allocated by apps.bookings.rooms.create_custom_room.
        return False


@admin.register(BookingDate)
class BookingDateAdmin(admin.ModelAdmin):
    list_display = ("date", "display_name", "is_active")
    list_filter = ("is_active",)


admin.site.register(RoomStatus)
admin.site.register(AppSettings)
