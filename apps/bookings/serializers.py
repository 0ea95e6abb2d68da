"""Serializers for the booking domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import AppSettings, Booking, BookingDate, CustomRoom


class SelectionSerializer(serializers.Serializer):
    room_id = serializers.CharField(max_length=64)
    slot = serializers.ChoiceField(choices=Booking.Slot.choices)


class BookingCreateSerializer(serializers.Serializer):
    """Batch reservation request: one date, many (room, slot) selections."""

    date = serializers.CharField()
    selections = SelectionSerializer(many=True, allow_empty=True)
    user_id_for_booking = serializers.IntegerField(required=False, allow_null=True)


class BookerSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    username = serializers.CharField(read_only=True)
    display_name = serializers.CharField(source="display_label", read_only=True)


class BookingSerializer(serializers.ModelSerializer):
    booked_by = BookerSerializer(read_only=True)

    class Meta:
        model = Booking
        fields = [
            "id",
            "room_id",
            "date",
            "slot",
            "booked_by",
            "details",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class BookingDetailsSerializer(serializers.Serializer):
    details = serializers.CharField(allow_blank=True, required=False, default="")


class ResetRoomSerializer(serializers.Serializer):
    room_id = serializers.CharField(max_length=64)
    date = serializers.CharField()


class CustomRoomSerializer(serializers.ModelSerializer):
    class Meta:
        model = CustomRoom
        fields = ["id", "room_id", "room_name", "subtitle", "created_at"]
        read_only_fields = ["id", "room_id", "created_at"]
        extra_kwargs = {
            "room_name": {"allow_blank": True},
            "subtitle": {"required": False, "allow_blank": True},
        }


class BookingDateSerializer(serializers.ModelSerializer):
    date = serializers.CharField()

    class Meta:
        model = BookingDate
        fields = ["id", "date", "display_name", "is_active", "created_at", "updated_at"]
        read_only_fields = ["id", "is_active", "created_at", "updated_at"]
        extra_kwargs = {"display_name": {"allow_blank": True}}


class AppSettingsSerializer(serializers.ModelSerializer):
    class Meta:
        model = AppSettings
        fields = ["contest_name", "updated_at"]
        read_only_fields = ["updated_at"]
        extra_kwargs = {"contest_name": {"allow_blank": True}}
