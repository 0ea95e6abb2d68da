"""API views for the booking domain."""

from __future__ import annotations

import logging

from rest_framework import mixins, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from shared.exceptions import ConflictError

from . import dates, exports, rooms, services
from .serializers import (
    AppSettingsSerializer,
    BookingCreateSerializer,
    BookingDateSerializer,
    BookingDetailsSerializer,
    BookingSerializer,
    CustomRoomSerializer,
    ResetRoomSerializer,
)
from .summary import compute_summary

logger = logging.getLogger(__name__)


def _require_admin(request, message: str) -> None:
    if not getattr(request.user, "is_admin", False):
        raise ConflictError(message)


class BookingViewSet(viewsets.GenericViewSet):
    """Room-slot ledger plus the admin controls around it."""

    serializer_class = BookingSerializer
    lookup_value_regex = r"\d+"

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        if self.action == "update_details":
            return BookingDetailsSerializer
        if self.action == "reset_room":
            return ResetRoomSerializer
        if self.action == "app_settings":
            return AppSettingsSerializer
        return BookingSerializer

    def list(self, request):  # type: ignore
        bookings = services.list_bookings(request.query_params.get("date"))
        return Response(BookingSerializer(bookings, many=True).data)

    def create(self, request):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        result = services.reserve(
            data["date"],
            data["selections"],
            request.user,
            on_behalf_of_user_id=data.get("user_id_for_booking"),
        )
        payload = {
            "message": "Bookings created successfully",
            "count": result["count"],
            "bookings": BookingSerializer(result["bookings"], many=True).data,
        }
        return Response(payload, status=status.HTTP_201_CREATED)

    def destroy(self, request, pk=None):  # type: ignore
        booking = services.cancel(pk, request.user.pk, is_admin=request.user.is_admin)
        return Response(BookingSerializer(booking).data)

    @action(detail=False, methods=["get"], url_path="details", url_name="details")
    def booking_details(self, request):
        return Response(services.list_bookings_with_booker(request.query_params.get("date")))

    @action(detail=True, methods=["patch"], url_path="details", url_name="update-details")
    def update_details(self, request, pk=None):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = services.update_details(pk, serializer.validated_data["details"], request.user)
        return Response(BookingSerializer(booking).data)

    @action(detail=False, methods=["get"], url_path="status", url_name="status")
    def booking_status(self, request):
        return Response(services.booking_status(request.query_params.get("date")))

    @action(detail=False, methods=["get"])
    def summary(self, request):
        return Response(compute_summary())

    @action(detail=False, methods=["post"], url_path="reset-room", url_name="reset-room")
    def reset_room(self, request):
        _require_admin(request, "Only admin can reset room bookings.")
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = services.reset_room(
            serializer.validated_data["room_id"],
            serializer.validated_data["date"],
            is_admin=True,
        )
        return Response(result)

    @action(detail=False, methods=["post"], url_path="reset-all", url_name="reset-all")
    def reset_all(self, request):
        return Response(services.reset_all(is_admin=request.user.is_admin))

    @action(detail=False, methods=["get"], url_path="room-status", url_name="room-status")
    def room_status(self, request):
        room_status = rooms.get_room_status()
        return Response({"closed_rooms": room_status.closed_rooms, "updated_at": room_status.updated_at})

    @action(detail=False, methods=["post"], url_path=r"open-room/(?P<room_id>[^/.]+)", url_name="open-room")
    def open_room(self, request, room_id=None):
        _require_admin(request, "Only admin can open rooms.")
        return Response(rooms.open_room(room_id))

    @action(detail=False, methods=["post"], url_path=r"close-room/(?P<room_id>[^/.]+)", url_name="close-room")
    def close_room(self, request, room_id=None):
        _require_admin(request, "Only admin can close rooms.")
        return Response(rooms.close_room(room_id))

    @action(detail=False, methods=["post"], url_path=r"toggle-room/(?P<room_id>[^/.]+)", url_name="toggle-room")
    def toggle_room(self, request, room_id=None):
        _require_admin(request, "Only admin can toggle room status.")
        return Response(rooms.toggle_room(room_id))

    @action(detail=False, methods=["get"], url_path="rooms", url_name="rooms")
    def room_catalog(self, request):
        return Response(rooms.rooms_by_building())

    @action(detail=False, methods=["get", "post"], url_path="settings", url_name="settings")
    def app_settings(self, request):
        if request.method == "GET":
            return Response(AppSettingsSerializer(dates.get_app_settings()).data)
        _require_admin(request, "Only admin can change settings.")
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        updated = dates.update_contest_name(serializer.validated_data["contest_name"])
        return Response(AppSettingsSerializer(updated).data)

    @action(detail=False, methods=["get"], url_path="export/excel", url_name="export-excel")
    def export_excel(self, request):
        _require_admin(request, "Only admin can export bookings.")
        logger.info(f"{request.user.username} exported bookings to Excel")
        return exports.export_bookings_response()


class CustomRoomViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    serializer_class = CustomRoomSerializer
    lookup_field = "room_id"
    lookup_value_regex = r"[^/]+"

    def get_queryset(self):  # type: ignore
        return rooms.list_custom_rooms()

    def create(self, request):  # type: ignore
        _require_admin(request, "Only admin can create rooms.")
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        room = rooms.create_custom_room(
            serializer.validated_data["room_name"],
            serializer.validated_data.get("subtitle"),
        )
        return Response(CustomRoomSerializer(room).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, room_id=None):  # type: ignore
        _require_admin(request, "Only admin can delete rooms.")
        return Response(rooms.delete_custom_room(room_id))


class BookingDateViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    serializer_class = BookingDateSerializer
    lookup_field = "date"
    lookup_value_regex = r"\d{4}-\d{2}-\d{2}"

    def get_queryset(self):  # type: ignore
        return dates.list_booking_dates()

    def create(self, request):  # type: ignore
        _require_admin(request, "Only admin can add booking dates.")
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking_date = dates.add_booking_date(
            serializer.validated_data["date"],
            serializer.validated_data["display_name"],
        )
        return Response(BookingDateSerializer(booking_date).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, date=None):  # type: ignore
        _require_admin(request, "Only admin can remove booking dates.")
        dates.remove_booking_date(date)
        return Response(status=status.HTTP_204_NO_CONTENT)
