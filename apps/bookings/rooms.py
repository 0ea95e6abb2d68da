"""Closed-room set and admin-created custom rooms."""

from __future__ import annotations

import logging

from django.conf import settings  # type: ignore
from django.db import IntegrityError, transaction  # type: ignore

from shared.exceptions import BadRequestError, ConflictError, NotFoundError

from .catalog import BUILDINGS, CUSTOM_ROOM_BUILDING, CUSTOM_ROOM_PREFIX
from .models import SINGLETON_PK, Booking, CustomRoom, RoomStatus

logger = logging.getLogger(__name__)


def get_room_status() -> RoomStatus:
    return RoomStatus.load()


def closed_room_ids() -> set[str]:
    return set(get_room_status().closed_rooms)


def _locked_status() -> RoomStatus:
    RoomStatus.load()
    return RoomStatus.objects.select_for_update().get(pk=SINGLETON_PK)


@transaction.atomic
def open_room(room_id: str) -> dict:
    status = _locked_status()
    if room_id in status.closed_rooms:
        status.closed_rooms = [r for r in status.closed_rooms if r != room_id]
        status.save(update_fields=["closed_rooms", "updated_at"])
        logger.info(f"Room {room_id} opened for booking")
    return {"message": f"Room {room_id} opened", "closed_rooms": status.closed_rooms}


@transaction.atomic
def close_room(room_id: str) -> dict:
    status = _locked_status()
    if room_id not in status.closed_rooms:
        status.closed_rooms = [*status.closed_rooms, room_id]
        status.save(update_fields=["closed_rooms", "updated_at"])
        logger.info(f"Room {room_id} closed for booking")
    return {"message": f"Room {room_id} closed", "closed_rooms": status.closed_rooms}


@transaction.atomic
def toggle_room(room_id: str) -> dict:
    status = _locked_status()
    if room_id in status.closed_rooms:
        status.closed_rooms = [r for r in status.closed_rooms if r != room_id]
        is_closed = False
    else:
        status.closed_rooms = [*status.closed_rooms, room_id]
        is_closed = True
    status.save(update_fields=["closed_rooms", "updated_at"])
    logger.info(f"Room {room_id} toggled, closed={is_closed}")
    return {
        "message": f"Room {room_id} {'closed' if is_closed else 'opened'}",
        "closed_rooms": status.closed_rooms,
        "is_closed": is_closed,
    }


def list_custom_rooms():
    return CustomRoom.objects.order_by("created_at", "id")


def create_custom_room(room_name: str, subtitle: str | None = None) -> CustomRoom:
    """Create a custom room with the next free ``custom-N`` id."""

    room_name = (room_name or "").strip()
    if not room_name:
        raise BadRequestError("room_name is required.")

    number = CustomRoom.objects.count() + 1
    for _attempt in range(settings.CUSTOM_ROOM_ID_ATTEMPTS):
        room_id = f"{CUSTOM_ROOM_PREFIX}{number}"
        number += 1
        if CustomRoom.objects.filter(room_id=room_id).exists():
            continue
        try:
            with transaction.atomic():
                room = CustomRoom.objects.create(
                    room_id=room_id,
                    room_name=room_name,
                    subtitle=(subtitle or "").strip(),
                )
        except IntegrityError:
            continue
        logger.info(f"Custom room {room.room_id} created: {room.room_name}")
        return room

    raise ConflictError("Could not allocate an id for the custom room. Please try again.")


@transaction.atomic
def delete_custom_room(room_id: str) -> dict:
    """Remove a custom room together with its bookings and closed flag."""

    room = CustomRoom.objects.filter(room_id=room_id).first()
    if room is None:
        raise NotFoundError("Custom room not found.")

    deleted_bookings, _details = Booking.objects.filter(room_id=room_id).delete()
    status = _locked_status()
    if room_id in status.closed_rooms:
        status.closed_rooms = [r for r in status.closed_rooms if r != room_id]
        status.save(update_fields=["closed_rooms", "updated_at"])
    room.delete()
    logger.info(f"Custom room {room_id} deleted with {deleted_bookings} booking(s)")
    return {"message": f"Custom room {room_id} deleted", "deleted_bookings": deleted_bookings}


def rooms_by_building() -> dict[str, list[dict]]:
    """Catalog rooms plus custom rooms, grouped by building."""

    grouped: dict[str, list[dict]] = {
        building: [
            {"room_id": room.room_id, "room_name": room.room_name, "subtitle": room.subtitle}
            for room in rooms
        ]
        for building, rooms in BUILDINGS.items()
    }
    grouped[CUSTOM_ROOM_BUILDING].extend(
        {"room_id": room.room_id, "room_name": room.room_name, "subtitle": room.subtitle, "is_custom": True}
        for room in list_custom_rooms()
    )
    return grouped
