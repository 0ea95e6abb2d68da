"""Per-date, per-building occupancy summary."""

from __future__ import annotations

from collections import defaultdict

from .catalog import BUILDINGS, CUSTOM_ROOM_BUILDING, building_for_room, building_map
from .dates import bookable_dates
from .models import Booking
from .rooms import closed_room_ids, list_custom_rooms

SLOTS_PER_ROOM = len(Booking.Slot.values)


def _open_rooms_by_building(custom_room_ids: list[str], closed: set[str]) -> dict[str, list[str]]:
    rooms = {building: [room.room_id for room in catalog] for building, catalog in BUILDINGS.items()}
    rooms[CUSTOM_ROOM_BUILDING] = rooms[CUSTOM_ROOM_BUILDING] + custom_room_ids
    return {building: [r for r in ids if r not in closed] for building, ids in rooms.items()}


def compute_summary() -> dict[str, dict[str, dict]]:
    custom_room_ids = list(list_custom_rooms().values_list("room_id", flat=True))
    closed = closed_room_ids()
    open_rooms = _open_rooms_by_building(custom_room_ids, closed)
    mapping = building_map(custom_room_ids)
    days = bookable_dates()

    bookings_by_day = defaultdict(list)
    for booking in Booking.objects.filter(date__in=days).select_related("booked_by"):
        bookings_by_day[booking.date].append(booking)

    summary: dict[str, dict[str, dict]] = {}
    for day in days:
        per_building = {}
        for building, room_ids in open_rooms.items():
            open_set = set(room_ids)
            slots_taken: dict[str, int] = defaultdict(int)
            booked_rooms = []
            for booking in bookings_by_day[day]:
                if booking.room_id not in open_set:
                    continue
                if building_for_room(booking.room_id, mapping) != building:
                    continue
                slots_taken[booking.room_id] += 1
                booker = booking.booked_by
                booked_rooms.append(
                    {
                        "room_id": booking.room_id,
                        "slot": booking.slot,
                        "booked_by": booker.display_label if booker is not None else "Unknown",
                    }
                )
            per_building[building] = {
                "booked_slots": len(booked_rooms),
                "available_slots": SLOTS_PER_ROOM * len(room_ids) - len(booked_rooms),
                "booked_rooms": booked_rooms,
                "available_rooms": [r for r in room_ids if slots_taken[r] < SLOTS_PER_ROOM],
            }
        summary[day.isoformat()] = per_building
    return summary
