"""Static room catalog.

The school's rooms are fixed configuration, not database state. Each
building lists its rooms in display order; `blocked_by_default` marks rooms
that start out closed (staff rooms, offices, storage) until an admin opens
them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class Room:
    room_id: str
    room_name: str
    subtitle: str = ""
    blocked_by_default: bool = False


def _numbered(*ids: str, subtitles: dict[str, str] | None = None, blocked: Iterable[str] = ()) -> list[Room]:
    subtitles = subtitles or {}
    blocked = set(blocked)
    return [
        Room(room_id, f"Room {room_id}", subtitles.get(room_id, ""), room_id in blocked)
        for room_id in ids
    ]


BUILDINGS: dict[str, list[Room]] = {
    "building1": _numbered(
        "131", "132", "133", "134", "135", "136",
        "121", "122", "123", "124", "125", "126",
        "111", "112", "113", "114", "115", "116",
        subtitles={
            "132": "Teachers' room",
            "134": "Chemical storage",
            "121": "Administration",
            "122": "Finance",
            "124": "Teachers' room",
            "111": "Planning room",
            "112": "Teachers' room",
            "114": "Storage",
        },
        blocked=("132", "134", "121", "122", "124", "111", "112", "114"),
    ),
    "building2": [
        *_numbered("231", "232", "233", "234", "235", "236"),
        Room("221", "Room 221", "Mathematics", blocked_by_default=True),
        Room("english", "English", blocked_by_default=True),
        *_numbered("211", "212", "213", "214", "215", "216"),
    ],
    "building3": [
        *_numbered(
            "331", "332", "333", "334", "335", "336", "337", "338",
            "321", "322", "323", "324", "325", "326", "327", "328",
            subtitles={"333": "Social studies", "338": "Buddhism room", "321": "Thai language"},
            blocked=("333", "338", "321"),
        ),
        *_numbered("311", "312", subtitles={"311": "Computer lab", "312": "Computer lab"}),
        Room("library", "Library", blocked_by_default=True),
        Room("innovation", "Innovation room", blocked_by_default=True),
        *_numbered("317", "318", subtitles={"317": "Computer lab", "318": "Computer lab"}),
    ],
    "building4": [
        *_numbered(
            "441", "442", "443", "444", "445", "446", "447", "448",
            "431", "432", "433", "434", "435", "436", "437", "438",
            "421", "422", "423", "424", "425", "426", "427", "428",
            subtitles={"431": "Exam centre"},
            blocked=("431",),
        ),
        Room("fablab", "FABLAB"),
        Room("meeting1", "Meeting room 1"),
        Room("meeting2", "Meeting room 2"),
        Room("hcec", "HCEC"),
    ],
    "building5": [Room(room_id, room_id) for room_id in ("A4", "A3", "A2", "A1")],
    "building6": [
        Room("music1", "Music room 1"),
        Room("music2", "Music room 2"),
        Room("home1", "Home economics 1"),
        Room("home2", "Home economics 2"),
        Room("phet", "Phet Phonlabodi building"),
        Room("phet-canteen", "Phet Phonlabodi canteen"),
        Room("industry1", "Industrial arts 1"),
        Room("industry2", "Industrial arts 2"),
        Room("canteen", "Canteen"),
    ],
}

# Custom rooms created by admins are shown with the miscellaneous building.
CUSTOM_ROOM_BUILDING = "building6"
CUSTOM_ROOM_PREFIX = "custom-"

_ROOM_TO_BUILDING: dict[str, str] = {
    room.room_id: building for building, rooms in BUILDINGS.items() for room in rooms
}


def building_ids() -> list[str]:
    return list(BUILDINGS)


def catalog_room(room_id: str) -> Room | None:
    for rooms in BUILDINGS.values():
        for room in rooms:
            if room.room_id == room_id:
                return room
    return None


def default_closed_rooms() -> list[str]:
    return [room.room_id for rooms in BUILDINGS.values() for room in rooms if room.blocked_by_default]


def _building_by_prefix(room_id: str) -> str:
    if room_id[:1] in ("1", "2", "3", "4"):
        return f"building{room_id[0]}"
    if room_id.startswith("A"):
        return "building5"
    return CUSTOM_ROOM_BUILDING


def building_map(custom_room_ids: Iterable[str] = ()) -> dict[str, str]:
    """Explicit roomId -> building table for the catalog plus custom rooms."""

    mapping = dict(_ROOM_TO_BUILDING)
    for room_id in custom_room_ids:
        mapping[room_id] = CUSTOM_ROOM_BUILDING
    return mapping


def building_for_room(room_id: str, mapping: dict[str, str] | None = None) -> str:
    """Building of a room; ids missing from the table fall back to their prefix."""

    table = mapping if mapping is not None else _ROOM_TO_BUILDING
    return table.get(room_id) or _building_by_prefix(room_id)
