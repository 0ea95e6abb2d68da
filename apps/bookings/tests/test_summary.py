"""Tests for the per-date occupancy summary."""

from __future__ import annotations

import random
from datetime import date, timedelta

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.catalog import BUILDINGS, default_closed_rooms
from apps.bookings.models import Booking, BookingDate, CustomRoom
from apps.users.models import User

DAY = date(2025, 12, 22)


def _open_count(building: str) -> int:
    closed = set(default_closed_rooms())
    return sum(1 for room in BUILDINGS[building] if room.room_id not in closed)


class SummaryAPITests(APITestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user("hs-math", password="MathPass123", display_name="Mathematics")
        self.client.force_authenticate(self.user)
        self.url = reverse("booking-summary")

    def _book(self, room_id: str, slot: str, day: date = DAY) -> None:
        Booking.objects.create(room_id=room_id, date=day, slot=slot, booked_by=self.user)

    def test_covers_default_and_extra_dates(self) -> None:
        extra = timezone.localdate() + timedelta(days=10)
        BookingDate.objects.create(date=extra, display_name="Extra")
        BookingDate.objects.create(date=extra + timedelta(days=1), display_name="Removed", is_active=False)
        BookingDate.objects.create(date=DAY, display_name="Same as default")

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(list(response.data), sorted(["2025-12-22", "2025-12-23", extra.isoformat()]))
        self.assertEqual(list(response.data["2025-12-22"]), list(BUILDINGS))

    def test_counts_open_room_bookings(self) -> None:
        self._book("131", "am")
        self._book("131", "pm")
        self._book("133", "am")

        building1 = self.client.get(self.url).data["2025-12-22"]["building1"]

        self.assertEqual(building1["booked_slots"], 3)
        self.assertEqual(building1["available_slots"], 2 * _open_count("building1") - 3)
        self.assertNotIn("131", building1["available_rooms"])
        self.assertIn("133", building1["available_rooms"])
        self.assertNotIn("132", building1["available_rooms"])
        self.assertIn({"room_id": "133", "slot": "am", "booked_by": "Mathematics"}, building1["booked_rooms"])

    def test_deleted_booker_still_counts_as_unknown(self) -> None:
        leaver = User.objects.create_user("hs-old", password="OldPass123")
        Booking.objects.create(room_id="131", date=DAY, slot="am", booked_by=leaver)
        leaver.delete()

        building1 = self.client.get(self.url).data["2025-12-22"]["building1"]

        self.assertEqual(building1["booked_slots"], 1)
        self.assertEqual(building1["booked_rooms"], [{"room_id": "131", "slot": "am", "booked_by": "Unknown"}])

    def test_closed_room_bookings_do_not_count(self) -> None:
        self._book("132", "am")
        self._book("zzz-unknown", "am")

        data = self.client.get(self.url).data["2025-12-22"]

        for building, stats in data.items():
            self.assertEqual(stats["booked_slots"], 0, building)
            self.assertEqual(stats["available_slots"], 2 * _open_count(building), building)

    def test_slot_arithmetic_holds(self) -> None:
        for room_id in ("131", "231", "A1", "music1", "english", "fablab"):
            self._book(room_id, "am")
        self._book("231", "pm", day=date(2025, 12, 23))

        data = self.client.get(self.url).data

        for day_stats in data.values():
            for building, stats in day_stats.items():
                self.assertEqual(
                    stats["booked_slots"] + stats["available_slots"],
                    2 * _open_count(building),
                    building,
                )
        self.assertEqual(data["2025-12-22"]["building5"]["booked_slots"], 1)
        self.assertEqual(data["2025-12-23"]["building2"]["booked_slots"], 1)

    def test_slot_arithmetic_holds_for_random_bookings(self) -> None:
        rng = random.Random(2025)
        candidates = [
            (room.room_id, slot, day)
            for rooms in BUILDINGS.values()
            for room in rooms
            for slot in ("am", "pm")
            for day in (DAY, date(2025, 12, 23))
        ]
        for room_id, slot, day in rng.sample(candidates, 60):
            self._book(room_id, slot, day)

        data = self.client.get(self.url).data

        for day_stats in data.values():
            for building, stats in day_stats.items():
                self.assertEqual(stats["booked_slots"] + stats["available_slots"], 2 * _open_count(building))
                self.assertEqual(stats["booked_slots"], len(stats["booked_rooms"]))

    def test_custom_rooms_count_in_misc_building(self) -> None:
        CustomRoom.objects.create(room_id="custom-1", room_name="Gym")
        self._book("custom-1", "pm")

        building6 = self.client.get(self.url).data["2025-12-22"]["building6"]

        self.assertEqual(building6["booked_slots"], 1)
        self.assertEqual(building6["available_slots"], 2 * (_open_count("building6") + 1) - 1)
        self.assertIn("custom-1", building6["available_rooms"])
