"""API tests for closed rooms and custom rooms."""

from __future__ import annotations

from datetime import date

from django.test import override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.catalog import BUILDINGS, default_closed_rooms
from apps.bookings.models import Booking, CustomRoom, RoomStatus
from apps.users.models import User


class RoomStatusAPITests(APITestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user("hs-sci", password="SciPass123")
        self.admin = User.objects.create_user("deputy", password="DeputyPass1", role=User.Role.ADMIN)
        self.client.force_authenticate(self.admin)

    def _post(self, name: str, room_id: str):
        return self.client.post(reverse(name, kwargs={"room_id": room_id}))

    def test_status_is_seeded_with_default_closed_rooms(self) -> None:
        self.client.force_authenticate(self.user)
        response = self.client.get(reverse("booking-room-status"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["closed_rooms"], default_closed_rooms())
        self.assertIn("library", response.data["closed_rooms"])
        self.assertNotIn("131", response.data["closed_rooms"])

    def test_close_and_open_are_idempotent(self) -> None:
        self._post("booking-close-room", "131")
        response = self._post("booking-close-room", "131")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["closed_rooms"].count("131"), 1)

        self._post("booking-open-room", "131")
        response = self._post("booking-open-room", "131")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertNotIn("131", RoomStatus.load().closed_rooms)

    def test_toggle_flips_state(self) -> None:
        response = self._post("booking-toggle-room", "library")
        self.assertFalse(response.data["is_closed"])
        self.assertNotIn("library", response.data["closed_rooms"])

        response = self._post("booking-toggle-room", "library")
        self.assertTrue(response.data["is_closed"])
        self.assertIn("library", RoomStatus.load().closed_rooms)

    def test_reopened_room_accepts_user_bookings(self) -> None:
        self._post("booking-open-room", "132")
        self.client.force_authenticate(self.user)

        response = self.client.post(
            reverse("booking-list"),
            {"date": "2025-12-22", "selections": [{"room_id": "132", "slot": "am"}]},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)

    def test_user_cannot_change_room_status(self) -> None:
        self.client.force_authenticate(self.user)
        for name in ("booking-open-room", "booking-close-room", "booking-toggle-room"):
            response = self._post(name, "132")
            self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(RoomStatus.load().closed_rooms, default_closed_rooms())


class CustomRoomAPITests(APITestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user("hs-sci", password="SciPass123")
        self.admin = User.objects.create_user("deputy", password="DeputyPass1", role=User.Role.ADMIN)
        self.client.force_authenticate(self.admin)
        self.list_url = reverse("custom-room-list")

    def test_ids_are_sequential(self) -> None:
        first = self.client.post(self.list_url, {"room_name": "Gym", "subtitle": "Hall"}, format="json")
        second = self.client.post(self.list_url, {"room_name": "Stage"}, format="json")

        self.assertEqual(first.status_code, status.HTTP_201_CREATED, first.data)
        self.assertEqual(first.data["room_id"], "custom-1")
        self.assertEqual(first.data["subtitle"], "Hall")
        self.assertEqual(second.data["room_id"], "custom-2")

        response = self.client.get(self.list_url)
        self.assertEqual([row["room_id"] for row in response.data], ["custom-1", "custom-2"])

    def test_taken_id_is_skipped(self) -> None:
        CustomRoom.objects.create(room_id="custom-2", room_name="Old")
        response = self.client.post(self.list_url, {"room_name": "New"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["room_id"], "custom-3")

    @override_settings(CUSTOM_ROOM_ID_ATTEMPTS=1)
    def test_gives_up_when_ids_keep_colliding(self) -> None:
        CustomRoom.objects.create(room_id="custom-2", room_name="Old")
        response = self.client.post(self.list_url, {"room_name": "New"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_blank_name_is_rejected(self) -> None:
        response = self.client.post(self.list_url, {"room_name": "   "}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(CustomRoom.objects.exists())

    def test_user_cannot_create_or_delete(self) -> None:
        room = CustomRoom.objects.create(room_id="custom-1", room_name="Gym")
        self.client.force_authenticate(self.user)

        self.assertEqual(self.client.get(self.list_url).status_code, status.HTTP_200_OK)
        response = self.client.post(self.list_url, {"room_name": "Stage"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        response = self.client.delete(reverse("custom-room-detail", kwargs={"room_id": room.room_id}))
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_delete_cascades_to_bookings_and_closed_flag(self) -> None:
        CustomRoom.objects.create(room_id="custom-1", room_name="Gym")
        Booking.objects.create(room_id="custom-1", date=date(2025, 12, 22), slot="am", booked_by=self.user)
        Booking.objects.create(room_id="131", date=date(2025, 12, 22), slot="am", booked_by=self.user)
        self.client.post(reverse("booking-close-room", kwargs={"room_id": "custom-1"}))

        response = self.client.delete(reverse("custom-room-detail", kwargs={"room_id": "custom-1"}))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["deleted_bookings"], 1)
        self.assertFalse(CustomRoom.objects.exists())
        self.assertEqual(list(Booking.objects.values_list("room_id", flat=True)), ["131"])
        self.assertNotIn("custom-1", RoomStatus.load().closed_rooms)

    def test_delete_missing_room(self) -> None:
        response = self.client.delete(reverse("custom-room-detail", kwargs={"room_id": "custom-9"}))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_room_listing_appends_custom_rooms(self) -> None:
        CustomRoom.objects.create(room_id="custom-1", room_name="Gym")

        response = self.client.get(reverse("booking-rooms"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(list(response.data), list(BUILDINGS))
        self.assertEqual(response.data["building1"][0]["room_id"], "131")
        last = response.data["building6"][-1]
        self.assertEqual((last["room_id"], last["room_name"]), ("custom-1", "Gym"))
