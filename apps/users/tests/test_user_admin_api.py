"""API tests for account administration."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.users.models import User


class UserAdminAPITests(APITestCase):
    """Covers the admin / super-admin tier rules."""

    def setUp(self) -> None:
        self.super_admin = User.objects.create_user("root", password="RootPass123", role=User.Role.SUPER_ADMIN)
        self.admin = User.objects.create_user("deputy", password="DeputyPass1", role=User.Role.ADMIN)
        self.other_admin = User.objects.create_user("deputy2", password="DeputyPass2", role=User.Role.ADMIN)
        self.user = User.objects.create_user("hs-art", password="ArtPass123")
        self.list_url = reverse("user-list")

    def _detail(self, user: User) -> str:
        return reverse("user-detail", args=[user.pk])

    def test_regular_user_cannot_list_users(self) -> None:
        self.client.force_authenticate(self.user)
        response = self.client.get(self.list_url)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_me_is_available_to_every_user(self) -> None:
        self.client.force_authenticate(self.user)
        response = self.client.get(reverse("user-me"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["role"], User.Role.USER)

    def test_admin_lists_users(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.get(self.list_url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        usernames = {row["username"] for row in response.data}
        self.assertTrue({"root", "deputy", "hs-art"}.issubset(usernames))

    def test_admin_creates_plain_user(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.post(
            self.list_url,
            {"username": "hs-sci", "password": "SciPass123", "display_name": "Science"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        created = User.objects.get(username="hs-sci")
        self.assertEqual(created.role, User.Role.USER)
        self.assertTrue(created.check_password("SciPass123"))

    def test_admin_cannot_create_admin(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.post(
            self.list_url,
            {"username": "sneaky", "password": "Sneaky123", "role": User.Role.ADMIN},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(User.objects.filter(username="sneaky").exists())

    def test_super_admin_creates_admin(self) -> None:
        self.client.force_authenticate(self.super_admin)
        response = self.client.post(
            self.list_url,
            {"username": "deputy3", "password": "Deputy333", "role": User.Role.ADMIN},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertTrue(User.objects.get(username="deputy3").is_admin)

    def test_create_requires_password(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.post(self.list_url, {"username": "nopass"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_duplicate_username_is_rejected(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.post(
            self.list_url,
            {"username": "hs-art", "password": "Another123"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["detail"], "Username already exists.")

    def test_rename_onto_taken_username_is_rejected(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.patch(self._detail(self.user), {"username": "root"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["detail"], "Username already exists.")
        self.user.refresh_from_db()
        self.assertEqual(self.user.username, "hs-art")

    def test_invalid_username_characters_are_rejected(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.post(
            self.list_url,
            {"username": "bad name!", "password": "Another123"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("username", response.data)

    def test_admin_updates_plain_user_password(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.patch(
            self._detail(self.user),
            {"password": "NewArtPass1", "display_name": "Arts"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password("NewArtPass1"))
        self.assertEqual(self.user.display_name, "Arts")

    def test_admin_cannot_modify_other_admin(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.patch(self._detail(self.other_admin), {"display_name": "x"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_cannot_promote_user(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.patch(self._detail(self.user), {"role": User.Role.ADMIN}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.user.refresh_from_db()
        self.assertEqual(self.user.role, User.Role.USER)

    def test_admin_cannot_modify_super_admin(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.patch(self._detail(self.super_admin), {"display_name": "x"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_super_admin_demotes_admin(self) -> None:
        self.client.force_authenticate(self.super_admin)
        response = self.client.patch(self._detail(self.other_admin), {"role": User.Role.USER}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.other_admin.refresh_from_db()
        self.assertFalse(self.other_admin.is_admin)
        self.assertFalse(self.other_admin.is_staff)

    def test_admin_deletes_plain_user(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.delete(self._detail(self.user))
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(User.objects.filter(pk=self.user.pk).exists())

    def test_admin_cannot_delete_admin(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.delete(self._detail(self.other_admin))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_super_admin_cannot_delete_self(self) -> None:
        self.client.force_authenticate(self.super_admin)
        response = self.client.delete(self._detail(self.super_admin))
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertTrue(User.objects.filter(pk=self.super_admin.pk).exists())
