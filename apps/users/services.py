"""User administration rules and account bootstrapping."""

from __future__ import annotations

import logging
import os
from typing import Iterable

from django.conf import settings  # type: ignore
from django.db import transaction  # type: ignore

from shared.exceptions import ConflictError, ForbiddenError

from .models import User

logger = logging.getLogger(__name__)


def ensure_can_assign_role(actor: User, role: str) -> None:
    """Regular admins may only hand out the plain ``user`` role."""

    if not actor.is_super_admin and role != User.Role.USER:
        raise ForbiddenError('Regular admins can only assign the role "user".')


def ensure_can_manage(actor: User, target: User) -> None:
    """Raise unless ``actor`` outranks ``target``.

    Super-admins manage everyone. Regular admins manage ordinary users only,
    never other admins or super-admins.
    """

    if target.is_super_admin and not actor.is_super_admin:
        raise ForbiddenError("Only a super-admin can modify another super-admin.")
    if target.is_admin and not actor.is_super_admin:
        raise ForbiddenError('Regular admins can only manage users with the role "user".')


def ensure_can_delete(actor: User, target: User) -> None:
    ensure_can_manage(actor, target)
    if actor.pk == target.pk:
        raise ConflictError("You cannot delete your own account.")


@transaction.atomic
def ensure_bootstrap_users(accounts: Iterable[dict] | None = None) -> list[User]:
    """Create or re-assert the fixed administrator accounts.

    Passwords come from the environment variable named in each entry. When it
    is unset a new account gets an unusable password and an existing one
    keeps its current password.
    """

    ensured = []
    for account in accounts if accounts is not None else settings.BOOTSTRAP_USERS:
        password = os.environ.get(account.get("password_env", ""), "")
        user, created = User.objects.get_or_create(
            username=account["username"],
            defaults={"role": account["role"], "display_name": account.get("display_name", "")},
        )
        if created:
            if password:
                user.set_password(password)
            else:
                user.set_unusable_password()
                logger.warning(
                    f"Bootstrap account {user.username} created without a password; "
                    f"set {account.get('password_env')} to enable login"
                )
            user.save()
            logger.info(f"Bootstrap account created: {user.username} ({user.role})")
        else:
            user.role = account["role"]
            if password:
                user.set_password(password)
            user.save()
        ensured.append(user)
    return ensured


@transaction.atomic
def seed_department_users(password: str, departments: Iterable[tuple[str, str]] | None = None) -> tuple[int, int]:
    """Create or refresh the department accounts. Returns (created, updated)."""

    created_count = updated_count = 0
    for username, display_name in departments if departments is not None else settings.DEPARTMENT_USERS:
        user, created = User.objects.get_or_create(
            username=username,
            defaults={"display_name": display_name, "role": User.Role.USER},
        )
        user.display_name = display_name
        user.set_password(password)
        user.save()
        if created:
            created_count += 1
        else:
            updated_count += 1
    logger.info(f"Department accounts seeded: {created_count} created, {updated_count} updated")
    return created_count, updated_count
