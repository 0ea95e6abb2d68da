"""Domain services for the booking ledger.

The ledger owns the (room, date, slot) reservation facts. A unique
constraint on those three columns is the final word on double booking;
`reserve` checks for conflicts first so it can report every clash of a
batch at once, then inserts the whole batch in one transaction.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone as dt_timezone
from typing import Iterable, TYPE_CHECKING

from django.contrib.auth import get_user_model  # type: ignore
from django.db import IntegrityError, transaction  # type: ignore
from django.db.models import Q  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.dateparse import parse_date, parse_datetime  # type: ignore

from shared.exceptions import BadRequestError, ConflictError, ForbiddenError, NotFoundError

from .models import Booking
from .rooms import closed_room_ids

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from apps.users.models import User

logger = logging.getLogger(__name__)


def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def normalize_booking_date(value) -> date:
    """Reduce a date, datetime or ISO string to its UTC calendar date."""

    if isinstance(value, datetime):
        if timezone.is_aware(value):
            value = value.astimezone(dt_timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            parsed_dt = parse_datetime(text) if "T" in text or " " in text else None
            if parsed_dt is not None:
                return normalize_booking_date(parsed_dt)
            parsed = parse_date(text)
        except ValueError:
            parsed = None
        if parsed is not None:
            return parsed
    raise BadRequestError(f"Invalid date: {value!r}. Use YYYY-MM-DD.")


def list_bookings(day) -> "Iterable[Booking]":
    return Booking.objects.filter(date=normalize_booking_date(day)).select_related("booked_by")


def _booker_payload(user) -> dict | None:
    if user is None:
        return None
    return {"username": user.username, "display_name": user.display_label}


def list_bookings_with_booker(day) -> list[dict]:
    return [
        {
            "room_id": booking.room_id,
            "slot": booking.slot,
            "booked_by": _booker_payload(booking.booked_by),
        }
        for booking in list_bookings(day)
    ]


def booking_status(day) -> dict[str, dict[str, bool]]:
    """Compact occupancy map: {room_id: {"am": True, "pm": True}}."""

    status: dict[str, dict[str, bool]] = {}
    for room_id, slot in Booking.objects.filter(date=normalize_booking_date(day)).values_list("room_id", "slot"):
        status.setdefault(room_id, {})[slot] = True
    return status


def list_all_bookings():
    return Booking.objects.select_related("booked_by").order_by("date", "room_id", "slot")


def _clean_selections(selections: Iterable[dict]) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    for selection in selections:
        room_id = str(selection.get("room_id", "")).strip()
        slot = selection.get("slot")
        if not room_id:
            raise BadRequestError("room_id is required for every selection.")
        if slot not in Booking.Slot.values:
            raise BadRequestError(f"Invalid slot {slot!r}; expected 'am' or 'pm'.")
        if (room_id, slot) in pairs:
            raise BadRequestError(f"{room_id} ({slot}) is selected more than once.")
        pairs.append((room_id, slot))
    if not pairs:
        raise BadRequestError("At least one selection is required.")
    return pairs


def _resolve_booker(requester: "User", on_behalf_of_user_id) -> "User":
    if not on_behalf_of_user_id or not requester.is_admin:
        return requester
    User = get_user_model()
    try:
        return User.objects.get(pk=on_behalf_of_user_id)
    except (User.DoesNotExist, ValueError, TypeError):
        raise NotFoundError("User to book for was not found.")


def find_conflicts(day: date, pairs: Iterable[tuple[str, str]]) -> list[str]:
    """Labels like ``"131 (am)"`` for every requested pair already booked."""

    pairs = list(pairs)
    query = Q()
    for room_id, slot in pairs:
        query |= Q(room_id=room_id, slot=slot)
    taken_qs = _lock_queryset_if_possible(Booking.objects.filter(query, date=day))
    taken = set(taken_qs.values_list("room_id", "slot"))
    return [f"{room_id} ({slot})" for room_id, slot in pairs if (room_id, slot) in taken]


def reserve(day, selections: Iterable[dict], requester: "User", on_behalf_of_user_id=None) -> dict:
    """Book every selection for ``day`` or none of them."""

    booking_date = normalize_booking_date(day)
    pairs = _clean_selections(selections)

    if not requester.is_admin:
        closed = closed_room_ids()
        for room_id, _slot in pairs:
            if room_id in closed:
                logger.warning(f"{requester.username} tried to book closed room {room_id}")
                raise ConflictError(f"Room {room_id} is closed for booking. Please contact an administrator.")

    booker = _resolve_booker(requester, on_behalf_of_user_id)

    try:
        with transaction.atomic():
            conflicts = find_conflicts(booking_date, pairs)
            if conflicts:
                raise ConflictError(f"These time slots are already booked: {', '.join(conflicts)}")
            created = Booking.objects.bulk_create(
                [
                    Booking(room_id=room_id, date=booking_date, slot=slot, booked_by=booker)
                    for room_id, slot in pairs
                ]
            )
    except ConflictError as exc:
        logger.warning(f"Reservation by {requester.username} on {booking_date} rejected: {exc.detail}")
        raise
    except IntegrityError:
        # Another request took one of the slots between the check and the insert.
        logger.warning(f"Concurrent reservation clash for {requester.username} on {booking_date}")
        raise ConflictError("One or more of these time slots were just booked by someone else.")

    logger.info(
        f"{requester.username} booked {len(created)} slot(s) on {booking_date} for {booker.username}"
    )
    return {"count": len(created), "bookings": created}


def _get_booking(booking_id) -> Booking:
    try:
        return Booking.objects.select_related("booked_by").get(pk=booking_id)
    except (Booking.DoesNotExist, ValueError, TypeError):
        raise NotFoundError("Booking not found.")


def cancel(booking_id, requester_id, is_admin: bool = False) -> Booking:
    """Delete a booking; only its booker or an admin may do so."""

    booking = _get_booking(booking_id)
    # Bookings whose booker was deleted can only be cancelled by an admin.
    is_owner = booking.booked_by_id is not None and str(booking.booked_by_id) == str(requester_id)
    if not is_admin and not is_owner:
        raise ConflictError("You can only delete your own bookings")
    deleted_id = booking.pk
    booking.delete()
    booking.pk = deleted_id
    logger.info(f"Booking {deleted_id} ({booking}) cancelled by user {requester_id}")
    return booking


def reset_room(room_id: str, day, is_admin: bool) -> dict:
    if not is_admin:
        raise ConflictError("Only admin can reset room bookings.")
    if not room_id:
        raise BadRequestError("room_id and date are required.")
    booking_date = normalize_booking_date(day)
    deleted_count, _details = Booking.objects.filter(room_id=room_id, date=booking_date).delete()
    logger.info(f"Room {room_id} reset for {booking_date}: {deleted_count} booking(s) removed")
    return {"message": f"Reset room {room_id} successfully", "deleted_count": deleted_count}


def reset_all(is_admin: bool) -> dict:
    if not is_admin:
        raise ConflictError("Only admin can reset all bookings.")
    deleted_count, _details = Booking.objects.all().delete()
    logger.info(f"All bookings reset: {deleted_count} booking(s) removed")
    return {"message": "Reset all bookings successfully", "deleted_count": deleted_count}


def update_details(booking_id, text: str, requester: "User") -> Booking:
    """Edit the free-text details of a booking."""

    booking = _get_booking(booking_id)
    can_edit = requester.is_admin or requester.is_super_admin or booking.booked_by_id == requester.pk
    if not can_edit:
        raise ForbiddenError("You do not have permission to edit this booking.")
    booking.details = text or ""
    booking.save(update_fields=["details", "updated_at"])
    return booking
