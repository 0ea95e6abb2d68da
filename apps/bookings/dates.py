"""Extra bookable dates and display settings."""

from __future__ import annotations

import logging
from datetime import date

from django.conf import settings  # type: ignore
from django.db import transaction  # type: ignore
from django.utils import timezone  # type: ignore

from shared.exceptions import BadRequestError, ConflictError, NotFoundError

from .models import AppSettings, BookingDate
from .services import normalize_booking_date

logger = logging.getLogger(__name__)


def list_booking_dates():
    return BookingDate.objects.filter(is_active=True).order_by("date")


@transaction.atomic
def add_booking_date(day, display_name: str) -> BookingDate:
    """Activate ``day`` as a bookable date, reviving a removed row if any."""

    booking_date = normalize_booking_date(day)
    display_name = (display_name or "").strip()
    if not display_name:
        raise BadRequestError("display_name is required.")
    # "Today" is the event's local day, not the UTC day bookings are stored under.
    if booking_date < timezone.localdate():
        raise BadRequestError("Cannot add a date in the past.")

    existing = BookingDate.objects.select_for_update().filter(date=booking_date).first()
    if existing is not None:
        if existing.is_active:
            raise ConflictError(f"Date {booking_date:%Y-%m-%d} is already a booking date.")
        existing.is_active = True
        existing.display_name = display_name
        existing.save(update_fields=["is_active", "display_name", "updated_at"])
        logger.info(f"Booking date {booking_date} reactivated")
        return existing

    created = BookingDate.objects.create(date=booking_date, display_name=display_name)
    logger.info(f"Booking date {booking_date} added")
    return created


def remove_booking_date(day) -> None:
    booking_date = normalize_booking_date(day)
    updated = BookingDate.objects.filter(date=booking_date, is_active=True).update(
        is_active=False, updated_at=timezone.now()
    )
    if not updated:
        raise NotFoundError("Booking date not found.")
    logger.info(f"Booking date {booking_date} removed")


def bookable_dates() -> list[date]:
    """Default contest dates plus active extra dates, sorted and unique."""

    days = {normalize_booking_date(value) for value in settings.BOOKING_DEFAULT_DATES}
    days.update(list_booking_dates().values_list("date", flat=True))
    return sorted(days)


def get_app_settings() -> AppSettings:
    return AppSettings.load()


@transaction.atomic
def update_contest_name(name: str) -> AppSettings:
    name = (name or "").strip()
    if not name:
        raise BadRequestError("contest_name is required.")
    app_settings = AppSettings.load()
    app_settings.contest_name = name
    app_settings.save(update_fields=["contest_name", "updated_at"])
    logger.info(f"Contest name set to {name!r}")
    return app_settings
