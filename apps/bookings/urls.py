"""URL routing for the booking domain."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from .views import BookingDateViewSet, BookingViewSet, CustomRoomViewSet

router = SimpleRouter()
router.register(r"custom-rooms", CustomRoomViewSet, basename="custom-room")
router.register(r"dates", BookingDateViewSet, basename="booking-date")
router.register(r"", BookingViewSet, basename="booking")

urlpatterns = [
    path("", include(router.urls)),
]
