"""Bookings app package.

This app owns the contest room ledger: half-day (morning/afternoon) slot
bookings per room and date, the closed-room set, admin-created custom
rooms, extra bookable dates and the contest name. Double booking is
prevented by a unique (room, date, slot) constraint and all-or-nothing
batch reservations inside a database transaction.
"""
