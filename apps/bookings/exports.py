"""Excel export of the booking ledger."""

from __future__ import annotations

from django.http import HttpResponse  # type: ignore
from django.utils import timezone  # type: ignore
from openpyxl import Workbook  # type: ignore
from openpyxl.styles import Alignment, Font  # type: ignore
from openpyxl.utils import get_column_letter  # type: ignore

from .models import Booking
from .services import list_all_bookings

EXPORT_FILENAME = "bookings-export.xlsx"
XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
HEADERS = ["Room ID", "Date", "Slot", "Username", "Booked by", "Booked at"]
COLUMN_WIDTHS = [16, 12, 12, 20, 32, 20]
SLOT_LABELS = {Booking.Slot.AM: "Morning", Booking.Slot.PM: "Afternoon"}


def build_bookings_workbook(bookings=None) -> Workbook:
    wb = Workbook()
    ws = wb.active
    ws.title = "Bookings"

    header_font = Font(bold=True)
    for col, header in enumerate(HEADERS, 1):
        cell = ws.cell(row=1, column=col, value=header)
        cell.font = header_font
        cell.alignment = Alignment(horizontal="center")

    row = 2
    for booking in bookings if bookings is not None else list_all_bookings():
        booker = booking.booked_by
        ws.cell(row=row, column=1, value=booking.room_id)
        date_cell = ws.cell(row=row, column=2, value=booking.date)
        date_cell.number_format = "yyyy-mm-dd"
        ws.cell(row=row, column=3, value=SLOT_LABELS.get(booking.slot, booking.slot))
        ws.cell(row=row, column=4, value=booker.username if booker else "")
        ws.cell(row=row, column=5, value=booker.display_label if booker else "Unknown")
        # Excel cells cannot hold tz-aware datetimes.
        created_at = timezone.localtime(booking.created_at).replace(tzinfo=None)
        ts_cell = ws.cell(row=row, column=6, value=created_at)
        ts_cell.number_format = "yyyy-mm-dd hh:mm:ss"
        row += 1

    for index, width in enumerate(COLUMN_WIDTHS, 1):
        ws.column_dimensions[get_column_letter(index)].width = width
    ws.freeze_panes = "A2"
    return wb


def export_bookings_response() -> HttpResponse:
    wb = build_bookings_workbook()
    response = HttpResponse(content_type=XLSX_CONTENT_TYPE)
    response["Content-Disposition"] = f'attachment; filename="{EXPORT_FILENAME}"'
    wb.save(response)
    return response
