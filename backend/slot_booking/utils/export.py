from __future__ import annotations

from datetime import date, datetime
from io import BytesIO
from typing import Iterable, Optional

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from ..models import Booking

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
COLUMNS = ("ID", "Name", "Email", "Phone", "Purpose", "Date", "Time Slot", "Created At")
_WIDTHS = (8, 24, 30, 18, 40, 12, 10, 20)


def bookings_to_xlsx(bookings: Iterable[Booking]) -> bytes:
    """Serialize bookings, in the given order, into an xlsx workbook."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Bookings"
    sheet.append(COLUMNS)
    for booking in bookings:
        sheet.append(
            [
                booking.id,
                booking.name,
                booking.email,
                booking.phone,
                booking.purpose,
                booking.date,
                booking.time_slot.strftime("%H:%M"),
                booking.created_at,
            ]
        )
    for index, width in enumerate(_WIDTHS, start=1):
        sheet.column_dimensions[get_column_letter(index)].width = width
    sheet.freeze_panes = "A2"

    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def export_filename(start: Optional[date], end: Optional[date], *, now: datetime) -> str:
    start_part = start.isoformat() if start else "all"
    end_part = end.isoformat() if end else "all"
    return f"bookings_{start_part}_{end_part}_{now.strftime('%Y-%m-%d_%H-%M')}.xlsx"
