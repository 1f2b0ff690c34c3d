from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from ..deps import get_session, get_slot_catalog
from ..domain.catalog import SlotCatalog
from ..domain.errors import BookingError
from ..infrastructure.repositories import SqlAlchemyBookingRepository
from ..schemas import BookingDeleted, BookingRead, BulkDeleteRead, BulkDeleteRequest, StatsRead
from ..usecases import admin as admin_usecase
from ..utils.audit_log import audit_booking
from ..utils.export import XLSX_MEDIA_TYPE, export_filename
from ..utils.time import utc_now_naive
from .errors import parse_date_param, to_http_exception

# No authentication: the admin surface is open, as in the system it replaces.
router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/bookings", response_model=List[BookingRead])
async def list_bookings(
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
    session: AsyncSession = Depends(get_session),
) -> list[BookingRead]:
    start = parse_date_param(start_date, "startDate")
    end = parse_date_param(end_date, "endDate")
    repo = SqlAlchemyBookingRepository(session)
    try:
        rows = await admin_usecase.list_bookings(repo, start=start, end=end)
    except BookingError as exc:
        raise to_http_exception(exc) from exc
    return [BookingRead.from_db(b) for b in rows]


@router.delete("/bookings/{booking_id}", response_model=BookingDeleted)
async def delete_booking(
    booking_id: int = Path(..., ge=1),
    session: AsyncSession = Depends(get_session),
) -> BookingDeleted:
    repo = SqlAlchemyBookingRepository(session)
    try:
        async with session.begin():
            booking = await admin_usecase.delete_booking(repo, booking_id=booking_id)
            audit_booking(booking, action="booking.deleted", initiator="admin")
    except BookingError as exc:
        raise to_http_exception(exc) from exc
    return BookingDeleted(booking=BookingRead.from_db(booking))


@router.delete("/bookings", response_model=BulkDeleteRead)
async def delete_bookings(
    payload: BulkDeleteRequest,
    session: AsyncSession = Depends(get_session),
) -> BulkDeleteRead:
    repo = SqlAlchemyBookingRepository(session)
    try:
        async with session.begin():
            result = await admin_usecase.delete_bookings(repo, booking_ids=payload.ids)
            for booking in result.deleted:
                audit_booking(booking, action="booking.deleted", initiator="admin")
    except BookingError as exc:
        raise to_http_exception(exc) from exc
    return BulkDeleteRead.from_result(result)


@router.get("/export")
async def export_bookings(
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
    session: AsyncSession = Depends(get_session),
) -> Response:
    start = parse_date_param(start_date, "startDate")
    end = parse_date_param(end_date, "endDate")
    repo = SqlAlchemyBookingRepository(session)
    try:
        content = await admin_usecase.export_bookings(repo, start=start, end=end)
    except BookingError as exc:
        raise to_http_exception(exc) from exc
    filename = export_filename(start, end, now=utc_now_naive())
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/stats", response_model=StatsRead)
async def get_stats(
    day: Optional[str] = Query(default=None, alias="date"),
    session: AsyncSession = Depends(get_session),
    catalog: SlotCatalog = Depends(get_slot_catalog),
) -> StatsRead:
    parsed = parse_date_param(day, "date")
    repo = SqlAlchemyBookingRepository(session)
    stats = await admin_usecase.get_stats(repo, catalog, day=parsed)
    return StatsRead.from_domain(stats)
