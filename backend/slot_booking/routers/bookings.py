import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..deps import get_session, get_slot_catalog, get_today
from ..domain.catalog import SlotCatalog
from ..domain.errors import BookingError
from ..infrastructure.repositories import SqlAlchemyBookingRepository
from ..schemas import BookingCreate, BookingCreated, BookingRead, WeeklyStatusRead
from ..usecases import bookings as booking_usecase
from ..utils.audit_log import audit_booking
from .errors import parse_date_param, to_http_exception

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["bookings"])


@router.post("/bookings", response_model=BookingCreated, status_code=status.HTTP_201_CREATED)
async def create_booking(
    payload: BookingCreate,
    session: AsyncSession = Depends(get_session),
    catalog: SlotCatalog = Depends(get_slot_catalog),
) -> BookingCreated:
    repo = SqlAlchemyBookingRepository(session)
    try:
        async with session.begin():
            booking = await booking_usecase.create_booking(repo, catalog, payload=payload.model_dump())
            audit_booking(booking, action="booking.created", initiator="visitor")
    except BookingError as exc:
        raise to_http_exception(exc) from exc
    except RuntimeError as exc:
        logger.exception("booking not recorded: audit log failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create booking"
        ) from exc

    return BookingCreated(id=booking.id, booking=BookingRead.from_db(booking))


@router.get("/user/weekly-status", response_model=WeeklyStatusRead)
async def get_weekly_status(
    phone: Optional[str] = Query(default=None),
    email: Optional[str] = Query(default=None),
    day: Optional[str] = Query(default=None, alias="date"),
    session: AsyncSession = Depends(get_session),
    today: date = Depends(get_today),
) -> WeeklyStatusRead:
    requested = parse_date_param(day, "date") or today
    repo = SqlAlchemyBookingRepository(session)
    try:
        result = await booking_usecase.get_weekly_status(repo, phone=phone, email=email, day=requested)
    except BookingError as exc:
        raise to_http_exception(exc) from exc
    return WeeklyStatusRead.from_domain(result)
