from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..deps import get_session, get_slot_catalog, get_today
from ..domain.catalog import SlotCatalog
from ..domain.errors import InvalidInput
from ..infrastructure.repositories import SqlAlchemyBookingRepository
from ..schemas import DayAvailabilityRead, OverallStatusRead
from ..usecases import slots as slot_usecase
from .errors import parse_date_param, to_http_exception

router = APIRouter(prefix="/api/slots", tags=["slots"])


@router.get("/status/overall", response_model=OverallStatusRead)
async def get_overall_status(
    session: AsyncSession = Depends(get_session),
    catalog: SlotCatalog = Depends(get_slot_catalog),
    today: date = Depends(get_today),
) -> OverallStatusRead:
    repo = SqlAlchemyBookingRepository(session)
    result = await slot_usecase.get_overall_status(repo, catalog, as_of=today)
    return OverallStatusRead.from_domain(result)


@router.get("/{day}", response_model=DayAvailabilityRead)
async def get_availability(
    day: str,
    session: AsyncSession = Depends(get_session),
    catalog: SlotCatalog = Depends(get_slot_catalog),
) -> DayAvailabilityRead:
    parsed = parse_date_param(day, "date")
    if parsed is None:
        raise to_http_exception(InvalidInput("date is required"))
    repo = SqlAlchemyBookingRepository(session)
    result = await slot_usecase.get_availability(repo, catalog, day=parsed)
    return DayAvailabilityRead.from_domain(result)
