from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping

from ..domain.catalog import SlotCatalog
from ..domain.errors import AdmissionRejected, InvalidInput
from ..domain.repositories import BookingRepository
from ..domain.services import ensure_day_has_room, ensure_no_booking_this_week, ensure_slot_has_room
from ..domain.validation import BookingRequest, normalize_phone, validate_booking_request
from ..models import Booking
from ..utils.time import week_bounds

logger = logging.getLogger(__name__)


async def create_booking(
    repo: BookingRepository,
    catalog: SlotCatalog,
    *,
    payload: Mapping[str, Any],
) -> Booking:
    """
    Validate and admit one booking. The caller owns the transaction: any
    exception raised here must roll it back, so nothing is written on rejection.
    """
    request = validate_booking_request(payload, catalog)
    try:
        return await _admit(repo, catalog, request)
    except AdmissionRejected as exc:
        logger.info(
            "booking rejected: %s date=%s slot=%s",
            exc.reason,
            request.date.isoformat(),
            request.time_slot.strftime("%H:%M"),
        )
        raise


async def _admit(repo: BookingRepository, catalog: SlotCatalog, request: BookingRequest) -> Booking:
    week_start, week_end = week_bounds(request.date)
    await repo.lock_week(week_start)

    slot_count = await repo.count_by_date_and_slot(request.date, request.time_slot)
    slot_left = ensure_slot_has_room(slot_count, capacity=catalog.slot_capacity)

    weekly = await repo.count_by_identity_and_week(
        phone=request.phone,
        email=request.email,
        week_start=week_start,
        week_end=week_end,
    )
    ensure_no_booking_this_week(weekly)

    day_count = await repo.count_by_date(request.date)
    day_left = ensure_day_has_room(day_count, capacity=catalog.daily_capacity)

    booking = await repo.insert_booking(
        name=request.name,
        email=request.email,
        phone=request.phone,
        purpose=request.purpose,
        date=request.date,
        time_slot=request.time_slot,
    )
    logger.debug(
        "booking admitted date=%s slot=%s slot_left=%d day_left=%d",
        request.date.isoformat(),
        request.time_slot.strftime("%H:%M"),
        slot_left,
        day_left,
    )
    return booking


@dataclass(frozen=True)
class WeeklyStatus:
    week_start: date
    week_end: date
    weekly_bookings: int

    @property
    def has_booked_this_week(self) -> bool:
        return self.weekly_bookings > 0

    @property
    def can_book(self) -> bool:
        return not self.has_booked_this_week


async def get_weekly_status(
    repo: BookingRepository,
    *,
    phone: str | None,
    email: str | None,
    day: date,
) -> WeeklyStatus:
    normalized_phone = normalize_phone(phone or "")
    if not normalized_phone:
        raise InvalidInput("phone is required")
    week_start, week_end = week_bounds(day)
    count = await repo.count_by_identity_and_week(
        phone=normalized_phone,
        email=(email or "").strip() or None,
        week_start=week_start,
        week_end=week_end,
    )
    return WeeklyStatus(week_start=week_start, week_end=week_end, weekly_bookings=count)
