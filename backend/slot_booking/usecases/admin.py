from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List, Optional, Sequence

from ..domain.catalog import SlotCatalog
from ..domain.errors import InvalidInput, NotFound, ValidationError
from ..domain.repositories import BookingRepository
from ..models import Booking
from ..utils.export import bookings_to_xlsx


def _check_range(start: Optional[date], end: Optional[date]) -> None:
    if start is not None and end is not None and start > end:
        raise InvalidInput("startDate must not be after endDate")


async def list_bookings(
    repo: BookingRepository,
    *,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> Sequence[Booking]:
    _check_range(start, end)
    return await repo.list_by_date_range(start, end)


@dataclass(frozen=True)
class BookingStats:
    total_bookings: int
    daily_capacity: int

    @property
    def available_bookings(self) -> int:
        return max(self.daily_capacity - self.total_bookings, 0)


async def get_stats(
    repo: BookingRepository,
    catalog: SlotCatalog,
    *,
    day: Optional[date] = None,
) -> BookingStats:
    total = await repo.count_by_date(day) if day is not None else await repo.count_all()
    return BookingStats(total_bookings=total, daily_capacity=catalog.daily_capacity)


async def export_bookings(
    repo: BookingRepository,
    *,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> bytes:
    bookings = await list_bookings(repo, start=start, end=end)
    return bookings_to_xlsx(bookings)


async def delete_booking(repo: BookingRepository, *, booking_id: int) -> Booking:
    booking = await repo.delete_by_id(booking_id)
    if booking is None:
        raise NotFound("booking not found", booking_id=booking_id)
    return booking


@dataclass(frozen=True)
class BulkDeleteResult:
    deleted: List[Booking]
    not_found: List[int] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.deleted)


async def delete_bookings(repo: BookingRepository, *, booking_ids: Iterable[int]) -> BulkDeleteResult:
    """Delete every existing id; ids that do not exist are reported, not raised."""
    requested = list(dict.fromkeys(booking_ids))
    if not requested:
        raise ValidationError([{"field": "ids", "message": "At least one booking id is required"}])
    deleted = await repo.delete_by_ids(requested)
    found = {booking.id for booking in deleted}
    return BulkDeleteResult(deleted=deleted, not_found=[i for i in requested if i not in found])
