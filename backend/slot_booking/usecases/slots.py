from dataclasses import dataclass
from datetime import date

from ..domain.catalog import SlotCatalog
from ..domain.repositories import BookingRepository
from ..domain.services import DayAvailability, build_day_availability, utilization_rate


async def get_availability(
    repo: BookingRepository,
    catalog: SlotCatalog,
    *,
    day: date,
) -> DayAvailability:
    counts = await repo.counts_by_slot(day)
    return build_day_availability(catalog, day=day, counts=counts)


@dataclass(frozen=True)
class OverallStatus:
    date: date
    total_bookings: int
    daily_capacity: int

    @property
    def available_slots(self) -> int:
        return max(self.daily_capacity - self.total_bookings, 0)

    @property
    def utilization_rate(self) -> float:
        return utilization_rate(self.total_bookings, self.daily_capacity)


async def get_overall_status(
    repo: BookingRepository,
    catalog: SlotCatalog,
    *,
    as_of: date,
) -> OverallStatus:
    total = await repo.count_by_date(as_of)
    return OverallStatus(date=as_of, total_bookings=total, daily_capacity=catalog.daily_capacity)
