from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Dict, List, Mapping

from .catalog import SlotCatalog, format_slot
from .errors import DailyLimitReached, SlotFull, WeeklyLimitExceeded


def ensure_slot_has_room(booked: int, *, capacity: int) -> int:
    """Return spots left in the slot after one more booking, or raise SlotFull."""
    if booked >= capacity:
        raise SlotFull("This time slot is fully booked")
    return capacity - booked - 1


def ensure_no_booking_this_week(weekly_bookings: int) -> None:
    if weekly_bookings > 0:
        raise WeeklyLimitExceeded("Only one booking per week is allowed")


def ensure_day_has_room(booked: int, *, capacity: int) -> int:
    if booked >= capacity:
        raise DailyLimitReached(f"Daily booking limit reached ({capacity} bookings)")
    return capacity - booked - 1


@dataclass(frozen=True)
class SlotOccupancy:
    booking_count: int
    capacity: int
    is_available: bool

    @property
    def is_fully_booked(self) -> bool:
        return not self.is_available

    @property
    def available_spots(self) -> int:
        return max(self.capacity - self.booking_count, 0)


@dataclass(frozen=True)
class DayAvailability:
    date: date
    slots: Dict[str, SlotOccupancy]
    total_bookings: int
    daily_capacity: int

    @property
    def is_daily_limit_reached(self) -> bool:
        return self.total_bookings >= self.daily_capacity

    @property
    def available_slots(self) -> List[str]:
        return [label for label, occ in self.slots.items() if occ.is_available]

    @property
    def fully_booked_slots(self) -> List[str]:
        return [label for label, occ in self.slots.items() if occ.is_fully_booked]


def build_day_availability(
    catalog: SlotCatalog,
    *,
    day: date,
    counts: Mapping[time, int],
) -> DayAvailability:
    """
    Combine grouped booking counts with the catalog.
    Times outside the catalog (left over from an earlier catalog) are reported
    as full so that the per-slot counts always add up to the day total.
    """
    day_total = sum(counts.values())
    slots: Dict[str, SlotOccupancy] = {}
    for slot in catalog.times:
        booked = counts.get(slot, 0)
        slots[format_slot(slot)] = SlotOccupancy(
            booking_count=booked,
            capacity=catalog.slot_capacity,
            is_available=booked < catalog.slot_capacity,
        )
    for slot in sorted(set(counts) - set(catalog.times)):
        slots[format_slot(slot)] = SlotOccupancy(
            booking_count=counts[slot],
            capacity=catalog.slot_capacity,
            is_available=False,
        )
    return DayAvailability(
        date=day,
        slots=slots,
        total_bookings=day_total,
        daily_capacity=catalog.daily_capacity,
    )


def utilization_rate(total: int, capacity: int) -> float:
    """Percentage of capacity used, rounded to one decimal."""
    if capacity <= 0:
        return 0.0
    return round(total / capacity * 100, 1)
