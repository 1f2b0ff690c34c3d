from datetime import date, datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .domain.services import DayAvailability, SlotOccupancy
from .models import Booking
from .usecases.admin import BookingStats, BulkDeleteResult
from .usecases.bookings import WeeklyStatus
from .usecases.slots import OverallStatus


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BookingCreate(BaseModel):
    """Raw request body; field rules are applied by the admission service."""

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    purpose: Optional[str] = None
    date: Optional[str] = None
    time_slot: Optional[str] = None


class BookingRead(BaseModel):
    id: int
    name: str
    email: Optional[str]
    phone: str
    purpose: str
    date: date
    time_slot: str
    created_at: datetime

    @classmethod
    def from_db(cls, booking: Booking) -> "BookingRead":
        return cls(
            id=booking.id,
            name=booking.name,
            email=booking.email,
            phone=booking.phone,
            purpose=booking.purpose,
            date=booking.date,
            time_slot=booking.time_slot.strftime("%H:%M"),
            created_at=booking.created_at,
        )


class BookingCreated(BaseModel):
    id: int
    message: str = "Booking created successfully"
    booking: BookingRead


class BookingDeleted(BaseModel):
    message: str = "Booking deleted successfully"
    booking: BookingRead


class BulkDeleteRequest(BaseModel):
    ids: List[int] = Field(default_factory=list)


class BulkDeleteRead(CamelModel):
    message: str
    deleted: List[BookingRead]
    count: int
    not_found: List[int]

    @classmethod
    def from_result(cls, result: BulkDeleteResult) -> "BulkDeleteRead":
        return cls(
            message=f"{result.count} booking(s) deleted successfully",
            deleted=[BookingRead.from_db(b) for b in result.deleted],
            count=result.count,
            not_found=result.not_found,
        )


class SlotOccupancyRead(CamelModel):
    booking_count: int
    capacity: int
    is_available: bool
    is_fully_booked: bool
    available_spots: int

    @classmethod
    def from_domain(cls, occupancy: SlotOccupancy) -> "SlotOccupancyRead":
        return cls(
            booking_count=occupancy.booking_count,
            capacity=occupancy.capacity,
            is_available=occupancy.is_available,
            is_fully_booked=occupancy.is_fully_booked,
            available_spots=occupancy.available_spots,
        )


class DayAvailabilityRead(CamelModel):
    date: date
    slots: Dict[str, SlotOccupancyRead]
    total_bookings: int
    daily_capacity: int
    available_slots: List[str]
    fully_booked_slots: List[str]
    is_daily_limit_reached: bool

    @classmethod
    def from_domain(cls, availability: DayAvailability) -> "DayAvailabilityRead":
        return cls(
            date=availability.date,
            slots={label: SlotOccupancyRead.from_domain(occ) for label, occ in availability.slots.items()},
            total_bookings=availability.total_bookings,
            daily_capacity=availability.daily_capacity,
            available_slots=availability.available_slots,
            fully_booked_slots=availability.fully_booked_slots,
            is_daily_limit_reached=availability.is_daily_limit_reached,
        )


class OverallStatusRead(CamelModel):
    date: date
    available_slots: int
    total_bookings: int
    daily_capacity: int
    utilization_rate: float

    @classmethod
    def from_domain(cls, status: OverallStatus) -> "OverallStatusRead":
        return cls(
            date=status.date,
            available_slots=status.available_slots,
            total_bookings=status.total_bookings,
            daily_capacity=status.daily_capacity,
            utilization_rate=status.utilization_rate,
        )


class WeeklyStatusRead(CamelModel):
    has_booked_this_week: bool
    weekly_bookings: int
    can_book: bool
    week_start: date
    week_end: date

    @classmethod
    def from_domain(cls, status: WeeklyStatus) -> "WeeklyStatusRead":
        return cls(
            has_booked_this_week=status.has_booked_this_week,
            weekly_bookings=status.weekly_bookings,
            can_book=status.can_book,
            week_start=status.week_start,
            week_end=status.week_end,
        )


class StatsRead(CamelModel):
    total_bookings: int
    max_bookings: int
    available_bookings: int

    @classmethod
    def from_domain(cls, stats: BookingStats) -> "StatsRead":
        return cls(
            total_bookings=stats.total_bookings,
            max_bookings=stats.daily_capacity,
            available_bookings=stats.available_bookings,
        )
