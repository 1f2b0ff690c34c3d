from __future__ import annotations

from datetime import date, time
from typing import Dict, Iterable, Optional, Protocol, Sequence

from ..models import Booking


class BookingRepository(Protocol):
    async def lock_week(self, week_start: date) -> None: ...

    async def insert_booking(
        self,
        *,
        name: str,
        email: str | None,
        phone: str,
        purpose: str,
        date: date,
        time_slot: time,
    ) -> Booking: ...

    async def count_by_date_and_slot(self, day: date, time_slot: time) -> int: ...

    async def count_by_date(self, day: date) -> int: ...

    async def count_all(self) -> int: ...

    async def counts_by_slot(self, day: date) -> Dict[time, int]: ...

    async def count_by_identity_and_week(
        self,
        *,
        phone: str,
        email: str | None,
        week_start: date,
        week_end: date,
    ) -> int: ...

    async def list_by_date_range(
        self,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[Booking]: ...

    async def delete_by_id(self, booking_id: int) -> Booking | None: ...

    async def delete_by_ids(self, booking_ids: Iterable[int]) -> list[Booking]: ...
