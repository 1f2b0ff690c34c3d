from __future__ import annotations

import logging
from datetime import date, time
from typing import Dict, Iterable, List, Optional, Sequence

from sqlalchemy import Select, delete, func, insert, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..domain.repositories import BookingRepository
from ..models import Booking, BookingWeekLock
from ..utils.time import utc_now_naive

logger = logging.getLogger(__name__)


class SqlAlchemyBookingRepository(BookingRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def lock_week(self, week_start: date) -> None:
        """
        Write the guard row of the week so concurrent admissions for that week
        wait for this transaction. Must be the first statement of the admission.

        The row is created beforehand in its own short transaction, so the
        locking UPDATE always hits an existing row and never takes a gap lock.
        """
        await self._ensure_week_row(week_start)
        if not await self._bump_week(week_start):
            raise RuntimeError(f"week guard row for {week_start} is missing")

    async def _ensure_week_row(self, week_start: date) -> None:
        try:
            async with self.session.bind.begin() as conn:
                exists = await conn.scalar(
                    select(BookingWeekLock.week_start).where(BookingWeekLock.week_start == week_start)
                )
                if exists is None:
                    await conn.execute(insert(BookingWeekLock).values(week_start=week_start, admissions=0))
        except IntegrityError:
            # Created by a concurrent admission; the row exists now.
            logger.debug("week guard row %s created concurrently", week_start)

    async def _bump_week(self, week_start: date) -> bool:
        stmt = (
            update(BookingWeekLock)
            .where(BookingWeekLock.week_start == week_start)
            .values(admissions=BookingWeekLock.admissions + 1)
        )
        result = await self.session.execute(stmt)
        return bool(result.rowcount)

    async def insert_booking(
        self,
        *,
        name: str,
        email: str | None,
        phone: str,
        purpose: str,
        date: date,
        time_slot: time,
    ) -> Booking:
        booking = Booking(
            name=name,
            email=email,
            phone=phone,
            purpose=purpose,
            date=date,
            time_slot=time_slot,
            created_at=utc_now_naive(),
        )
        self.session.add(booking)
        await self.session.flush()
        return booking

    async def count_by_date_and_slot(self, day: date, time_slot: time) -> int:
        stmt = select(func.count(Booking.id)).where(Booking.date == day, Booking.time_slot == time_slot)
        return int(await self.session.scalar(stmt) or 0)

    async def count_by_date(self, day: date) -> int:
        stmt = select(func.count(Booking.id)).where(Booking.date == day)
        return int(await self.session.scalar(stmt) or 0)

    async def count_all(self) -> int:
        return int(await self.session.scalar(select(func.count(Booking.id))) or 0)

    async def counts_by_slot(self, day: date) -> Dict[time, int]:
        stmt = (
            select(Booking.time_slot, func.count(Booking.id))
            .where(Booking.date == day)
            .group_by(Booking.time_slot)
        )
        rows = await self.session.execute(stmt)
        return {slot: int(count) for slot, count in rows.all()}

    async def count_by_identity_and_week(
        self,
        *,
        phone: str,
        email: str | None,
        week_start: date,
        week_end: date,
    ) -> int:
        identity = Booking.phone == phone
        if email:
            identity = or_(func.lower(Booking.email) == email.lower(), identity)
        stmt = select(func.count(Booking.id)).where(
            Booking.date >= week_start,
            Booking.date <= week_end,
            identity,
        )
        return int(await self.session.scalar(stmt) or 0)

    async def list_by_date_range(
        self,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[Booking]:
        stmt: Select[tuple[Booking]] = select(Booking)
        if start is not None:
            stmt = stmt.where(Booking.date >= start)
        if end is not None:
            stmt = stmt.where(Booking.date <= end)
        stmt = stmt.order_by(Booking.date.desc(), Booking.time_slot.asc(), Booking.id.asc())
        result = await self.session.scalars(stmt)
        return list(result.all())

    async def delete_by_id(self, booking_id: int) -> Booking | None:
        booking = await self.session.get(Booking, booking_id)
        if booking is None:
            return None
        await self.session.delete(booking)
        await self.session.flush()
        return booking

    async def delete_by_ids(self, booking_ids: Iterable[int]) -> List[Booking]:
        ids = sorted(set(booking_ids))
        if not ids:
            return []
        found = await self.session.scalars(select(Booking).where(Booking.id.in_(ids)).order_by(Booking.id))
        bookings = list(found.all())
        if bookings:
            await self.session.execute(delete(Booking).where(Booking.id.in_([b.id for b in bookings])))
        return bookings
