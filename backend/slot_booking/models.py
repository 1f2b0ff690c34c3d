from __future__ import annotations

import datetime as dt
from typing import Optional

from sqlalchemy import CheckConstraint, Index
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql.sqltypes import BigInteger, Date, DateTime, Integer, String, Text, Time

# SQLite only autoincrements INTEGER PRIMARY KEY columns.
BigIntId = BigInteger().with_variant(Integer, "sqlite")


class Base(DeclarativeBase):
    pass


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        Index("idx_bookings_date", "date"),
        Index("idx_bookings_date_slot", "date", "time_slot"),
        Index("idx_bookings_phone", "phone"),
        Index("idx_bookings_email", "email"),
    )

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[str] = mapped_column(String(20), nullable=False)
    purpose: Mapped[str] = mapped_column(Text, nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    time_slot: Mapped[dt.time] = mapped_column(Time, nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=False), nullable=False)


class BookingWeekLock(Base):
    """Per-week row that admissions write first so they run one at a time."""

    __tablename__ = "booking_week_locks"
    __table_args__ = (CheckConstraint("admissions >= 0", name="chk_week_locks_admissions"),)

    week_start: Mapped[dt.date] = mapped_column(Date, primary_key=True)
    admissions: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
