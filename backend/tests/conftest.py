import os

# Keep imports of the app module away from the production database.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("CREATE_SCHEMA", "0")

from datetime import date, time  # noqa: E402
from typing import AsyncIterator, Callable, Dict, Iterable, List, Optional, Sequence  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from slot_booking.database import create_schema  # noqa: E402
from slot_booking.deps import get_session, get_slot_catalog, get_today  # noqa: E402
from slot_booking.domain.catalog import SlotCatalog, generate_grid  # noqa: E402
from slot_booking.models import Booking  # noqa: E402
from slot_booking.utils.time import utc_now_naive  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402


class InMemoryBookingRepo:
    """BookingRepository kept in a list; records every lock_week call."""

    def __init__(self) -> None:
        self.bookings: List[Booking] = []
        self.locked_weeks: List[date] = []
        self._next_id = 1

    async def lock_week(self, week_start: date) -> None:
        self.locked_weeks.append(week_start)

    async def insert_booking(
        self,
        *,
        name: str,
        email: Optional[str],
        phone: str,
        purpose: str,
        date: date,
        time_slot: time,
    ) -> Booking:
        booking = Booking(
            id=self._next_id,
            name=name,
            email=email,
            phone=phone,
            purpose=purpose,
            date=date,
            time_slot=time_slot,
            created_at=utc_now_naive(),
        )
        self._next_id += 1
        self.bookings.append(booking)
        return booking

    async def count_by_date_and_slot(self, day: date, time_slot: time) -> int:
        return sum(1 for b in self.bookings if b.date == day and b.time_slot == time_slot)

    async def count_by_date(self, day: date) -> int:
        return sum(1 for b in self.bookings if b.date == day)

    async def count_all(self) -> int:
        return len(self.bookings)

    async def counts_by_slot(self, day: date) -> Dict[time, int]:
        counts: Dict[time, int] = {}
        for b in self.bookings:
            if b.date == day:
                counts[b.time_slot] = counts.get(b.time_slot, 0) + 1
        return counts

    async def count_by_identity_and_week(
        self,
        *,
        phone: str,
        email: Optional[str],
        week_start: date,
        week_end: date,
    ) -> int:
        def matches(b: Booking) -> bool:
            if b.phone == phone:
                return True
            return bool(email) and b.email is not None and b.email.lower() == email.lower()

        return sum(1 for b in self.bookings if week_start <= b.date <= week_end and matches(b))

    async def list_by_date_range(
        self,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[Booking]:
        rows = [
            b
            for b in self.bookings
            if (start is None or b.date >= start) and (end is None or b.date <= end)
        ]
        rows.sort(key=lambda b: b.id)
        rows.sort(key=lambda b: b.time_slot)
        rows.sort(key=lambda b: b.date, reverse=True)
        return rows

    async def delete_by_id(self, booking_id: int) -> Optional[Booking]:
        for b in self.bookings:
            if b.id == booking_id:
                self.bookings.remove(b)
                return b
        return None

    async def delete_by_ids(self, booking_ids: Iterable[int]) -> List[Booking]:
        wanted = set(booking_ids)
        removed = sorted((b for b in self.bookings if b.id in wanted), key=lambda b: b.id)
        self.bookings = [b for b in self.bookings if b.id not in wanted]
        return removed


def booking_payload(**overrides: object) -> Dict[str, object]:
    payload: Dict[str, object] = {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "phone": "+15551234567",
        "purpose": "Library visit",
        "date": "2024-06-01",
        "time_slot": "09:00",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def catalog() -> SlotCatalog:
    return SlotCatalog(
        times=generate_grid(time(9, 0), time(18, 0), 30),
        slot_capacity=100,
        daily_capacity=1000,
    )


@pytest.fixture
def memory_repo() -> InMemoryBookingRepo:
    return InMemoryBookingRepo()


@pytest.fixture
def make_payload() -> Callable[..., Dict[str, object]]:
    return booking_payload


@pytest_asyncio.fixture
async def session_factory(tmp_path) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'bookings.db'}")
    await create_schema(engine)
    yield async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    await engine.dispose()


@pytest_asyncio.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
    catalog: SlotCatalog,
) -> AsyncIterator[AsyncClient]:
    from slot_booking.main import app

    async def _session() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = _session
    app.dependency_overrides[get_slot_catalog] = lambda: catalog
    app.dependency_overrides[get_today] = lambda: date(2024, 6, 1)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http:
        yield http
    app.dependency_overrides.clear()
