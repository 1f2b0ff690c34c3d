from datetime import date
from functools import lru_cache
from typing import AsyncIterator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from .config import get_settings
from .database import async_session
from .domain.catalog import SlotCatalog
from .utils.time import today_in


async def get_session() -> AsyncIterator[AsyncSession]:
    async with async_session() as session:
        yield session


@lru_cache
def get_slot_catalog() -> SlotCatalog:
    return SlotCatalog.from_settings(get_settings())


def get_timezone() -> str:
    return get_settings().timezone


def get_today(tz_name: str = Depends(get_timezone)) -> date:
    return today_in(tz_name)
