"""
Slot catalog: the fixed, date-independent list of bookable times of a day
together with the per-slot and per-day capacities.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import Iterable, Tuple

from ..config import Settings

SLOT_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def parse_slot(value: str) -> time:
    """Parse a strict ``HH:MM`` 24-hour value. Raises ValueError otherwise."""
    if not SLOT_PATTERN.fullmatch(value):
        raise ValueError(f"invalid time slot: {value!r}")
    hour, minute = value.split(":")
    return time(int(hour), int(minute))


def format_slot(value: time) -> str:
    return value.strftime("%H:%M")


def generate_grid(start: time, end: time, interval_minutes: int) -> Tuple[time, ...]:
    """Times from `start` (inclusive) to `end` (exclusive) every `interval_minutes`."""
    if interval_minutes < 1:
        raise ValueError("interval_minutes must be >= 1")
    anchor = datetime(2000, 1, 1)
    current = datetime.combine(anchor, start)
    stop = datetime.combine(anchor, end)
    slots = []
    while current < stop:
        slots.append(current.time())
        current += timedelta(minutes=interval_minutes)
    return tuple(slots)


@dataclass(frozen=True)
class SlotCatalog:
    times: Tuple[time, ...]
    slot_capacity: int
    daily_capacity: int

    def __post_init__(self) -> None:
        if not self.times:
            raise ValueError("slot catalog must contain at least one time")
        if len(set(self.times)) != len(self.times):
            raise ValueError("slot catalog contains duplicate times")
        if self.slot_capacity < 1:
            raise ValueError("slot_capacity must be >= 1")
        if self.daily_capacity < 1:
            raise ValueError("daily_capacity must be >= 1")

    @classmethod
    def from_times(cls, times: Iterable[str], *, slot_capacity: int, daily_capacity: int) -> "SlotCatalog":
        parsed = tuple(sorted(parse_slot(value) for value in times))
        return cls(times=parsed, slot_capacity=slot_capacity, daily_capacity=daily_capacity)

    @classmethod
    def from_settings(cls, settings: Settings) -> "SlotCatalog":
        if settings.slot_times:
            return cls.from_times(
                settings.slot_times,
                slot_capacity=settings.slot_capacity,
                daily_capacity=settings.daily_capacity,
            )
        times = generate_grid(
            parse_slot(settings.slot_start),
            parse_slot(settings.slot_end),
            settings.slot_interval_minutes,
        )
        return cls(times=times, slot_capacity=settings.slot_capacity, daily_capacity=settings.daily_capacity)

    def __contains__(self, value: object) -> bool:
        return value in self.times

    @property
    def labels(self) -> Tuple[str, ...]:
        return tuple(format_slot(t) for t in self.times)
