from datetime import date

import pytest
from slot_booking.utils.time import parse_iso_date, today_in, week_bounds


@pytest.mark.parametrize(
    "day, expected",
    [
        (date(2024, 5, 27), (date(2024, 5, 27), date(2024, 6, 2))),
        (date(2024, 6, 2), (date(2024, 5, 27), date(2024, 6, 2))),
        (date(2024, 6, 3), (date(2024, 6, 3), date(2024, 6, 9))),
        (date(2024, 12, 31), (date(2024, 12, 30), date(2025, 1, 5))),
    ],
)
def test_week_bounds_are_monday_to_sunday(day: date, expected: tuple[date, date]) -> None:
    assert week_bounds(day) == expected


def test_parse_iso_date_is_strict() -> None:
    assert parse_iso_date("2024-06-01") == date(2024, 6, 1)
    for value in ("20240601", "2024-06-01T00:00", "01-06-2024", "", "2024-06-01\n"):
        with pytest.raises(ValueError):
            parse_iso_date(value)


def test_today_in_timezone() -> None:
    assert isinstance(today_in("UTC"), date)
