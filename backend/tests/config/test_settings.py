import pytest
from slot_booking import config
from slot_booking.domain.catalog import SlotCatalog


@pytest.fixture(autouse=True)
def _fresh_settings():
    config.get_settings.cache_clear()
    yield
    config.get_settings.cache_clear()


def test_settings_read_catalog_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SLOT_TIMES", "10:00, 11:00 ,12:00")
    monkeypatch.setenv("SLOT_CAPACITY", "1")
    monkeypatch.setenv("DAILY_CAPACITY", "50")
    monkeypatch.setenv("BOOKING_TIMEZONE", "Asia/Tokyo")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = config.get_settings()

    assert settings.slot_times == ["10:00", "11:00", "12:00"]
    assert settings.timezone == "Asia/Tokyo"
    assert settings.log_level == "DEBUG"
    catalog = SlotCatalog.from_settings(settings)
    assert catalog.labels == ("10:00", "11:00", "12:00")
    assert (catalog.slot_capacity, catalog.daily_capacity) == (1, 50)


def test_settings_grid_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SLOT_TIMES", raising=False)
    monkeypatch.setenv("SLOT_START", "08:00")
    monkeypatch.setenv("SLOT_END", "10:00")
    monkeypatch.setenv("SLOT_INTERVAL_MINUTES", "60")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")

    settings = config.get_settings()

    assert SlotCatalog.from_settings(settings).labels == ("08:00", "09:00")
    assert settings.cors_origins == ["https://a.example", "https://b.example"]
