from datetime import date, time

import pytest
from slot_booking.domain.errors import ValidationError
from slot_booking.domain.validation import validate_booking_request


def test_accepts_and_normalizes_valid_request(catalog, make_payload) -> None:
    request = validate_booking_request(
        make_payload(
            name="  Jane Doe  ",
            email="Jane.Doe@EXAMPLE.COM",
            phone=" +1 555 123 4567 ",
            purpose="  Reading room  ",
        ),
        catalog,
    )
    assert request.name == "Jane Doe"
    assert request.email == "Jane.Doe@example.com"
    assert request.phone == "+15551234567"
    assert request.purpose == "Reading room"
    assert request.date == date(2024, 6, 1)
    assert request.time_slot == time(9, 0)


def test_name_of_two_characters_is_accepted(catalog, make_payload) -> None:
    request = validate_booking_request(make_payload(name="Jo"), catalog)
    assert request.name == "Jo"


def test_email_is_optional(catalog, make_payload) -> None:
    assert validate_booking_request(make_payload(email=None), catalog).email is None
    assert validate_booking_request(make_payload(email="   "), catalog).email is None


def test_phone_abc_is_rejected_naming_phone(catalog, make_payload) -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_booking_request(make_payload(phone="abc"), catalog)
    assert excinfo.value.fields == ["phone"]


def test_short_purpose_is_rejected(catalog, make_payload) -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_booking_request(make_payload(purpose="abc"), catalog)
    assert excinfo.value.fields == ["purpose"]


def test_reports_every_violated_field(catalog) -> None:
    payload = {
        "name": "J",
        "email": "not-an-email",
        "phone": "0123",
        "purpose": "",
        "date": "2024-13-01",
        "time_slot": "25:00",
    }
    with pytest.raises(ValidationError) as excinfo:
        validate_booking_request(payload, catalog)
    assert excinfo.value.fields == ["name", "email", "phone", "purpose", "date", "time_slot"]


def test_missing_phone_is_reported(catalog, make_payload) -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_booking_request(make_payload(phone=None), catalog)
    assert excinfo.value.errors == [{"field": "phone", "message": "Phone number is required"}]


@pytest.mark.parametrize("value", ["20240601", "2024-6-1", "2024-02-30", "tomorrow", "2024-06-01\n"])
def test_rejects_non_canonical_dates(catalog, make_payload, value: str) -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_booking_request(make_payload(date=value), catalog)
    assert excinfo.value.fields == ["date"]


def test_rejects_slot_outside_catalog(catalog, make_payload) -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_booking_request(make_payload(time_slot="08:30"), catalog)
    assert excinfo.value.errors[0]["message"] == "Time slot is not offered"


def test_rejects_overlong_name_and_purpose(catalog, make_payload) -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_booking_request(make_payload(name="x" * 256, purpose="y" * 1001), catalog)
    assert excinfo.value.fields == ["name", "purpose"]


def test_non_string_values_are_rejected(catalog, make_payload) -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_booking_request(make_payload(phone=5551234, email=42), catalog)
    assert excinfo.value.fields == ["email", "phone"]


def test_slot_with_trailing_newline_is_rejected(catalog, make_payload) -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_booking_request(make_payload(time_slot="09:00\n"), catalog)
    assert excinfo.value.errors == [{"field": "time_slot", "message": "Must be a valid time slot (HH:MM)"}]
