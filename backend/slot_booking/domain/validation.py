from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, time
from typing import Any, List, Mapping, Optional

from email_validator import EmailNotValidError, validate_email

from ..utils.time import parse_iso_date
from .catalog import SlotCatalog, parse_slot
from .errors import FieldError, ValidationError

PHONE_PATTERN = re.compile(r"^[+]?[1-9]\d{0,15}$")
NAME_LENGTH = (2, 255)
PURPOSE_LENGTH = (5, 1000)


@dataclass(frozen=True)
class BookingRequest:
    """A booking request that passed input validation."""

    name: str
    email: Optional[str]
    phone: str
    purpose: str
    date: date
    time_slot: time


def normalize_phone(value: str) -> str:
    return "".join(value.split())


def normalize_email(value: str) -> str:
    """Return the address with its domain case-folded. Raises EmailNotValidError."""
    return validate_email(value, check_deliverability=False).normalized


def _as_text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def validate_booking_request(data: Mapping[str, Any], catalog: SlotCatalog) -> BookingRequest:
    """
    Check every field of a raw booking payload and normalize it.
    Collects all violations and raises a single ValidationError listing them.
    """
    errors: List[FieldError] = []

    name = (_as_text(data.get("name")) or "").strip()
    if not NAME_LENGTH[0] <= len(name) <= NAME_LENGTH[1]:
        errors.append({"field": "name", "message": "Name must be between 2 and 255 characters long"})

    email: Optional[str] = None
    raw_email = data.get("email")
    if raw_email is not None and not isinstance(raw_email, str):
        errors.append({"field": "email", "message": "Must be a valid email"})
    elif raw_email and raw_email.strip():
        try:
            email = normalize_email(raw_email.strip())
        except EmailNotValidError:
            errors.append({"field": "email", "message": "Must be a valid email"})

    phone = normalize_phone(_as_text(data.get("phone")) or "")
    if not phone:
        errors.append({"field": "phone", "message": "Phone number is required"})
    elif not PHONE_PATTERN.fullmatch(phone):
        errors.append({"field": "phone", "message": "Must be a valid phone number"})

    purpose = (_as_text(data.get("purpose")) or "").strip()
    if not PURPOSE_LENGTH[0] <= len(purpose) <= PURPOSE_LENGTH[1]:
        errors.append({"field": "purpose", "message": "Purpose must be between 5 and 1000 characters long"})

    booking_date: Optional[date] = None
    try:
        booking_date = parse_iso_date(_as_text(data.get("date")) or "")
    except ValueError:
        errors.append({"field": "date", "message": "Must be a valid date (YYYY-MM-DD)"})

    slot: Optional[time] = None
    try:
        slot = parse_slot(_as_text(data.get("time_slot")) or "")
    except ValueError:
        errors.append({"field": "time_slot", "message": "Must be a valid time slot (HH:MM)"})
    else:
        if slot not in catalog:
            errors.append({"field": "time_slot", "message": "Time slot is not offered"})

    if errors or booking_date is None or slot is None:
        raise ValidationError(errors)

    return BookingRequest(
        name=name,
        email=email,
        phone=phone,
        purpose=purpose,
        date=booking_date,
        time_slot=slot,
    )
