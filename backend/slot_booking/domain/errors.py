from __future__ import annotations

from typing import List, Optional, TypedDict


class FieldError(TypedDict):
    field: str
    message: str


class BookingError(Exception):
    """Base for every error the booking domain raises."""

    reason = "BookingError"


class ValidationError(BookingError):
    reason = "ValidationError"

    def __init__(self, errors: List[FieldError]) -> None:
        self.errors = list(errors)
        fields = ", ".join(err["field"] for err in self.errors)
        super().__init__(f"invalid fields: {fields}")

    @property
    def fields(self) -> List[str]:
        return [err["field"] for err in self.errors]


class InvalidInput(BookingError):
    """Malformed path or query value (date, id)."""

    reason = "InvalidInput"


class AdmissionRejected(BookingError):
    reason = "AdmissionRejected"


class SlotFull(AdmissionRejected):
    reason = "SlotFull"


class WeeklyLimitExceeded(AdmissionRejected):
    reason = "WeeklyLimitExceeded"


class DailyLimitReached(AdmissionRejected):
    reason = "DailyLimitReached"


class NotFound(BookingError):
    reason = "NotFound"

    def __init__(self, message: str, booking_id: Optional[int] = None) -> None:
        self.booking_id = booking_id
        super().__init__(message)
