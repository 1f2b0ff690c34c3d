from datetime import date
from typing import Optional

from fastapi import HTTPException, status

from ..domain.errors import AdmissionRejected, BookingError, InvalidInput, NotFound, ValidationError
from ..utils.time import parse_iso_date


def to_http_exception(exc: BookingError) -> HTTPException:
    if isinstance(exc, ValidationError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"reason": exc.reason, "errors": exc.errors},
        )
    if isinstance(exc, AdmissionRejected):
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"reason": exc.reason, "message": str(exc)},
        )
    if isinstance(exc, NotFound):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, InvalidInput):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")


def parse_date_param(value: Optional[str], name: str) -> Optional[date]:
    """Parse an optional YYYY-MM-DD query/path value, 400 on malformed input."""
    if value is None or value == "":
        return None
    try:
        return parse_iso_date(value)
    except ValueError as exc:
        raise to_http_exception(InvalidInput(f"Invalid {name} format, expected YYYY-MM-DD")) from exc
