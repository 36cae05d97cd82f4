"""
Booking error taxonomy.

Engine functions raise these; the FastAPI app maps them to JSON responses in
``brewtable.main`` so routes stay thin. Read paths never raise NotFound, they
return ``None`` and let the route decide.
"""
from __future__ import annotations

from typing import Optional

from fastapi import status

# HTTP status codes per error kind
STATUS_VALIDATION = status.HTTP_422_UNPROCESSABLE_ENTITY
STATUS_NOT_FOUND = status.HTTP_404_NOT_FOUND
STATUS_CONFLICT = status.HTTP_409_CONFLICT
STATUS_SERVICE_UNAVAILABLE = status.HTTP_503_SERVICE_UNAVAILABLE


class BookingError(Exception):
    """Base class for every error the booking engine raises on purpose."""

    kind = "booking_error"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> dict:
        body = {"error": self.kind, "message": self.message}
        if self.field:
            body["field"] = self.field
        return body


class ValidationError(BookingError):
    """Malformed or missing input. ``field`` names the offending input."""

    kind = "validation_error"
    status_code = STATUS_VALIDATION


class NotFound(BookingError):
    kind = "not_found"
    status_code = STATUS_NOT_FOUND


class UnknownLocation(NotFound):
    kind = "unknown_location"

    def __init__(self, location_id: int):
        super().__init__(f"Location {location_id} does not exist", field="location_id")
        self.location_id = location_id


class SlotConflict(BookingError):
    """The requested interval overlaps a live booking or a blocked window."""

    kind = "slot_conflict"
    status_code = STATUS_CONFLICT


class StoreFailure(BookingError):
    """Persistence layer unavailable. Not retried."""

    kind = "store_failure"
    status_code = STATUS_SERVICE_UNAVAILABLE
