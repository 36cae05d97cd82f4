from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from brewtable.core.errors import NotFound
from brewtable.db.session import get_db
from brewtable.schemas.common import ErrorResponse
from brewtable.schemas.booking import (
    BookingCreate,
    Booking as BookingSchema,
    BookingCancelResponse,
)
from brewtable.utils.bookings import cancel_booking, create_booking, get_booking

router = APIRouter(prefix="/bookings", tags=["Bookings"])


# ---------------------------------------------------------------------------
# POST /bookings: reserve a slot
# ---------------------------------------------------------------------------


@router.post(
    "/",
    response_model=BookingSchema,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def create_reservation(data: BookingCreate, db: Session = Depends(get_db)):
    """
    Reserve a table.

    - **payment_id** present → booking is `confirmed`, otherwise `pending`.
    - **party_size** defaults to 6.
    - Returns 409 if the interval was taken or blocked since the slots were read.
    """
    return create_booking(
        db,
        location_id=data.location_id,
        booking_date=data.booking_date,
        start_time=data.start_time,
        end_time=data.end_time,
        customer_name=data.customer_name,
        customer_email=data.customer_email,
        customer_phone=data.customer_phone,
        party_size=data.party_size,
        payment_id=data.payment_id,
    )


# ---------------------------------------------------------------------------
# GET /bookings/{booking_id}
# ---------------------------------------------------------------------------


@router.get("/{booking_id}", response_model=BookingSchema)
def read_booking(booking_id: int, db: Session = Depends(get_db)):
    booking = get_booking(db, booking_id)
    if not booking:
        raise NotFound(f"Booking {booking_id} does not exist", field="booking_id")
    return booking


# ---------------------------------------------------------------------------
# PATCH /bookings/{booking_id}/cancel
# ---------------------------------------------------------------------------


@router.patch("/{booking_id}/cancel", response_model=BookingCancelResponse)
def cancel_reservation(booking_id: int, db: Session = Depends(get_db)):
    """Cancel a booking. Cancelling an already-cancelled booking is a no-op."""
    if not cancel_booking(db, booking_id):
        raise NotFound(f"Booking {booking_id} does not exist", field="booking_id")
    return BookingCancelResponse(id=booking_id, cancelled=True)
