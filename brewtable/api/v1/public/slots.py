from datetime import date
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from brewtable.db.session import get_db
from brewtable.schemas.slot import SlotOut
from brewtable.utils.bookings import get_available_slots

router = APIRouter(prefix="/slots", tags=["Slots"])


# ---------------------------------------------------------------------------
# GET /slots?location_id=&date=
# ---------------------------------------------------------------------------


@router.get("/", response_model=List[SlotOut])
def read_slots(
    location_id: int = Query(..., description="Location to check"),
    date: date = Query(..., description="Date to check availability (YYYY-MM-DD)"),
    db: Session = Depends(get_db),
):
    """
    Return the 30-minute grid for a location's opening hours on `date`,
    each slot flagged available or not.

    A slot is unavailable when it overlaps a pending/confirmed booking or a
    staff blocked window. An unknown location gives an empty list.
    """
    return get_available_slots(db, location_id, date)
