from datetime import date
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from brewtable.api.deps import ensure_can_manage, get_current_manager
from brewtable.db.session import get_db
from brewtable.models.manager import Manager
from brewtable.schemas.booking import Booking as BookingSchema
from brewtable.utils.bookings import get_bookings_for_date, get_upcoming_bookings

router = APIRouter(prefix="/admin/bookings", tags=["Admin - Bookings"])


@router.get("/", response_model=List[BookingSchema])
def list_day_bookings(
    location_id: int = Query(...),
    date: date = Query(..., description="Day to list (YYYY-MM-DD)"),
    db: Session = Depends(get_db),
    current_manager: Manager = Depends(get_current_manager),
):
    """Pending and confirmed bookings for one location and day, earliest first."""
    ensure_can_manage(current_manager, location_id)
    return get_bookings_for_date(db, location_id, date)


@router.get("/upcoming", response_model=List[BookingSchema])
def list_upcoming_bookings(
    location_id: int = Query(...),
    minutes_ahead: int = Query(10, ge=0, le=24 * 60),
    db: Session = Depends(get_db),
    current_manager: Manager = Depends(get_current_manager),
):
    """Confirmed bookings starting within the next `minutes_ahead` minutes (POS alert feed)."""
    ensure_can_manage(current_manager, location_id)
    return get_upcoming_bookings(db, location_id, minutes_ahead)
