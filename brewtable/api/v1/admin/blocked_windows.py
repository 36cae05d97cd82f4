from datetime import date
from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from brewtable.api.deps import ensure_can_manage, get_current_manager
from brewtable.db.session import get_db
from brewtable.models.manager import Manager
from brewtable.schemas.blocked_window import BlockedWindow as BlockedWindowSchema, BlockedWindowCreate
from brewtable.utils.bookings import create_blocked_window, list_blocked_windows

router = APIRouter(prefix="/admin/blocked-times", tags=["Admin - Blocked Times"])


# ---------------------------------------------------------------------------
# POST /admin/blocked-times
# ---------------------------------------------------------------------------


@router.post("/", response_model=BlockedWindowSchema, status_code=status.HTTP_201_CREATED)
def block_time(
    data: BlockedWindowCreate,
    db: Session = Depends(get_db),
    current_manager: Manager = Depends(get_current_manager),
):
    """
    Mark a time range as unavailable for booking.

    Reason is one of `peak_hours`, `private_event`, `maintenance`, or `other`
    (with `custom_reason`). Overlapping blocks are fine. Bookings already inside
    the range are **not** cancelled; only later availability checks see the block.
    """
    ensure_can_manage(current_manager, data.location_id)
    return create_blocked_window(
        db,
        location_id=data.location_id,
        block_date=data.date,
        start_time=data.start_time,
        end_time=data.end_time,
        reason=data.reason,
        custom_reason=data.custom_reason,
        created_by=current_manager.id,
    )


# ---------------------------------------------------------------------------
# GET /admin/blocked-times?location_id=&date=
# ---------------------------------------------------------------------------


@router.get("/", response_model=List[BlockedWindowSchema])
def read_blocked_times(
    location_id: int = Query(...),
    date: date = Query(..., description="Day to list (YYYY-MM-DD)"),
    db: Session = Depends(get_db),
    current_manager: Manager = Depends(get_current_manager),
):
    ensure_can_manage(current_manager, location_id)
    return list_blocked_windows(db, location_id, date)
