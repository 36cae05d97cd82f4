from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from brewtable.core.errors import UnknownLocation
from brewtable.db.session import get_db
from brewtable.schemas.location import Location as LocationSchema
from brewtable.utils.bookings import get_location, list_locations

router = APIRouter(prefix="/locations", tags=["Locations"])


@router.get("/", response_model=List[LocationSchema])
def read_locations(db: Session = Depends(get_db)):
    """All locations, ordered by name."""
    return list_locations(db)


@router.get("/{location_id}", response_model=LocationSchema)
def read_location(location_id: int, db: Session = Depends(get_db)):
    location = get_location(db, location_id)
    if not location:
        raise UnknownLocation(location_id)
    return location
