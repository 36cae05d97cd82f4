from pydantic import BaseModel


# One entry of the fixed 30-minute grid for a location/date (HH:MM strings)
class SlotOut(BaseModel):
    start: str
    end: str
    available: bool
