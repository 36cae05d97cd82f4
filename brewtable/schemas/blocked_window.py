import enum
from typing import Optional
from pydantic import BaseModel, field_serializer
from datetime import date, time, datetime


class BlockReason(str, enum.Enum):
    PEAK_HOURS = "peak_hours"
    PRIVATE_EVENT = "private_event"
    MAINTENANCE = "maintenance"
    OTHER = "other"            # requires custom_reason


# Blocked window: Create (POST /admin/blocked-times)
class BlockedWindowCreate(BaseModel):
    location_id: int
    date: date
    start_time: time
    end_time: time
    reason: BlockReason = BlockReason.PEAK_HOURS
    custom_reason: Optional[str] = None


class BlockedWindow(BaseModel):
    id: int
    location_id: int
    date: date
    start_time: time
    end_time: time
    reason: Optional[str] = None
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None

    @field_serializer("start_time", "end_time")
    def hhmm(self, v: time) -> str:
        return v.strftime("%H:%M")

    class Config:
        from_attributes = True
