from typing import Optional
from pydantic import BaseModel, field_serializer
from datetime import datetime, time


class Location(BaseModel):
    id: int
    name: str
    address: str
    city: str
    state: str
    zip: str
    hours_open: time
    hours_close: time
    num_tables: int = 1
    created_at: Optional[datetime] = None

    @field_serializer("hours_open", "hours_close")
    def hhmm(self, v: time) -> str:
        return v.strftime("%H:%M")

    class Config:
        from_attributes = True
