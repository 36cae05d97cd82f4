from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_serializer, field_validator
from datetime import date, time, datetime

from brewtable.models.booking import BookingStatus


# Booking: Create (POST /bookings)
class BookingCreate(BaseModel):
    location_id: int
    booking_date: date                      # YYYY-MM-DD
    start_time: time                        # HH:MM
    end_time: time
    customer_name: str = Field(min_length=1)
    customer_email: EmailStr
    customer_phone: Optional[str] = None
    party_size: Optional[int] = Field(default=None, ge=1)   # engine default when omitted
    payment_id: Optional[str] = None

    @field_validator("customer_phone", "payment_id", mode="before")
    @classmethod
    def parse_empty_str_to_none(cls, v):
        if v == "":
            return None
        return v


# Booking: Full response (POST /bookings, GET /bookings/{id})
class Booking(BaseModel):
    id: int
    location_id: int
    booking_date: date
    start_time: time
    end_time: time
    customer_name: str
    customer_email: str
    customer_phone: Optional[str] = None
    party_size: int
    status: BookingStatus
    payment_id: Optional[str] = None
    created_at: datetime

    @field_serializer("start_time", "end_time")
    def hhmm(self, v: time) -> str:
        return v.strftime("%H:%M")

    class Config:
        from_attributes = True


# Booking: Cancel response (PATCH /bookings/{id}/cancel)
class BookingCancelResponse(BaseModel):
    id: int
    cancelled: bool
