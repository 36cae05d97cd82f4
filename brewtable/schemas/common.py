from typing import Optional
from pydantic import BaseModel


# Error responses: every BookingError is rendered with this shape
class ErrorResponse(BaseModel):
    error: str
    message: str
    field: Optional[str] = None


class HealthResponse(BaseModel):
    ok: bool = True
