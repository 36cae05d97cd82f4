from brewtable.schemas.common import ErrorResponse, HealthResponse
from brewtable.schemas.location import Location
from brewtable.schemas.slot import SlotOut
from brewtable.schemas.booking import Booking, BookingCreate, BookingCancelResponse
from brewtable.schemas.blocked_window import BlockedWindow, BlockedWindowCreate, BlockReason
from brewtable.schemas.auth import ManagerLogin, Manager, Token
