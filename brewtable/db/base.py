from brewtable.db.session import Base
from brewtable.models.location import Location
from brewtable.models.booking import Booking, BookingStatus
from brewtable.models.blocked_window import BlockedWindow
from brewtable.models.manager import Manager
