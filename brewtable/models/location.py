from sqlalchemy import Column, String, DateTime, func, Integer, Time, Text
from sqlalchemy.orm import relationship
from brewtable.db.session import Base

class Location(Base):
    __tablename__ = "locations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    address = Column(Text, nullable=False)
    city = Column(String(100), nullable=False)
    state = Column(String(2), nullable=False)
    zip = Column(String(10), nullable=False)
    hours_open = Column(Time, nullable=False)   # local wall clock, no timezone
    hours_close = Column(Time, nullable=False)
    num_tables = Column(Integer, nullable=False, default=1)  # not used by availability
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    bookings = relationship("Booking", back_populates="location")
    blocked_windows = relationship("BlockedWindow", back_populates="location")
