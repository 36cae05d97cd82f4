from sqlalchemy import Column, DateTime, func, Integer, ForeignKey, Date, Time, Text, Index
from sqlalchemy.orm import relationship
from brewtable.db.session import Base

class BlockedWindow(Base):
    __tablename__ = "blocked_times"

    id = Column(Integer, primary_key=True, autoincrement=True)
    location_id = Column(Integer, ForeignKey("locations.id"), nullable=False)
    date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=False)  # [start_time, end_time)
    end_time = Column(Time, nullable=False)
    reason = Column(Text, nullable=True)
    created_by = Column(Integer, ForeignKey("managers.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    location = relationship("Location", back_populates="blocked_windows")
    manager = relationship("Manager")

    __table_args__ = (
        Index("idx_blocked_times_location_date", "location_id", "date"),
    )
