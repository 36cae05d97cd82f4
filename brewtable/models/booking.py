import enum
from sqlalchemy import Column, String, DateTime, func, Integer, ForeignKey, Date, Time, Index, text, Enum as SAEnum
from sqlalchemy.orm import relationship
from brewtable.db.session import Base

class BookingStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"

class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    location_id = Column(Integer, ForeignKey("locations.id"), nullable=False)
    booking_date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=False)  # [start_time, end_time)
    end_time = Column(Time, nullable=False)
    customer_name = Column(String(255), nullable=False)
    customer_email = Column(String(255), nullable=False)
    customer_phone = Column(String(30), nullable=True)
    party_size = Column(Integer, nullable=False, default=6)
    status = Column(
        SAEnum(
            BookingStatus,
            native_enum=False,
            length=20,
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        default=BookingStatus.PENDING,
    )
    payment_id = Column(String(100), nullable=True)
    payment_amount = Column(Integer, nullable=False, default=500)  # cents
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    location = relationship("Location", back_populates="bookings")

    __table_args__ = (
        Index("idx_bookings_location_date", "location_id", "booking_date"),
        Index("idx_bookings_email", "customer_email"),
        # Second line of defence behind the transactional overlap check
        Index(
            "uq_bookings_live_slot",
            "location_id",
            "booking_date",
            "start_time",
            unique=True,
            sqlite_where=text("status != 'cancelled'"),
            postgresql_where=text("status != 'cancelled'"),
        ),
    )
